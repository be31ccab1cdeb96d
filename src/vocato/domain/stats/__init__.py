# Domain Stats Package
from .models import StudyStats

__all__ = ["StudyStats"]
