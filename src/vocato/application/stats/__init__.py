# Application Stats Package
from .service import StudyStatsService
from .tracker import DailyStudyTracker

__all__ = ["StudyStatsService", "DailyStudyTracker"]
