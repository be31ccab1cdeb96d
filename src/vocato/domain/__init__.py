# Domain Package
from .errors import (
    InvalidWordError,
    PersistFailure,
    QueryFailure,
    StoreError,
    VocatoError,
)
from .models import AutoPlayMode, QuizMode, Snapshot, SortKey, StudySettings, Word, WordGroup
from .ports import (
    KeyValueStore,
    ProgressStore,
    ScheduledTask,
    SpeechPlayer,
    TaskScheduler,
    WordStore,
)

__all__ = [
    "VocatoError",
    "StoreError",
    "QueryFailure",
    "PersistFailure",
    "InvalidWordError",
    "Word",
    "WordGroup",
    "QuizMode",
    "AutoPlayMode",
    "StudySettings",
    "SortKey",
    "Snapshot",
    "WordStore",
    "SpeechPlayer",
    "KeyValueStore",
    "ProgressStore",
    "ScheduledTask",
    "TaskScheduler",
]
