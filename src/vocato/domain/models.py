"""
Domain models for vocabulary study.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .constants import (
    DEFAULT_AUTO_PLAY_INTERVAL,
    DEFAULT_QUESTION_COUNT,
    MAX_AUTO_ADVANCE_SPEED,
    MAX_AUTO_PLAY_INTERVAL,
    MIN_AUTO_ADVANCE_SPEED,
    MIN_AUTO_PLAY_INTERVAL,
)


class WordGroup(str, Enum):
    """Word subsets a study session can be drawn from."""

    ALL = "all"
    NEW = "new"
    LEARNING = "learning"
    REVIEWING = "reviewing"
    MASTERED = "mastered"
    FAVORITES = "favorites"
    DIFFICULT = "difficult"


class QuizMode(str, Enum):
    FLASHCARDS = "flashcards"
    MULTIPLE_CHOICE = "multiple_choice"
    DICTATION = "dictation"
    AUTO_PLAY = "auto_play"


class AutoPlayMode(str, Enum):
    """What the auto-play controller reads aloud on each tick."""

    MEANING_ONLY = "meaning_only"
    TERM_ONLY = "term_only"
    BOTH = "both"
    NONE = "none"


@dataclass
class Word:
    """
    A registered term/meaning pair and its study counters.

    Instances are owned by a WordStore. The engine mutates the objects the
    store hands out and saves them back; it never works on copies.

    Attributes:
        srs_stage: Maturity level 0-3 (0 = new or failed).
        next_review_date: When the word is due again. None means due now.
        importance_count: Difficulty signal, raised on wrong/unknown answers.
        accuracy_count: Correct answers credited at most once per calendar day.
        last_accuracy_date: Day of the last accuracy credit.
    """

    id: str
    term: str
    meaning: str
    created_at: datetime
    memo: str | None = None
    synonyms: str | None = None
    srs_stage: int = 0
    next_review_date: datetime | None = None
    correct_count: int = 0
    wrong_count: int = 0
    importance_count: int = 0
    accuracy_count: int = 0
    last_accuracy_date: date | None = None
    is_favorite: bool = False
    is_mastered: bool = False


@dataclass
class StudySettings:
    """
    Options chosen before a study session starts.

    question_count of 0 means "no limit". A negative count is rejected at
    construction; auto_play_interval is clamped into 1-10 seconds.
    """

    word_group: WordGroup = WordGroup.ALL
    quiz_mode: QuizMode = QuizMode.FLASHCARDS
    question_count: int = DEFAULT_QUESTION_COUNT
    include_favorites: bool = False
    auto_play_mode: AutoPlayMode = AutoPlayMode.BOTH
    auto_play_interval: float = DEFAULT_AUTO_PLAY_INTERVAL

    def __post_init__(self):
        if self.question_count < 0:
            raise ValueError(f"question_count must not be negative, got {self.question_count}")
        self.word_group = WordGroup(self.word_group)
        self.quiz_mode = QuizMode(self.quiz_mode)
        self.auto_play_mode = AutoPlayMode(self.auto_play_mode)
        self.auto_play_interval = clamp_interval(self.auto_play_interval)


def clamp_interval(seconds: float) -> float:
    """Clamp an auto-play interval into the supported range."""
    return float(min(max(seconds, MIN_AUTO_PLAY_INTERVAL), MAX_AUTO_PLAY_INTERVAL))


def clamp_advance_speed(seconds: float) -> float:
    """Clamp a flashcard auto-advance speed into the supported range."""
    return float(min(max(seconds, MIN_AUTO_ADVANCE_SPEED), MAX_AUTO_ADVANCE_SPEED))


@dataclass(frozen=True)
class SortKey:
    """One ordering criterion for WordStore.fetch: a Word attribute name."""

    field: str
    descending: bool = False


@dataclass(frozen=True)
class Snapshot:
    """Persisted progress of an unfinished study session."""

    word_ids: list[str] = field(default_factory=list)
    cursor: int = 0
