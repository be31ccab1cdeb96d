"""
Domain models for study statistics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field

from vocato.domain.models import Word, WordGroup


@dataclass
class StudyStats:
    """
    Snapshot of the learner's progress, as shown on a statistics screen.

    Attributes:
        today_count: Words whose next review falls on today's calendar day.
        accuracy: Correct / (correct + wrong) over today's words (0.0-1.0).
        stage_counts: Number of words per SRS stage (0-3).
        group_counts: Number of words in each word group, due or not.
        recent_words: Words with the latest next review date first.
        study_seconds_today: Time spent in study sessions today.
    """

    today_count: int = 0
    accuracy: float = 0.0
    total_words: int = 0
    favorite_words: int = 0
    stage_counts: dict[int, int] = field(default_factory=lambda: {0: 0, 1: 0, 2: 0, 3: 0})
    group_counts: dict[WordGroup, int] = field(default_factory=lambda: dict.fromkeys(WordGroup, 0))
    recent_words: list[Word] = field(default_factory=list)
    study_seconds_today: int = 0
