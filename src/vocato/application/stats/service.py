"""
Study Stats Service: application layer orchestrator.

Coordinates reading words from the repository and summarising progress.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from vocato.domain.constants import RECENT_WORDS_LIMIT
from vocato.domain.errors import StoreError
from vocato.domain.models import SortKey, Word
from vocato.domain.ports import WordStore
from vocato.domain.stats.models import StudyStats

from ..queue_builder import matches_group
from .tracker import DailyStudyTracker

logger = logging.getLogger(__name__)


class StudyStatsService:
    """
    Application service for progress statistics.

    Each section is loaded independently; a failing query leaves that
    section at its empty default instead of failing the whole screen.
    """

    def __init__(
        self,
        store: WordStore,
        clock: Callable[[], datetime],
        tracker: DailyStudyTracker | None = None,
    ):
        self._store = store
        self._clock = clock
        self._tracker = tracker

    def load(self) -> StudyStats:
        stats = StudyStats()
        self._load_today(stats)
        self._load_overall(stats)
        self._load_recent(stats)
        if self._tracker is not None:
            stats.study_seconds_today = self._tracker.today_seconds()
        return stats

    def _load_today(self, stats: StudyStats) -> None:
        """Words rescheduled onto today's calendar day, and their accuracy."""
        now = self._clock()
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)

        def scheduled_today(word: Word) -> bool:
            due = word.next_review_date
            return due is not None and start <= due < end

        words = self._safe_fetch(predicate=scheduled_today)
        stats.today_count = len(words)

        attempts = sum(w.correct_count + w.wrong_count for w in words)
        if attempts > 0:
            stats.accuracy = sum(w.correct_count for w in words) / attempts

    def _load_overall(self, stats: StudyStats) -> None:
        words = self._safe_fetch()
        stats.total_words = len(words)
        stats.favorite_words = sum(1 for w in words if w.is_favorite)
        for word in words:
            if word.srs_stage in stats.stage_counts:
                stats.stage_counts[word.srs_stage] += 1
        for group in stats.group_counts:
            stats.group_counts[group] = sum(1 for w in words if matches_group(w, group))

    def _load_recent(self, stats: StudyStats) -> None:
        stats.recent_words = self._safe_fetch(
            sort=[SortKey("next_review_date", descending=True)],
            limit=RECENT_WORDS_LIMIT,
        )

    def _safe_fetch(self, **query) -> list[Word]:
        try:
            return self._store.fetch(**query)
        except StoreError as e:
            logger.warning(f"Stats query failed, showing no data: {e}")
            return []
