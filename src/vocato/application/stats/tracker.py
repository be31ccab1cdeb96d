"""Accumulates time spent studying per calendar day."""

import logging
from collections.abc import Callable
from datetime import datetime

from vocato.domain.constants import STUDY_SECONDS_KEY_PREFIX
from vocato.domain.errors import StoreError
from vocato.domain.ports import KeyValueStore

logger = logging.getLogger(__name__)


class DailyStudyTracker:
    """
    Adds study-session durations to a per-day counter in a KeyValueStore.

    Keys look like ``studySeconds_2026-10-19``.
    """

    def __init__(self, kv: KeyValueStore, clock: Callable[[], datetime]):
        self._kv = kv
        self._clock = clock
        self._session_start: datetime | None = None

    def start_session(self) -> None:
        self._session_start = self._clock()

    def end_session(self) -> int:
        """Record the time since start_session(); returns the seconds added."""
        if self._session_start is None:
            return 0
        elapsed = max(0, int((self._clock() - self._session_start).total_seconds()))
        self._session_start = None
        self.add_today(elapsed)
        return elapsed

    def add_today(self, seconds: int) -> None:
        key = self._key_for_today()
        try:
            current = int(self._kv.get(key, 0) or 0)
            self._kv.set(key, current + max(0, seconds))
        except StoreError as e:
            logger.warning(f"Could not record study time: {e}")

    def today_seconds(self) -> int:
        try:
            return int(self._kv.get(self._key_for_today(), 0) or 0)
        except StoreError as e:
            logger.warning(f"Could not read study time: {e}")
            return 0

    def _key_for_today(self) -> str:
        return STUDY_SECONDS_KEY_PREFIX + self._clock().strftime("%Y-%m-%d")
