"""Multiple-choice option sampling."""

import logging
import random

from vocato.domain.constants import DEFAULT_OPTION_COUNT, POOL_SCAN_LIMIT
from vocato.domain.errors import StoreError
from vocato.domain.models import Word
from vocato.domain.ports import WordStore

logger = logging.getLogger(__name__)


class DistractorSampler:
    """
    Builds option sets of one correct meaning plus unrelated meanings.

    The random source is injected so tests can fix the sequence.
    """

    def __init__(self, store: WordStore, rng: random.Random | None = None):
        self._store = store
        self._rng = rng or random.Random()

    def options(
        self,
        correct: Word,
        pool: list[Word] | None = None,
        count: int = DEFAULT_OPTION_COUNT,
    ) -> list[str]:
        """
        Return up to `count` distinct meanings in random order.

        The correct word's meaning is included once (when non-empty). Fewer
        than `count` options come back when the pool runs out of distinct
        meanings, so callers must handle short option sets.
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")

        options: list[str] = []
        if correct.meaning:
            options.append(correct.meaning)

        if pool is None:
            pool = self._fetch_pool()
        candidates = list(pool[:POOL_SCAN_LIMIT])
        self._rng.shuffle(candidates)

        for candidate in candidates:
            if len(options) >= count:
                break
            if candidate.id == correct.id:
                continue
            meaning = candidate.meaning
            if meaning and meaning not in options:
                options.append(meaning)

        self._rng.shuffle(options)
        return options

    def _fetch_pool(self) -> list[Word]:
        try:
            return self._store.fetch(limit=POOL_SCAN_LIMIT)
        except StoreError as e:
            logger.warning(f"Could not load distractor pool: {e}")
            return []
