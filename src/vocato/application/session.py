"""
Study session engine.

Tracks an ordered queue of words and a cursor into it, records answers
through the review scheduler, maintains the per-word importance and accuracy
counters, and persists/restores unfinished progress.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum

from vocato.domain.constants import MASTERY_ACCURACY_THRESHOLD
from vocato.domain.errors import StoreError
from vocato.domain.models import StudySettings, Word
from vocato.domain.ports import ProgressStore, WordStore

from .queue_builder import QueueBuilder
from .quiz import QuizPolicy
from .scheduler import next_review_date, next_stage

logger = logging.getLogger(__name__)


class SessionLifecycle(str, Enum):
    ACTIVE = "active"
    PAUSED_PERSISTED = "paused_persisted"
    COMPLETED = "completed"


class StudySession:
    """
    Mutable state of one study screen.

    Storage failures never escape: reads degrade to empty results and failed
    writes keep the in-memory change, are logged, and are forwarded to
    `on_notice` so the caller can show a dismissible message.
    """

    def __init__(
        self,
        store: WordStore,
        progress: ProgressStore,
        clock: Callable[[], datetime],
        settings: StudySettings | None = None,
        builder: QueueBuilder | None = None,
        on_notice: Callable[[StoreError], None] | None = None,
        load: bool = True,
    ):
        """
        Args:
            store: Word repository (port).
            progress: Snapshot storage for unfinished sessions (port).
            clock: Returns "now"; injected so tests control time.
            settings: Study options; defaults to StudySettings().
            builder: Optional custom queue builder over `store`.
            on_notice: Receives non-fatal persistence failures.
            load: Build the initial queue immediately.
        """
        self._store = store
        self._progress = progress
        self._clock = clock
        self._builder = builder or QueueBuilder(store, clock)
        self._on_notice = on_notice

        self.settings = settings or StudySettings()
        self.queue: list[Word] = []
        self.cursor = 0
        self.lifecycle = SessionLifecycle.ACTIVE
        self.is_finished = False
        self.has_unfinished_session = self._check_unfinished_session()

        if load:
            self.load_queue()

    # ------------------------------------------------------------------
    # Queue
    # ------------------------------------------------------------------

    def load_queue(self, settings: StudySettings | None = None) -> list[Word]:
        """Rebuild the queue from the store and start from the first word."""
        if settings is not None:
            self.settings = settings
        self.queue = self._builder.build(self.settings)
        self.cursor = 0
        self.is_finished = False
        self.lifecycle = SessionLifecycle.ACTIVE
        return self.queue

    @property
    def current_word(self) -> Word | None:
        if 0 <= self.cursor < len(self.queue):
            return self.queue[self.cursor]
        return None

    @property
    def is_empty(self) -> bool:
        return not self.queue

    @property
    def is_at_end(self) -> bool:
        return self.cursor >= len(self.queue) - 1

    def advance(self) -> bool:
        """
        Move the cursor to the next word.

        Saturates at the last index instead of wrapping. Returns True if the
        cursor moved; when it could not move the session is marked finished.
        """
        target = min(self.cursor + 1, max(len(self.queue) - 1, 0))
        if target == self.cursor:
            self.is_finished = True
            return False
        self.cursor = target
        return True

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    def record_answer(self, correct: bool) -> None:
        """
        Grade the current word and move on.

        Updates the lifetime tallies, the SRS stage and the next review date,
        persists the word, then advances. Accuracy credit is not handled here;
        see submit().
        """
        word = self.current_word
        if word is None:
            return

        now = self._clock()
        if correct:
            word.correct_count += 1
        else:
            word.wrong_count += 1
        word.srs_stage = next_stage(word.srs_stage, correct)
        word.next_review_date = next_review_date(word.srs_stage, now)
        logger.debug(
            f"Answered {word.id} correct={correct}: stage={word.srs_stage}, "
            f"next review {word.next_review_date.isoformat()}"
        )
        self._save(word)
        self.advance()

    def submit(self, correct: bool, policy: QuizPolicy) -> None:
        """Apply a quiz mode's policy to an answer for the current word."""
        word = self.current_word
        if word is None:
            return

        if correct and policy.credit_accuracy:
            self.increase_accuracy(word)
        if not correct and policy.bump_importance_on_wrong:
            self.increase_importance(word)

        if policy.records_answer:
            self.record_answer(correct)
        else:
            self.advance()

    def dont_know(self, policy: QuizPolicy) -> None:
        """The learner gave up on the current word."""
        self.submit(False, policy)

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def increase_importance(self, word: Word) -> None:
        word.importance_count += 1
        self._save(word)

    def decrease_importance(self, word: Word) -> None:
        if word.importance_count > 0:
            word.importance_count -= 1
            self._save(word)

    def increase_accuracy(self, word: Word, now: datetime | None = None) -> None:
        """
        Credit a correct answer towards mastery, at most once per calendar day.

        Reaching the mastery threshold marks the word as mastered.
        """
        today = (now or self._clock()).date()
        if word.last_accuracy_date == today:
            return

        word.accuracy_count += 1
        word.last_accuracy_date = today
        if word.accuracy_count >= MASTERY_ACCURACY_THRESHOLD:
            if not word.is_mastered:
                logger.info(f"Word {word.id} mastered after {word.accuracy_count} days")
            word.is_mastered = True
        self._save(word)

    def toggle_mastered(self, word: Word) -> None:
        word.is_mastered = not word.is_mastered
        self._save(word)

    # ------------------------------------------------------------------
    # Progress persistence
    # ------------------------------------------------------------------

    def persist_progress(self) -> None:
        """Snapshot the queue and cursor so the session can be resumed later."""
        word_ids = [w.id for w in self.queue]
        try:
            self._progress.save_snapshot(word_ids, self.cursor)
        except StoreError as e:
            self._report(e)
        self.has_unfinished_session = True
        self.lifecycle = SessionLifecycle.PAUSED_PERSISTED
        logger.info(f"Saved session progress at {self.cursor + 1}/{len(word_ids)}")

    def restore(self) -> bool:
        """
        Resume a previously persisted session.

        Words deleted since the snapshot are dropped silently and the cursor
        is clamped to the remaining queue. Returns False when there is nothing
        to restore.
        """
        try:
            snapshot = self._progress.load_snapshot()
        except StoreError as e:
            logger.warning(f"Could not read session snapshot: {e}")
            return False
        if snapshot is None:
            return False

        wanted = set(snapshot.word_ids)
        try:
            found = self._store.fetch(predicate=lambda w: w.id in wanted)
        except StoreError as e:
            logger.warning(f"Could not resolve session words, restoring empty queue: {e}")
            found = []

        by_id = {w.id: w for w in found}
        self.queue = [by_id[wid] for wid in snapshot.word_ids if wid in by_id]
        dropped = len(snapshot.word_ids) - len(self.queue)
        if dropped:
            logger.debug(f"Dropped {dropped} deleted words from restored session")

        self.cursor = min(max(snapshot.cursor, 0), max(len(self.queue) - 1, 0))
        self.is_finished = False
        self.has_unfinished_session = False
        self.lifecycle = SessionLifecycle.ACTIVE
        logger.info(f"Restored session at {self.cursor + 1}/{len(self.queue)}")
        return True

    def discard_progress(self) -> None:
        """Forget the saved snapshot without touching the current queue."""
        try:
            self._progress.clear_snapshot()
        except StoreError as e:
            self._report(e)
        self.has_unfinished_session = False

    def complete(self) -> list[Word]:
        """Discard the saved snapshot and build a fresh queue."""
        self.discard_progress()
        logger.info("Study session completed")

        self.queue = self._builder.build(self.settings)
        self.cursor = 0
        self.is_finished = False
        self.lifecycle = SessionLifecycle.COMPLETED
        return self.queue

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_unfinished_session(self) -> bool:
        try:
            return self._progress.has_snapshot()
        except StoreError as e:
            logger.warning(f"Could not check for an unfinished session: {e}")
            return False

    def _save(self, word: Word) -> None:
        try:
            self._store.save(word)
        except StoreError as e:
            self._report(e)

    def _report(self, error: StoreError) -> None:
        logger.warning(f"Change kept in memory but not saved: {error}")
        if self._on_notice is not None:
            self._on_notice(error)
