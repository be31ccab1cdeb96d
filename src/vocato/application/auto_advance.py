"""Hands-free flashcard flipping: advance the session on a repeating timer."""

import logging
import threading

from vocato.domain.constants import DEFAULT_AUTO_ADVANCE_SPEED
from vocato.domain.models import clamp_advance_speed
from vocato.domain.ports import ScheduledTask, TaskScheduler

from .session import StudySession

logger = logging.getLogger(__name__)


class FlashcardAutoAdvance:
    """
    Moves a flashcard session to the next card every `speed` seconds.

    Cards are not graded. The timer stops itself once the session cannot
    advance any further.
    """

    def __init__(
        self,
        session: StudySession,
        scheduler: TaskScheduler,
        speed: float = DEFAULT_AUTO_ADVANCE_SPEED,
    ):
        self._session = session
        self._scheduler = scheduler
        self._lock = threading.RLock()
        self._task: ScheduledTask | None = None
        self._generation = 0

        self.speed = clamp_advance_speed(speed)
        self.is_running = False

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            self.is_running = True
            self._generation += 1
            self._arm()
            logger.info(f"Flashcard auto-advance every {self.speed}s")

    def stop(self) -> None:
        with self._lock:
            self._generation += 1
            if self._task is not None:
                self._task.cancel()
                self._task = None
            if self.is_running:
                logger.info("Flashcard auto-advance stopped")
            self.is_running = False

    def __enter__(self) -> "FlashcardAutoAdvance":
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    def _arm(self) -> None:
        generation = self._generation

        def fire() -> None:
            with self._lock:
                if generation != self._generation or not self.is_running:
                    return
                self._task = None
                if self._session.advance():
                    self._arm()
                else:
                    self.stop()

        self._task = self._scheduler.schedule(self.speed, fire)
