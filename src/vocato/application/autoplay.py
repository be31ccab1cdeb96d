"""
Auto-play controller for hands-free study.

Periodically reads the current word aloud and then advances the session.
Built on a TaskScheduler port so the timer mechanism stays swappable; the
state machine below is the contract:

    STOPPED -> PLAYING <-> PAUSED -> STOPPED
"""

import logging
import threading
from collections.abc import Callable
from enum import Enum

from vocato.domain.constants import DEFAULT_AUTO_PLAY_INTERVAL, PLAYBACK_DELAY
from vocato.domain.models import AutoPlayMode, Word, clamp_interval
from vocato.domain.ports import ScheduledTask, TaskScheduler

from .session import StudySession
from .speech import SpeechService

logger = logging.getLogger(__name__)


class AutoPlayState(str, Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class AutoPlayController:
    """
    Cancellable timed auto-advance over a StudySession.

    Each tick runs speak -> wait -> speak (BOTH only) -> wait -> advance.
    The next tick is due one interval after the current one started, but
    never before its advance step has run.

    pause() and stop() cancel every pending step before returning; steps
    that were already dispatched see a newer generation and do nothing.

    Changing mode or interval only takes effect through apply_settings(),
    which restarts a playing controller.
    """

    def __init__(
        self,
        session: StudySession,
        speech: SpeechService,
        scheduler: TaskScheduler,
        mode: AutoPlayMode = AutoPlayMode.BOTH,
        interval: float = DEFAULT_AUTO_PLAY_INTERVAL,
    ):
        self._session = session
        self._speech = speech
        self._scheduler = scheduler
        self._lock = threading.RLock()
        self._generation = 0
        self._pending: dict[int, ScheduledTask] = {}
        self._next_key = 0

        self.mode = AutoPlayMode(mode)
        self.interval = clamp_interval(interval)
        self.state = AutoPlayState.STOPPED
        self.tick_count = 0

    @property
    def is_playing(self) -> bool:
        return self.state == AutoPlayState.PLAYING

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def start(self) -> None:
        with self._lock:
            if self.state == AutoPlayState.PLAYING:
                return
            self.state = AutoPlayState.PLAYING
            self._generation += 1
            self._schedule(self.interval, self._tick)
            logger.info(f"Auto-play started (mode={self.mode.value}, interval={self.interval}s)")

    def pause(self) -> None:
        with self._lock:
            if self.state != AutoPlayState.PLAYING:
                return
            self._cancel_pending()
            self.state = AutoPlayState.PAUSED
            logger.info("Auto-play paused")

    def resume(self) -> None:
        """Restart ticking from zero; no elapsed time carries over."""
        with self._lock:
            if self.state != AutoPlayState.PAUSED:
                return
            self.state = AutoPlayState.PLAYING
            self._generation += 1
            self._schedule(self.interval, self._tick)
            logger.info("Auto-play resumed")

    def toggle(self) -> None:
        with self._lock:
            if self.state == AutoPlayState.PLAYING:
                self.pause()
            elif self.state == AutoPlayState.PAUSED:
                self.resume()
            else:
                self.start()

    def stop(self) -> None:
        with self._lock:
            self._cancel_pending()
            was = self.state
            self.state = AutoPlayState.STOPPED
        self._speech.stop()
        if was != AutoPlayState.STOPPED:
            logger.info("Auto-play stopped")

    def apply_settings(
        self, mode: AutoPlayMode | None = None, interval: float | None = None
    ) -> None:
        with self._lock:
            if mode is not None:
                self.mode = AutoPlayMode(mode)
            if interval is not None:
                self.interval = clamp_interval(interval)
            if self.state == AutoPlayState.PLAYING:
                self.stop()
                self.start()

    def __enter__(self) -> "AutoPlayController":
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------

    def _tick(self) -> None:
        self.tick_count += 1

        word = self._session.current_word
        if word is None:
            self._schedule(self.interval, self._tick)
            return

        logger.debug(f"Auto-play tick {self.tick_count} on {word.id}")
        advance_delay = self._play(word)
        rest = max(self.interval - advance_delay, 0.0)
        self._schedule(advance_delay, lambda: self._advance(rest))

    def _advance(self, rest: float) -> None:
        # Ticks never overlap: the next one is only armed once this word is done.
        self._session.advance()
        self._schedule(rest, self._tick)

    def _play(self, word: Word) -> float:
        """Start playback for a word; returns the delay before advancing."""
        if self.mode == AutoPlayMode.MEANING_ONLY:
            self._speech.speak_meaning(word.meaning)
        elif self.mode == AutoPlayMode.TERM_ONLY:
            self._speech.speak_term(word.term)
        elif self.mode == AutoPlayMode.BOTH:
            self._speech.speak_term(word.term)
            self._schedule(PLAYBACK_DELAY, lambda: self._speech.speak_meaning(word.meaning))
            return PLAYBACK_DELAY * 2
        return PLAYBACK_DELAY

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def _schedule(self, delay: float, step: Callable[[], object]) -> None:
        key = self._next_key
        self._next_key += 1
        generation = self._generation

        def run() -> None:
            with self._lock:
                self._pending.pop(key, None)
                if generation != self._generation or self.state != AutoPlayState.PLAYING:
                    return
                step()

        self._pending[key] = self._scheduler.schedule(delay, run)

    def _cancel_pending(self) -> None:
        self._generation += 1
        for task in self._pending.values():
            task.cancel()
        self._pending.clear()
