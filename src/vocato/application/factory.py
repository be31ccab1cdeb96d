"""
Adapter Factory
Centralizes the wiring of storage, speech and timer adapters from config.
"""

import random
from collections.abc import Callable
from datetime import datetime

from vocato.application.auto_advance import FlashcardAutoAdvance
from vocato.application.autoplay import AutoPlayController
from vocato.application.config import AppConfig
from vocato.application.distractors import DistractorSampler
from vocato.application.session import StudySession
from vocato.application.speech import SpeechService
from vocato.application.stats import DailyStudyTracker, StudyStatsService
from vocato.application.word_service import WordService
from vocato.domain.errors import StoreError
from vocato.domain.models import StudySettings
from vocato.domain.ports import KeyValueStore, SpeechPlayer, TaskScheduler, WordStore
from vocato.infrastructure.adapters import (
    CommandSpeechPlayer,
    JsonKeyValueStore,
    KeyValueProgressStore,
    NullSpeechPlayer,
    YamlWordStore,
)
from vocato.infrastructure.timers import ThreadingTaskScheduler


def local_now() -> datetime:
    """Timezone-aware current time in the local zone."""
    return datetime.now().astimezone()


class Services:
    """
    Builds the engine's components for one process.

    Adapters are created once and shared, so every component sees the same
    word objects.
    """

    def __init__(
        self,
        config: AppConfig,
        store: WordStore | None = None,
        kv: KeyValueStore | None = None,
        player: SpeechPlayer | None = None,
        scheduler: TaskScheduler | None = None,
        clock: Callable[[], datetime] = local_now,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.clock = clock
        self.rng = rng or random.Random()
        self.store = store or YamlWordStore(config.words_path)
        self.kv = kv or JsonKeyValueStore(config.state_path)
        self.player = player or get_speech_player(config)
        self.scheduler = scheduler or ThreadingTaskScheduler()

    def words(self) -> WordService:
        return WordService(self.store, self.clock)

    def session(
        self,
        settings: StudySettings | None = None,
        on_notice: Callable[[StoreError], None] | None = None,
        load: bool = True,
    ) -> StudySession:
        return StudySession(
            self.store,
            KeyValueProgressStore(self.kv),
            self.clock,
            settings=settings or self.config.study_settings(),
            on_notice=on_notice,
            load=load,
        )

    def speech(self) -> SpeechService:
        return SpeechService(
            self.player,
            learning_language=self.config.learning_language,
            system_language=self.config.system_language,
        )

    def autoplay(self, session: StudySession) -> AutoPlayController:
        return AutoPlayController(
            session,
            self.speech(),
            self.scheduler,
            mode=session.settings.auto_play_mode,
            interval=session.settings.auto_play_interval,
        )

    def auto_advance(
        self, session: StudySession, speed: float | None = None
    ) -> FlashcardAutoAdvance:
        return FlashcardAutoAdvance(
            session,
            self.scheduler,
            speed=self.config.auto_advance_speed if speed is None else speed,
        )

    def distractors(self) -> DistractorSampler:
        return DistractorSampler(self.store, self.rng)

    def tracker(self) -> DailyStudyTracker:
        return DailyStudyTracker(self.kv, self.clock)

    def stats(self) -> StudyStatsService:
        return StudyStatsService(self.store, self.clock, tracker=self.tracker())


def get_speech_player(config: AppConfig) -> SpeechPlayer:
    """
    Returns the SpeechPlayer implementation selected by config.
    """
    if config.speech_command:
        return CommandSpeechPlayer(config.speech_command)
    return NullSpeechPlayer()
