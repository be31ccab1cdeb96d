"""Language-aware text-to-speech on top of a SpeechPlayer port."""

import logging

from vocato.domain.constants import DEFAULT_LEARNING_LANGUAGE, DEFAULT_SYSTEM_LANGUAGE
from vocato.domain.ports import SpeechPlayer

logger = logging.getLogger(__name__)

# Voice used for terms, keyed by the language being learned.
TERM_VOICES = {"ko": "ko-KR", "ja": "ja-JP", "zh": "zh-CN"}
DEFAULT_TERM_VOICE = "en-US"

# Voice used for meanings, keyed by the learner's own language.
MEANING_VOICES = {"en": "en-US", "ja": "ja-JP", "zh": "zh-CN"}
DEFAULT_MEANING_VOICE = "ko-KR"


class SpeechService:
    """Speaks terms in the learning language and meanings in the system language."""

    def __init__(
        self,
        player: SpeechPlayer,
        learning_language: str = DEFAULT_LEARNING_LANGUAGE,
        system_language: str = DEFAULT_SYSTEM_LANGUAGE,
    ):
        self._player = player
        self.learning_language = learning_language
        self.system_language = system_language

    @property
    def term_voice(self) -> str:
        return TERM_VOICES.get(self.learning_language, DEFAULT_TERM_VOICE)

    @property
    def meaning_voice(self) -> str:
        return MEANING_VOICES.get(self.system_language, DEFAULT_MEANING_VOICE)

    def speak(self, text: str, language_code: str) -> None:
        if not text or not text.strip():
            return
        logger.debug(f"Speaking [{language_code}]: {text}")
        self._player.speak(text, language_code)

    def speak_term(self, text: str) -> None:
        self.speak(text, self.term_voice)

    def speak_meaning(self, text: str) -> None:
        self.speak(text, self.meaning_voice)

    def stop(self) -> None:
        self._player.stop()
