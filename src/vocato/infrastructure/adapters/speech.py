"""SpeechPlayer adapters."""

import logging
import shlex
import subprocess

from vocato.domain.ports import SpeechPlayer

logger = logging.getLogger(__name__)

STOP_TIMEOUT = 1.0  # seconds to wait for an interrupted utterance to exit


class NullSpeechPlayer(SpeechPlayer):
    """Discards speech; used when no TTS command is configured."""

    def speak(self, text: str, language_code: str) -> None:
        logger.debug(f"(silent) [{language_code}] {text}")

    def stop(self) -> None:
        pass


class CommandSpeechPlayer(SpeechPlayer):
    """
    Speaks by spawning a TTS command, e.g. ``espeak`` or ``say``.

    The language is passed as ``-v <lang>`` using the primary subtag of the
    BCP-47 code (``en-US`` -> ``en``). Starting a new utterance interrupts
    the previous one.
    """

    def __init__(self, command: str = "espeak"):
        self.command = shlex.split(command)
        self._process: subprocess.Popen | None = None

    def speak(self, text: str, language_code: str) -> None:
        self.stop()
        voice = language_code.split("-")[0]
        try:
            self._process = subprocess.Popen(
                [*self.command, "-v", voice, text],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.warning(f"Speech command {self.command[0]!r} failed: {e}")
            self._process = None

    def stop(self) -> None:
        if self._process is not None and self._process.poll() is None:
            self._process.terminate()
            try:
                self._process.wait(timeout=STOP_TIMEOUT)
            except subprocess.TimeoutExpired:
                self._process.kill()
                self._process.wait()
        self._process = None
