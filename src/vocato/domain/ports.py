"""
Ports (interfaces) for the study engine.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .models import Snapshot, SortKey, Word
from .query import WordPredicate


class WordStore(ABC):
    """
    Port for the persisted word collection.

    Implementations:
        - YamlWordStore: A single YAML file on disk.
        - InMemoryWordStore: Process-local dictionary.
    """

    @abstractmethod
    def fetch(
        self,
        predicate: WordPredicate | None = None,
        sort: list[SortKey] | None = None,
        limit: int | None = None,
    ) -> list[Word]:
        """
        Return stored words matching the predicate, ordered and truncated.

        The returned objects are the store's own instances; mutating one and
        passing it to save() updates the record.

        Raises:
            QueryFailure: If the backing storage cannot be read.
        """
        pass

    @abstractmethod
    def save(self, word: Word) -> None:
        """
        Insert or update a word.

        Raises:
            PersistFailure: If the backing storage cannot be written.
        """
        pass

    @abstractmethod
    def delete(self, word: Word) -> None:
        """Remove a word. Unknown words are ignored."""
        pass


class SpeechPlayer(ABC):
    """Port for text-to-speech playback. Fire-and-forget."""

    @abstractmethod
    def speak(self, text: str, language_code: str) -> None:
        pass

    @abstractmethod
    def stop(self) -> None:
        pass


class KeyValueStore(ABC):
    """Port for small pieces of durable app state (preferences, snapshots)."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def contains(self, key: str) -> bool:
        pass


class ProgressStore(ABC):
    """Port for persisting the progress of an unfinished study session."""

    @abstractmethod
    def save_snapshot(self, word_ids: list[str], cursor: int) -> None:
        pass

    @abstractmethod
    def load_snapshot(self) -> Snapshot | None:
        pass

    @abstractmethod
    def clear_snapshot(self) -> None:
        pass

    @abstractmethod
    def has_snapshot(self) -> bool:
        pass


class ScheduledTask(ABC):
    """Handle for a callback scheduled through a TaskScheduler."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        pass


class TaskScheduler(ABC):
    """Port for running a callback once after a delay."""

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        pass
