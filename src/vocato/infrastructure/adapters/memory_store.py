"""Process-local WordStore and KeyValueStore."""

from typing import Any

from vocato.domain.models import SortKey, Word
from vocato.domain.ports import KeyValueStore, WordStore
from vocato.domain.query import WordPredicate, apply_query


class InMemoryWordStore(WordStore):
    """Keeps words in a dict; nothing survives the process."""

    def __init__(self, words: list[Word] | None = None):
        self._words: dict[str, Word] = {w.id: w for w in words or []}

    def fetch(
        self,
        predicate: WordPredicate | None = None,
        sort: list[SortKey] | None = None,
        limit: int | None = None,
    ) -> list[Word]:
        return apply_query(self._words.values(), predicate, sort, limit)

    def save(self, word: Word) -> None:
        self._words[word.id] = word

    def delete(self, word: Word) -> None:
        self._words.pop(word.id, None)


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def contains(self, key: str) -> bool:
        return key in self._data
