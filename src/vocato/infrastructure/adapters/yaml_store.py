"""
YAML Word Store: infrastructure adapter for a single YAML word file.

Implements WordStore by keeping the whole collection in memory and rewriting
the file on every change.
"""

import logging
import os
import tempfile
from pathlib import Path

import yaml

from vocato.domain.errors import PersistFailure, QueryFailure
from vocato.domain.models import SortKey, Word
from vocato.domain.ports import WordStore
from vocato.domain.query import WordPredicate, apply_query
from vocato.infrastructure.serialization import record_to_word, word_to_record

logger = logging.getLogger(__name__)


class YamlWordStore(WordStore):
    """
    Stores words in a YAML document of the form ``{"words": [...]}``.

    The file is read lazily on first use. Objects returned by fetch() are
    the cached instances, so callers can mutate and save() them directly.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._words: dict[str, Word] | None = None

    def fetch(
        self,
        predicate: WordPredicate | None = None,
        sort: list[SortKey] | None = None,
        limit: int | None = None,
    ) -> list[Word]:
        return apply_query(self._load().values(), predicate, sort, limit)

    def save(self, word: Word) -> None:
        words = self._load_for_write()
        words[word.id] = word
        self._write(words)

    def delete(self, word: Word) -> None:
        words = self._load_for_write()
        if words.pop(word.id, None) is not None:
            self._write(words)

    def _load(self) -> dict[str, Word]:
        if self._words is not None:
            return self._words

        if not self.path.exists():
            self._words = {}
            return self._words

        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
            records = data.get("words") or []
            words = [record_to_word(r) for r in records]
        except (OSError, yaml.YAMLError, AttributeError, KeyError, TypeError, ValueError) as e:
            raise QueryFailure(f"Cannot read word file {self.path}: {e}") from e

        self._words = {w.id: w for w in words}
        logger.debug(f"Loaded {len(self._words)} words from {self.path}")
        return self._words

    def _load_for_write(self) -> dict[str, Word]:
        try:
            return self._load()
        except QueryFailure as e:
            # Never overwrite a file we could not parse.
            raise PersistFailure(str(e)) from e

    def _write(self, words: dict[str, Word]) -> None:
        document = {"words": [word_to_record(w) for w in words.values()]}
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(document, f, sort_keys=False, allow_unicode=True)
            os.replace(tmp_name, self.path)
        except (OSError, yaml.YAMLError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistFailure(f"Cannot write word file {self.path}: {e}") from e
