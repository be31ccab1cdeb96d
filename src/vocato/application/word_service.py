"""Service for creating and maintaining word records."""

import logging
from collections.abc import Callable
from datetime import datetime

from vocato.domain.errors import InvalidWordError
from vocato.domain.models import SortKey, Word
from vocato.domain.ports import WordStore

from .id_service import generate_word_id

logger = logging.getLogger(__name__)


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class WordService:
    """
    CRUD surface in front of a WordStore.

    Unlike the study engine, storage errors raised here propagate: the caller
    is a form or command that must tell the user the word was not saved.
    """

    def __init__(self, store: WordStore, clock: Callable[[], datetime]):
        self._store = store
        self._clock = clock

    def add_word(
        self,
        term: str,
        meaning: str,
        memo: str | None = None,
        synonyms: str | None = None,
    ) -> Word:
        """
        Validate and store a new word.

        Raises:
            InvalidWordError: If the term or meaning is blank.
        """
        term = (term or "").strip()
        meaning = (meaning or "").strip()
        if not term:
            raise InvalidWordError("Term must not be empty.")
        if not meaning:
            raise InvalidWordError("Meaning must not be empty.")

        word = Word(
            id=generate_word_id(),
            term=term,
            meaning=meaning,
            memo=_clean_optional(memo),
            synonyms=_clean_optional(synonyms),
            created_at=self._clock(),
        )
        self._store.save(word)
        logger.info(f"Added word {word.id}: {term}")
        return word

    def get(self, word_id: str) -> Word | None:
        found = self._store.fetch(predicate=lambda w: w.id == word_id, limit=1)
        return found[0] if found else None

    def search(self, text: str = "") -> list[Word]:
        """Words whose term or meaning contains `text`, oldest first."""
        needle = text.strip().lower()

        def predicate(word: Word) -> bool:
            if not needle:
                return True
            return needle in word.term.lower() or needle in word.meaning.lower()

        return self._store.fetch(predicate=predicate, sort=[SortKey("created_at")])

    def delete_word(self, word: Word) -> None:
        self._store.delete(word)
        logger.info(f"Deleted word {word.id}")

    def toggle_favorite(self, word: Word) -> bool:
        word.is_favorite = not word.is_favorite
        self._store.save(word)
        return word.is_favorite
