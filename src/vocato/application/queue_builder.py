"""
Queue builder for study sessions.

Builds ordered study queues by:
1. Selecting words of the requested group (optionally unioned with favorites)
2. Keeping only words that are due
3. Ordering hardest-first, oldest-first, and truncating to the question count
"""

import logging
from collections.abc import Callable
from datetime import datetime

from vocato.domain.errors import StoreError
from vocato.domain.models import SortKey, StudySettings, Word, WordGroup
from vocato.domain.ports import WordStore
from vocato.domain.query import WordPredicate, apply_query

logger = logging.getLogger(__name__)

# Importance descending (hardest first), then creation ascending (oldest first).
QUEUE_ORDER = [
    SortKey("importance_count", descending=True),
    SortKey("created_at"),
]


def matches_group(word: Word, group: WordGroup) -> bool:
    """Derived group membership of a word."""
    if group == WordGroup.NEW:
        return word.srs_stage == 0
    if group == WordGroup.LEARNING:
        return word.srs_stage == 1
    if group == WordGroup.REVIEWING:
        return word.srs_stage == 2
    if group == WordGroup.MASTERED:
        return word.is_mastered
    if group == WordGroup.FAVORITES:
        return word.is_favorite
    if group == WordGroup.DIFFICULT:
        return word.importance_count > 0
    return True


def is_due(word: Word, now: datetime) -> bool:
    """A word is due when it has no review date or the date has passed."""
    return word.next_review_date is None or word.next_review_date <= now


def queue_predicate(settings: StudySettings, now: datetime) -> WordPredicate:
    """
    Compose the candidate filter for a study queue.

    With include_favorites the candidate set is the union of the group and
    the favorites, not a further restriction. The due gate always applies.
    """
    group = settings.word_group
    union_favorites = settings.include_favorites and group != WordGroup.FAVORITES

    def predicate(word: Word) -> bool:
        selected = matches_group(word, group) or (union_favorites and word.is_favorite)
        return selected and is_due(word, now)

    return predicate


def queue_limit(settings: StudySettings) -> int | None:
    """Number of words to keep, or None for all candidates."""
    return settings.question_count if settings.question_count > 0 else None


def build_queue(words: list[Word], settings: StudySettings, now: datetime) -> list[Word]:
    """
    Select and order the words to study from an in-memory collection.

    Args:
        words: Every word known to the caller
        settings: Group, favorites and question-count options
        now: Reference time for the due gate

    Returns:
        Ordered list of the due words (references, not copies)
    """
    return apply_query(
        words,
        predicate=queue_predicate(settings, now),
        sort=QUEUE_ORDER,
        limit=queue_limit(settings),
    )


class QueueBuilder:
    """
    Builds study queues straight from a WordStore.

    A failing store degrades to an empty queue; callers treat that as
    "nothing to study", never as an error.
    """

    def __init__(self, store: WordStore, clock: Callable[[], datetime]):
        self._store = store
        self._clock = clock

    def build(self, settings: StudySettings) -> list[Word]:
        now = self._clock()
        try:
            queue = self._store.fetch(
                predicate=queue_predicate(settings, now),
                sort=QUEUE_ORDER,
                limit=queue_limit(settings),
            )
        except StoreError as e:
            logger.warning(f"Could not load study queue, treating as empty: {e}")
            return []

        logger.info(
            f"Built study queue of {len(queue)} words "
            f"(group={settings.word_group.value}, count={settings.question_count}, "
            f"include_favorites={settings.include_favorites})"
        )
        return queue
