"""
In-memory evaluation of WordStore queries.

Adapters that keep their words in Python objects share this helper so that
predicate, sort and limit behave identically across backends.
"""

from collections.abc import Callable, Iterable
from datetime import datetime

from .models import SortKey, Word

WordPredicate = Callable[[Word], bool]


def apply_query(
    words: Iterable[Word],
    predicate: WordPredicate | None = None,
    sort: list[SortKey] | None = None,
    limit: int | None = None,
) -> list[Word]:
    """
    Filter, order and truncate words.

    Sorting is applied key by key from the last to the first so that Python's
    stable sort yields the combined ordering. None values always sort last.
    """
    result = [w for w in words if predicate is None or predicate(w)]

    for key in reversed(sort or []):
        present = [w for w in result if getattr(w, key.field) is not None]
        missing = [w for w in result if getattr(w, key.field) is None]
        present.sort(key=lambda w: _sortable(getattr(w, key.field)), reverse=key.descending)
        result = present + missing

    if limit is not None and limit >= 0:
        result = result[:limit]
    return result


def _sortable(value):
    # Mixed naive/aware datetimes cannot be compared directly.
    if isinstance(value, datetime):
        return value.timestamp()
    return value
