"""Conversion between Word objects and plain records for file storage."""

from datetime import date, datetime
from typing import Any

from vocato.domain.models import Word


def word_to_record(word: Word) -> dict[str, Any]:
    return {
        "id": word.id,
        "term": word.term,
        "meaning": word.meaning,
        "memo": word.memo,
        "synonyms": word.synonyms,
        "srs_stage": word.srs_stage,
        "next_review_date": _iso(word.next_review_date),
        "correct_count": word.correct_count,
        "wrong_count": word.wrong_count,
        "importance_count": word.importance_count,
        "accuracy_count": word.accuracy_count,
        "last_accuracy_date": _iso(word.last_accuracy_date),
        "is_favorite": word.is_favorite,
        "is_mastered": word.is_mastered,
        "created_at": _iso(word.created_at),
    }


def record_to_word(record: dict[str, Any]) -> Word:
    """
    Build a Word from a stored record.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If a date field is malformed.
    """
    return Word(
        id=str(record["id"]),
        term=str(record["term"]),
        meaning=str(record["meaning"]),
        memo=record.get("memo"),
        synonyms=record.get("synonyms"),
        srs_stage=int(record.get("srs_stage", 0)),
        next_review_date=_parse_datetime(record.get("next_review_date")),
        correct_count=int(record.get("correct_count", 0)),
        wrong_count=int(record.get("wrong_count", 0)),
        importance_count=int(record.get("importance_count", 0)),
        accuracy_count=int(record.get("accuracy_count", 0)),
        last_accuracy_date=_parse_date(record.get("last_accuracy_date")),
        is_favorite=bool(record.get("is_favorite", False)),
        is_mastered=bool(record.get("is_mastered", False)),
        created_at=_parse_datetime(record["created_at"]),
    )


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _parse_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))
