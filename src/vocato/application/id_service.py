"""Stable word identifiers."""

from ulid import ULID

WORD_ID_PREFIX = "word_"


def generate_word_id() -> str:
    """Generate a stable word ID using ULID."""
    return f"{WORD_ID_PREFIX}{ULID()}"
