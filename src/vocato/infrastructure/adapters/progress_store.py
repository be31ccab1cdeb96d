"""ProgressStore backed by two keys in a KeyValueStore."""

from vocato.domain.constants import SESSION_CURSOR_KEY, SESSION_PROGRESS_KEY
from vocato.domain.models import Snapshot
from vocato.domain.ports import KeyValueStore, ProgressStore


class KeyValueProgressStore(ProgressStore):
    """Stores the word id list and the cursor under separate keys."""

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def save_snapshot(self, word_ids: list[str], cursor: int) -> None:
        self._kv.set(SESSION_PROGRESS_KEY, list(word_ids))
        self._kv.set(SESSION_CURSOR_KEY, int(cursor))

    def load_snapshot(self) -> Snapshot | None:
        word_ids = self._kv.get(SESSION_PROGRESS_KEY)
        cursor = self._kv.get(SESSION_CURSOR_KEY)
        if not isinstance(word_ids, list) or not isinstance(cursor, int):
            return None
        return Snapshot(word_ids=[str(w) for w in word_ids], cursor=cursor)

    def clear_snapshot(self) -> None:
        self._kv.delete(SESSION_PROGRESS_KEY)
        self._kv.delete(SESSION_CURSOR_KEY)

    def has_snapshot(self) -> bool:
        return self._kv.contains(SESSION_PROGRESS_KEY)
