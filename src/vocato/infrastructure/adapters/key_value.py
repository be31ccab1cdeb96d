"""JSON-file KeyValueStore for preferences and session snapshots."""

import json
import logging
from pathlib import Path
from typing import Any

from vocato.domain.errors import PersistFailure, QueryFailure
from vocato.domain.ports import KeyValueStore

logger = logging.getLogger(__name__)


class JsonKeyValueStore(KeyValueStore):
    """
    Flat JSON object on disk, re-read on every access.

    Suited to a handful of small values; every set() rewrites the file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read_for_write()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read_for_write()
        if key in data:
            del data[key]
            self._write(data)

    def contains(self, key: str) -> bool:
        return key in self._read()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise QueryFailure(f"Cannot read state file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise QueryFailure(f"State file {self.path} does not contain an object")
        return data

    def _read_for_write(self) -> dict[str, Any]:
        try:
            return self._read()
        except QueryFailure as e:
            raise PersistFailure(str(e)) from e

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError) as e:
            raise PersistFailure(f"Cannot write state file {self.path}: {e}") from e
