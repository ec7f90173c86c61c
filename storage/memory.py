"""In-Memory-Speicher (Tests, Dry-Runs)."""

import json
from typing import Any

from storage.base import CORRUPT, EMPTY, MISSING, Err, Ok, ReadResult, StorageBase


class MemoryStorage(StorageBase):
    """Hält serialisierte JSON-Strings; Aufrufer teilen keinen Zustand mit dem Speicher."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def exists(self, key: str) -> bool:
        return key in self._data

    def read(self, key: str) -> ReadResult:
        if key not in self._data:
            return Err(MISSING)
        raw = self._data[key]
        if not raw.strip():
            return Err(EMPTY)
        try:
            return Ok(json.loads(raw))
        except (ValueError, RecursionError) as e:
            # auch Ganzzahl-Limit (ValueError) und zu tiefe Verschachtelung
            return Err(CORRUPT, str(e))

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def put_raw(self, key: str, raw: str) -> None:
        """Schreibt einen Rohstring, z.B. um beschädigte Daten zu simulieren."""
        self._data[key] = raw
