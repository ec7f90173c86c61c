"""Dateibasierter Speicher: eine UTF-8-JSON-Datei pro Schlüssel."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from storage.base import CORRUPT, EMPTY, MISSING, Err, Ok, ReadResult, StorageBase

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonFileStorage(StorageBase):
    """Legt jede Sammlung unter <data_dir>/<key>.json ab."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Ungültiger Speicher-Schlüssel: {key!r}")
        return self.data_dir / f"{key}.json"

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    def read(self, key: str) -> ReadResult:
        path = self.path_for(key)
        if not path.exists():
            return Err(MISSING)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return Err(CORRUPT, str(e))
        if not text.strip():
            return Err(EMPTY)
        try:
            return Ok(json.loads(text))
        except (ValueError, RecursionError) as e:
            # auch Ganzzahl-Limit (ValueError) und zu tiefe Verschachtelung
            return Err(CORRUPT, str(e))

    def save(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(value, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.debug(f"'{key}' gespeichert: {path}")

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
