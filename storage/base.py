"""Schnittstelle des Speichers und das Ergebnis eines Lesezugriffs.

Ein Lesezugriff liefert entweder Ok(data) oder Err(reason). Aufrufer, die
nur einen Wert brauchen, nutzen load(key, fallback): bei Err kommt still der
Fallback zurück. Geschrieben wird immer die vollständige Sammlung.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union

logger = logging.getLogger(__name__)

# Gründe für Err
MISSING = "missing"
EMPTY = "empty"
CORRUPT = "corrupt"


@dataclass(frozen=True)
class Ok:
    data: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    reason: str                      # MISSING / EMPTY / CORRUPT
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False


ReadResult = Union[Ok, Err]


class StoragePort(Protocol):
    def read(self, key: str) -> ReadResult: ...

    def save(self, key: str, value: Any) -> None: ...

    def exists(self, key: str) -> bool: ...

    def delete(self, key: str) -> None: ...

    def load(self, key: str, fallback: Any) -> Any: ...


class StorageBase:
    """Gemeinsame load()-Logik; Unterklassen implementieren read/save."""

    def read(self, key: str) -> ReadResult:
        raise NotImplementedError

    def load(self, key: str, fallback: Any) -> Any:
        result = self.read(key)
        if isinstance(result, Ok):
            return result.data
        if result.reason == CORRUPT:
            logger.warning(f"Daten unter '{key}' unlesbar ({result.detail}), nutze Fallback")
        return fallback
