"""Laden und Speichern ganzer Sammlungen über den Speicher-Port."""

import copy
import logging
import uuid
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from storage.base import StoragePort
from models.base import StoredModel

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def new_id() -> str:
    return str(uuid.uuid4())


def load_raw(storage: StoragePort, key: str,
             seed: Optional[list[dict]] = None) -> list:
    """Liest die Rohliste; ohne gespeicherte Sammlung gilt (und wird gespeichert) der Seed."""
    fallback = copy.deepcopy(seed) if seed is not None else []
    data = storage.load(key, fallback)
    if not storage.exists(key) and seed is not None:
        storage.save(key, data)
    if not isinstance(data, list):
        logger.warning(f"'{key}' enthält keine Liste ({type(data).__name__}), ignoriere Inhalt")
        return []
    return data


def load_models(storage: StoragePort, key: str, model: type[M],
                seed: Optional[list[dict]] = None) -> list[M]:
    """Validiert jeden Eintrag einzeln; ungültige Einträge werden übersprungen."""
    out: list[M] = []
    for raw in load_raw(storage, key, seed):
        try:
            out.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Ungültiger Eintrag in '{key}' übersprungen: {e.error_count()} Fehler")
    return out


def save_models(storage: StoragePort, key: str, items: list[StoredModel]) -> None:
    storage.save(key, [item.to_storage() for item in items])
