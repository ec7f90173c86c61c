"""Speicher-Port: JSON-Dateien auf der Platte oder In-Memory für Tests."""

from storage.base import Err, Ok, ReadResult, StoragePort
from storage.json_store import JsonFileStorage
from storage.memory import MemoryStorage

__all__ = [
    "Err",
    "Ok",
    "ReadResult",
    "StoragePort",
    "JsonFileStorage",
    "MemoryStorage",
]
