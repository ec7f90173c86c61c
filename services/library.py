"""Bibliothekskatalog."""

from config.defaults import SEED_LIBRARY
from models.library import LibraryItem, LibraryItemInput
from services.collection import load_models, new_id, save_models
from storage.base import StoragePort

LIBRARY_KEY = "library-items"


class LibraryService:
    def __init__(self, storage: StoragePort):
        self.storage = storage

    def list_library(self) -> list[LibraryItem]:
        return load_models(self.storage, LIBRARY_KEY, LibraryItem, SEED_LIBRARY)

    def add_library_item(self, data: LibraryItemInput) -> LibraryItem:
        items = self.list_library()
        created = LibraryItem(**data.model_dump(), id=new_id())
        save_models(self.storage, LIBRARY_KEY, [created, *items])
        return created

    def remove_library_item(self, item_id: str) -> bool:
        items = self.list_library()
        left = [i for i in items if i.id != item_id]
        save_models(self.storage, LIBRARY_KEY, left)
        return len(left) != len(items)
