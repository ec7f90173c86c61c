"""Datenmodell für einen Eintrag im Bibliothekskatalog."""

from typing import Optional

from pydantic import field_validator

from models.base import StoredModel, clean_optional


class LibraryItemInput(StoredModel):
    title: str
    author: Optional[str] = None
    url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Titel darf nicht leer sein.")
        return v

    @field_validator("author", "url", mode="before")
    @classmethod
    def _trim(cls, v):
        return clean_optional(v)


class LibraryItem(LibraryItemInput):
    id: str
