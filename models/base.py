"""Gemeinsame Basis für gespeicherte Datensätze (Pydantic v2)."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoredModel(BaseModel):
    """Python-seitig snake_case, in der JSON-Ablage camelCase ("suratSubject")."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_storage(self) -> dict[str, Any]:
        """Serialisierte Form für den Speicher; leere Optionalfelder entfallen."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def clean_optional(value: Any) -> Any:
    """Trimmt Strings; leere Strings werden zu None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value
