"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from typing import Optional

from pydantic import field_validator

from config.defaults import SPECIALIZATION_OPTIONS
from models.base import StoredModel, clean_optional


def _check_specialization(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in SPECIALIZATION_OPTIONS:
        raise ValueError(f"Unbekannte Fachrichtung: {v!r}")
    return v


class TeacherInput(StoredModel):
    """Eingabe für eine neue Lehrkraft; Username und Passwort erzeugt der Service."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None             # Sharifi
    phone: Optional[str] = None
    department: Optional[str] = None              # Kafedra
    degree: Optional[str] = None                  # Daraja
    specialization: Optional[str] = None          # Mutaxasislik

    @field_validator("first_name", "last_name", "middle_name", "phone",
                     "department", "degree", "specialization", mode="before")
    @classmethod
    def _trim(cls, v):
        return clean_optional(v)

    @field_validator("specialization")
    @classmethod
    def _known_specialization(cls, v: Optional[str]) -> Optional[str]:
        return _check_specialization(v)


class Teacher(TeacherInput):
    """Repräsentiert eine gespeicherte Lehrkraft mit Login-Daten."""

    id: str
    full_name: str                                # "Aliyev Anvar"
    username: str                                 # max. 8 Zeichen, eindeutig
    password: str

    @property
    def display_name(self) -> str:
        return self.full_name or self.username


class TeacherPatch(StoredModel):
    """Teil-Update einer Lehrkraft."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    degree: Optional[str] = None
    specialization: Optional[str] = None

    @field_validator("first_name", "last_name", "middle_name", "phone",
                     "department", "degree", "specialization", mode="before")
    @classmethod
    def _trim(cls, v):
        return clean_optional(v)

    @field_validator("specialization")
    @classmethod
    def _known_specialization(cls, v: Optional[str]) -> Optional[str]:
        return _check_specialization(v)

    @property
    def touches_name(self) -> bool:
        return bool({"first_name", "last_name", "middle_name"} & self.model_fields_set)
