"""Datenmodell für Studierende (Pydantic v2)."""

from typing import Optional

from pydantic import field_validator, model_validator

from config.defaults import (
    COURSE_OPTIONS,
    EDUCATION_FORM_OPTIONS,
    GROUPS_BY_COURSE,
    PROGRAM_OPTIONS,
)
from models.base import StoredModel, clean_optional


def is_valid_group(course: Optional[str], group: Optional[str]) -> bool:
    """Gruppe muss zum Kurs passen ("5-26" nur im 1. Kurs)."""
    if not course or not group:
        return False
    return group in GROUPS_BY_COURSE.get(course, [])


class StudentInput(StoredModel):
    """Eingabe für neue Studierende."""

    full_name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    course: Optional[str] = None            # "1-kurs" / "2-kurs"
    education_form: Optional[str] = None    # "Kunduzgi" / "Dual"
    program: Optional[str] = None           # Yo'nalish
    group: Optional[str] = None             # "5-26"

    @field_validator("full_name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name darf nicht leer sein.")
        return v

    @field_validator("first_name", "last_name", "course", "education_form",
                     "program", "group", mode="before")
    @classmethod
    def _trim(cls, v):
        return clean_optional(v)

    @model_validator(mode="after")
    def _check_vocabulary(self):
        if self.course is not None and self.course not in COURSE_OPTIONS:
            raise ValueError(f"Unbekannter Kurs: {self.course!r}")
        if self.education_form is not None and self.education_form not in EDUCATION_FORM_OPTIONS:
            raise ValueError(f"Unbekannte Ausbildungsform: {self.education_form!r}")
        if self.program is not None and self.program not in PROGRAM_OPTIONS:
            raise ValueError(f"Unbekannte Fachrichtung: {self.program!r}")
        if self.group is not None and not is_valid_group(self.course, self.group):
            raise ValueError(
                f"Gruppe {self.group!r} passt nicht zum Kurs {self.course!r}"
            )
        return self


class Student(StudentInput):
    id: str


class StudentPatch(StoredModel):
    """Teil-Update; wird vor dem Speichern gegen StudentInput validiert."""

    full_name: Optional[str] = None
    course: Optional[str] = None
    education_form: Optional[str] = None
    program: Optional[str] = None
    group: Optional[str] = None
