"""Datenmodell für eine Unterrichtsstunde im Wochenplan (Pydantic v2)."""

from typing import Optional

from pydantic import field_validator

from config.defaults import DAY_OPTIONS, PERIOD_OPTIONS, PERIOD_TIME_MAP
from models.base import StoredModel, clean_optional


class LessonInput(StoredModel):
    """Eine Stunde ohne ID, wie sie aus Formular oder CSV-Import kommt.

    Ein Slot ist das Paar (day, period). Surat/Maxraj sind die beiden
    Fächer, die sich im selben Slot wöchentlich abwechseln.
    """

    day: str                                  # "Dush" .. "Shan"
    period: int                               # 1..6
    surat_subject: str                        # Pflichtfach des Slots
    maxraj_subject: Optional[str] = None      # alternierendes Fach
    room: Optional[str] = None
    surat_teacher_id: Optional[str] = None
    maxraj_teacher_id: Optional[str] = None

    @field_validator("day")
    @classmethod
    def _check_day(cls, v: str) -> str:
        if v not in DAY_OPTIONS:
            raise ValueError(f"Unbekannter Tag: {v!r} (erlaubt: {', '.join(DAY_OPTIONS)})")
        return v

    @field_validator("period")
    @classmethod
    def _check_period(cls, v: int) -> int:
        if v not in PERIOD_OPTIONS:
            raise ValueError(f"Ungültige Para: {v} (erlaubt: 1-{len(PERIOD_OPTIONS)})")
        return v

    @field_validator("surat_subject")
    @classmethod
    def _check_subject(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Surat-Fach darf nicht leer sein.")
        return v

    @field_validator("maxraj_subject", "room", "surat_teacher_id",
                     "maxraj_teacher_id", mode="before")
    @classmethod
    def _trim_optional(cls, v):
        return clean_optional(v)

    @property
    def slot(self) -> tuple[str, int]:
        return (self.day, self.period)

    @property
    def time_range(self) -> str:
        """Zeitspanne der Para, z.B. "08:30-09:50"."""
        return PERIOD_TIME_MAP[self.period]


class Lesson(LessonInput):
    """Gespeicherte Stunde. Die ID bleibt über Merges und Updates erhalten."""

    id: str


class LessonPatch(StoredModel):
    """Teil-Update; nur gesetzte Felder werden übernommen."""

    day: Optional[str] = None
    period: Optional[int] = None
    surat_subject: Optional[str] = None
    maxraj_subject: Optional[str] = None
    room: Optional[str] = None
    surat_teacher_id: Optional[str] = None
    maxraj_teacher_id: Optional[str] = None

    @field_validator("day")
    @classmethod
    def _check_day(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in DAY_OPTIONS:
            raise ValueError(f"Unbekannter Tag: {v!r}")
        return v

    @field_validator("period")
    @classmethod
    def _check_period(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v not in PERIOD_OPTIONS:
            raise ValueError(f"Ungültige Para: {v}")
        return v

    @field_validator("surat_subject", "maxraj_subject", "room", "surat_teacher_id",
                     "maxraj_teacher_id", mode="before")
    @classmethod
    def _trim_optional(cls, v):
        return clean_optional(v)
