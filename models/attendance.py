"""Datenmodell für Anwesenheitseinträge (ein Eintrag pro Tag und Person)."""

from datetime import date
from enum import Enum

from pydantic import field_validator

from models.base import StoredModel


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Keldi",
    AttendanceStatus.ABSENT: "Kelmedi",
    AttendanceStatus.LATE: "Kechikdi",
}

UNMARKED_LABEL = "Belgilanmagan"


class AttendanceRecord(StoredModel):
    id: str
    date: str            # YYYY-MM-DD
    student_id: str
    status: AttendanceStatus

    @field_validator("date")
    @classmethod
    def _iso_date(cls, v: str) -> str:
        return date.fromisoformat(v.strip()).isoformat()
