"""Anwesenheit pro Tag: ein Eintrag je (Datum, Student), Upsert beim Markieren."""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Optional

from models.attendance import AttendanceRecord, AttendanceStatus
from models.student import Student
from services.collection import load_models, new_id, save_models
from storage.base import StoragePort

logger = logging.getLogger(__name__)

ATTENDANCE_KEY = "attendance-records"


@dataclass
class AttendanceSummary:
    present: int = 0
    absent: int = 0
    late: int = 0
    unmarked: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.late + self.unmarked


class AttendanceService:
    def __init__(self, storage: StoragePort):
        self.storage = storage

    def _all(self) -> list[AttendanceRecord]:
        return load_models(self.storage, ATTENDANCE_KEY, AttendanceRecord)

    def list_attendance(self, date: str) -> list[AttendanceRecord]:
        return [r for r in self._all() if r.date == date]

    def status_map(self, date: str) -> dict[str, AttendanceStatus]:
        return {r.student_id: r.status for r in self.list_attendance(date)}

    def set_attendance(self, date: str, student_id: str,
                       status: AttendanceStatus) -> AttendanceRecord:
        """Markiert oder korrigiert den Status eines Studenten an einem Tag."""
        records = self._all()
        status = AttendanceStatus(status)
        idx = next(
            (i for i, r in enumerate(records) if r.date == date and r.student_id == student_id),
            None,
        )
        if idx is None:
            record = AttendanceRecord(id=new_id(), date=date, student_id=student_id, status=status)
            records.append(record)
        else:
            record = records[idx].model_copy(update={"status": status})
            records[idx] = record
        save_models(self.storage, ATTENDANCE_KEY, records)
        return record

    def summarize(self, date: str, students: list[Student]) -> AttendanceSummary:
        statuses = self.status_map(date)
        counts: Counter[Optional[AttendanceStatus]] = Counter(
            statuses.get(s.id) for s in students
        )
        return AttendanceSummary(
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
            late=counts[AttendanceStatus.LATE],
            unmarked=counts[None],
        )
