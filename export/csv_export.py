"""CSV-Zeilen für den Export (Kopfzeilen wie in den Tabellen der Verwaltung)."""

from models.attendance import UNMARKED_LABEL, AttendanceStatus
from models.lesson import Lesson
from models.student import Student
from models.teacher import Teacher
from services.schedule import sort_lessons

from export.helpers import teacher_label

TEACHER_HEADER = ["Ism", "Familiya", "Sharifi", "F.I.Sh", "Username",
                  "Telefon", "Kafedra", "Daraja", "Mutaxasislik"]

STUDENT_HEADER = ["F.I.Sh", "Yo‘nalish", "Kurs", "Ta'lim shakli", "Guruh"]

ATTENDANCE_HEADER = ["T/r", "F.I.Sh", "Guruh", "Holat"]

SCHEDULE_HEADER = ["Kun", "Para", "Vaqt", "Surat", "Maxraj", "Xona",
                   "Surat o'qituvchi", "Maxraj o'qituvchi"]


def teacher_rows(teachers: list[Teacher]) -> list[list[str]]:
    rows = [TEACHER_HEADER]
    for t in teachers:
        rows.append([
            t.first_name or "", t.last_name or "", t.middle_name or "",
            t.full_name, t.username or "", t.phone or "", t.department or "",
            t.degree or "", t.specialization or "",
        ])
    return rows


def student_rows(students: list[Student]) -> list[list[str]]:
    rows = [STUDENT_HEADER]
    for s in students:
        rows.append([s.full_name, s.program or "", s.course or "",
                     s.education_form or "", s.group or ""])
    return rows


def attendance_rows(students: list[Student], group: str,
                    statuses: dict[str, AttendanceStatus]) -> list[list[str]]:
    """Anwesenheitsliste einer Gruppe an einem Tag (nur Studierende der Gruppe)."""
    rows = [ATTENDANCE_HEADER]
    members = [s for s in students if s.group == group]
    for idx, s in enumerate(members, start=1):
        status = statuses.get(s.id)
        rows.append([str(idx), s.full_name, group,
                     status.label if status else UNMARKED_LABEL])
    return rows


def schedule_rows(lessons: list[Lesson], teachers: list[Teacher]) -> list[list[str]]:
    """Flache Liste; Lehrkräfte als Username, damit der Re-Import sie wiederfindet."""
    by_id = {t.id: t for t in teachers}
    rows = [SCHEDULE_HEADER]
    for l in sort_lessons(lessons):
        rows.append([
            l.day, str(l.period), l.time_range, l.surat_subject,
            l.maxraj_subject or "", l.room or "",
            teacher_label(l.surat_teacher_id, by_id),
            teacher_label(l.maxraj_teacher_id, by_id),
        ])
    return rows
