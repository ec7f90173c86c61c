"""Gemeinsame Hilfsfunktionen für Terminal-, CSV- und Excel-Export."""

from datetime import date
from typing import Optional

from config.defaults import DAY_OPTIONS, PERIOD_OPTIONS, PERIOD_TIME_MAP
from models.lesson import Lesson
from models.teacher import Teacher

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "surat":    "B3D4FF",
    "maxraj":   "FFF2B3",
    "free":     "F5F5F5",
    "header":   "4472C4",
}

MISSING = "—"


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def teacher_label(teacher_id: Optional[str], teachers: dict[str, Teacher]) -> str:
    """Username der Lehrkraft; gelöschte oder unbekannte IDs → "—"."""
    if not teacher_id:
        return ""
    teacher = teachers.get(teacher_id)
    return teacher.username if teacher else MISSING


def subject_label(lesson: Lesson) -> str:
    """"Matematika / Tarix" bei alternierendem Fach, sonst nur das Surat-Fach."""
    if lesson.maxraj_subject:
        return f"{lesson.surat_subject} / {lesson.maxraj_subject}"
    return lesson.surat_subject


def format_lesson(lesson: Lesson, teachers: dict[str, Teacher]) -> str:
    """Mehrzeiliger Zelltext: Fächer, Raum, Lehrkräfte."""
    lines = [subject_label(lesson)]
    if lesson.room:
        lines.append(lesson.room)
    names = [
        label for label in (
            teacher_label(lesson.surat_teacher_id, teachers),
            teacher_label(lesson.maxraj_teacher_id, teachers),
        ) if label
    ]
    if names:
        lines.append(" / ".join(names))
    return "\n".join(lines)


def build_slot_map(lessons: list[Lesson]) -> dict[tuple[str, int], Lesson]:
    """{(day, period): lesson}; bei Doppelbelegung gewinnt der erste Eintrag."""
    slot_map: dict[tuple[str, int], Lesson] = {}
    for lesson in lessons:
        slot_map.setdefault(lesson.slot, lesson)
    return slot_map


def period_rows() -> list[tuple[int, str]]:
    return [(p, PERIOD_TIME_MAP[p]) for p in PERIOD_OPTIONS]


def day_columns() -> list[str]:
    return list(DAY_OPTIONS)
