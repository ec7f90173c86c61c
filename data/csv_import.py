"""CSV-Import für Lehrkräfte, Studierende und Stundenplan.

Spalten werden über unscharfe Kopfzeilen-Muster gefunden ("Ism", "First name",
"F.I.Sh", ...). Ungültige Zeilen werden übersprungen und im ImportReport
vermerkt, nie als Exception gemeldet.
"""

import difflib
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import ValidationError

from config.defaults import (
    COURSE_OPTIONS,
    DAY_OPTIONS,
    EDUCATION_FORM_OPTIONS,
    GROUPS_BY_COURSE,
    PROGRAM_OPTIONS,
    SPECIALIZATION_OPTIONS,
)
from models.lesson import LessonInput
from models.student import StudentInput
from models.teacher import TeacherInput
from services.schedule import LessonStore, Rejected, parse_lesson
from services.students import StudentService
from services.teachers import TeacherService

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    """Ergebnis eines CSV-Imports."""

    created: list[Any] = field(default_factory=list)
    skipped: int = 0
    messages: list[str] = field(default_factory=list)

    def skip(self, line: int, reason: str) -> None:
        self.skipped += 1
        self.messages.append(f"Zeile {line}: {reason}")

    def print_rich(self, title: str = "CSV-Import") -> None:
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        lines = [f"[green]✓ {len(self.created)} übernommen[/green]"]
        if self.skipped:
            lines.append(f"[yellow]{self.skipped} übersprungen:[/yellow]")
            for m in self.messages:
                lines.append(f"  [yellow]• {m}[/yellow]")
        console.print(Panel("\n".join(lines), title=title, border_style="cyan"))


# ─── Spalten-Erkennung ────────────────────────────────────────────────────────

def find_column(header: list[str], pattern: str,
                exclude: Optional[str] = None) -> int:
    """Index der ersten Kopfzeile, die auf das Muster passt (case-insensitiv), sonst -1."""
    rx = re.compile(pattern, re.IGNORECASE)
    ex = re.compile(exclude, re.IGNORECASE) if exclude else None
    for i, h in enumerate(header):
        if rx.search(h) and not (ex and ex.search(h)):
            return i
    return -1


def _cell(row: list[str], idx: int) -> str:
    if idx < 0 or idx >= len(row):
        return ""
    return row[idx].strip()


def _match_option(value: str, options: tuple[str, ...],
                  cutoff: float = 0.85) -> Optional[str]:
    """Exakt (ohne Groß/Klein) oder sehr ähnlich ("Dasturlsh" → "Dasturlash")."""
    if not value:
        return None
    lowered = {o.lower(): o for o in options}
    if value.lower() in lowered:
        return lowered[value.lower()]
    matches = difflib.get_close_matches(value.lower(), list(lowered), n=1, cutoff=cutoff)
    return lowered[matches[0]] if matches else None


# ─── Lehrkräfte ───────────────────────────────────────────────────────────────

TEACHER_COLUMNS = {
    "first_name": r"ism|first",
    "last_name": r"fam|last",
    "middle_name": r"sharif|middle",
    "full_name": r"f\.i\.sh|fio|full",
    "phone": r"tel|phone",
    "department": r"kaf|dept|yo",
    "degree": r"daraja|degree",
    "specialization": r"mutaxasislik|specialization|fan",
}


def import_teachers(rows: list[list[str]], service: TeacherService) -> ImportReport:
    """Legt für jede gültige Zeile eine Lehrkraft an (Username/Passwort generiert)."""
    report = ImportReport()
    if not rows:
        return report
    header, data = rows[0], rows[1:]
    cols = {name: find_column(header, pat) for name, pat in TEACHER_COLUMNS.items()}

    for line, row in enumerate(data, start=2):
        first = _cell(row, cols["first_name"])
        last = _cell(row, cols["last_name"])
        middle = _cell(row, cols["middle_name"])
        full = _cell(row, cols["full_name"])

        if not (first or last or middle) and full:
            # Nur F.I.Sh vorhanden: "Familiya Ism Sharif"
            parts = full.split()
            last = parts[0] if parts else ""
            first = parts[1] if len(parts) > 1 else ""
            middle = " ".join(parts[2:])

        if not (full or first or last or middle):
            report.skip(line, "kein Name")
            continue

        spec_raw = _cell(row, cols["specialization"])
        specialization = _match_option(spec_raw, SPECIALIZATION_OPTIONS)
        if spec_raw and specialization is None:
            report.messages.append(f"Zeile {line}: Fachrichtung '{spec_raw}' unbekannt, ignoriert")

        try:
            data_in = TeacherInput(
                first_name=first, last_name=last, middle_name=middle,
                phone=_cell(row, cols["phone"]),
                department=_cell(row, cols["department"]),
                degree=_cell(row, cols["degree"]),
                specialization=specialization,
            )
        except ValidationError as e:
            report.skip(line, f"ungültig ({e.error_count()} Fehler)")
            continue
        report.created.append(service.create_teacher(data_in))

    logger.info(f"Lehrkräfte-Import: {len(report.created)} angelegt, {report.skipped} übersprungen")
    return report


# ─── Studierende ──────────────────────────────────────────────────────────────

STUDENT_COLUMNS = {
    "full_name": r"f\.?i\.?sh|fio|fi|ism|name",
    "group": r"guruh|group",
    "course": r"kurs|course",
    "education_form": r"ta.?lim|shakl|form",
    "program": r"yo.?nalish|program",
}


def import_students(rows: list[list[str]], service: StudentService) -> ImportReport:
    """Nur vollständige Zeilen (Kurs, Ausbildungsform, Fachrichtung, passende Gruppe)."""
    report = ImportReport()
    if not rows:
        return report
    header, data = rows[0], rows[1:]
    cols = {name: find_column(header, pat) for name, pat in STUDENT_COLUMNS.items()}
    if cols["full_name"] == -1:
        report.messages.append("Keine Namensspalte gefunden")
        return report

    for line, row in enumerate(data, start=2):
        full_name = _cell(row, cols["full_name"])
        if not full_name:
            report.skip(line, "kein Name")
            continue

        course = _match_option(_cell(row, cols["course"]), COURSE_OPTIONS, cutoff=1.0)
        education = _match_option(_cell(row, cols["education_form"]), EDUCATION_FORM_OPTIONS,
                                  cutoff=1.0)
        program = _match_option(_cell(row, cols["program"]), PROGRAM_OPTIONS)
        group = _cell(row, cols["group"])
        if course is None or education is None or program is None:
            report.skip(line, "Kurs, Ausbildungsform oder Fachrichtung fehlt/unbekannt")
            continue
        if group not in GROUPS_BY_COURSE[course]:
            report.skip(line, f"Gruppe '{group}' passt nicht zu {course}")
            continue

        data_in = StudentInput(full_name=full_name, course=course, education_form=education,
                               program=program, group=group)
        report.created.append(service.create_student(data_in))

    return report


# ─── Stundenplan ──────────────────────────────────────────────────────────────

_DAY_ALIASES = {
    "dushanba": "Dush", "seshanba": "Sesh", "chorshanba": "Chor",
    "payshanba": "Pay", "juma": "Jum", "shanba": "Shan",
}
_DAY_ALIASES.update({d.lower(): d for d in DAY_OPTIONS})

_TEACHER_HEADER = r"o.?qituvchi|teacher"

LESSON_COLUMNS = {
    "day": (r"kun|day", None),
    "period": (r"para|period", None),
    "time": (r"vaqt|time", None),
    "surat_subject": (r"surat|subject|fan", _TEACHER_HEADER),
    "maxraj_subject": (r"maxraj", _TEACHER_HEADER),
    "room": (r"xona|room", None),
    "surat_teacher": (r"surat.*(" + _TEACHER_HEADER + ")", None),
    "maxraj_teacher": (r"maxraj.*(" + _TEACHER_HEADER + ")", None),
}


def import_lessons(rows: list[list[str]], store: LessonStore,
                   teachers: Optional[TeacherService] = None) -> ImportReport:
    """Jede Zeile läuft durch parse_lesson und add_lesson (belegte Slots werden überschrieben).

    Lehrkräfte-Spalten enthalten Usernames; unbekannte bleiben leer.
    """
    report = ImportReport()
    if not rows:
        return report
    header, data = rows[0], rows[1:]
    cols = {name: find_column(header, pat, ex) for name, (pat, ex) in LESSON_COLUMNS.items()}
    by_username = {}
    if teachers is not None:
        by_username = {t.username.lower(): t.id for t in teachers.list_teachers()}

    for line, row in enumerate(data, start=2):
        day_raw = _cell(row, cols["day"])
        day = _DAY_ALIASES.get(day_raw.lower()) if day_raw else None
        if day_raw and day is None:
            report.skip(line, f"unbekannter Tag '{day_raw}'")
            continue

        raw = {
            "day": day,
            "period": _cell(row, cols["period"]),
            "time": _cell(row, cols["time"]),
            "suratSubject": _cell(row, cols["surat_subject"]),
            "maxrajSubject": _cell(row, cols["maxraj_subject"]),
            "room": _cell(row, cols["room"]),
            "suratTeacherId": by_username.get(_cell(row, cols["surat_teacher"]).lower()),
            "maxrajTeacherId": by_username.get(_cell(row, cols["maxraj_teacher"]).lower()),
        }
        result = parse_lesson(raw)
        if isinstance(result, Rejected):
            report.skip(line, result.reason)
            continue
        lesson = result.lesson
        data_in = LessonInput.model_validate(lesson.model_dump(exclude={"id"}))
        report.created.append(store.add_lesson(data_in))

    return report
