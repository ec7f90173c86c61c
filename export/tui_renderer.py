"""Terminal-Darstellung des Wochenplans (Rich)."""

from typing import TYPE_CHECKING

from rich import box
from rich.table import Table

from export.helpers import (
    MISSING, build_slot_map, day_columns, format_lesson, period_rows,
)

if TYPE_CHECKING:
    from models.lesson import Lesson
    from models.teacher import Teacher


def render_schedule_rows(
    lessons: list["Lesson"],
    teachers: list["Teacher"],
) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Wochenplan zurück.

    Jede Zeile: [para, zeit, Dush, Sesh, Chor, Pay, Jum, Shan]
    """
    by_id = {t.id: t for t in teachers}
    slot_map = build_slot_map(lessons)
    rows: list[list[str]] = []
    for period, time_range in period_rows():
        cells = [str(period), time_range]
        for day in day_columns():
            lesson = slot_map.get((day, period))
            cells.append(format_lesson(lesson, by_id) if lesson else MISSING)
        rows.append(cells)
    return rows


def build_schedule_table(
    lessons: list["Lesson"],
    teachers: list["Teacher"],
    title: str = "Dars jadvali",
) -> Table:
    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Para", justify="center", style="bold")
    table.add_column("Vaqt", style="dim")
    for day in day_columns():
        table.add_column(day)
    for row in render_schedule_rows(lessons, teachers):
        table.add_row(*row)
    return table
