"""Excel-Export für den Wochenplan (openpyxl)."""

from pathlib import Path

from config.defaults import PERIOD_TIME_MAP
from models.lesson import Lesson
from models.teacher import Teacher
from services.schedule import sort_lessons

from export.helpers import (
    COLORS, MISSING, build_slot_map, day_columns, format_lesson,
    period_rows, teacher_label, today_str,
)


class ScheduleExcelExporter:
    """Schreibt zwei Blätter: "Jadval" (Raster Para × Tag) und "Darslar" (Liste)."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_PARA_W = 6
    COL_VAQT_W = 14
    COL_DAY_W  = 24

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_LESSON_H = 54

    def __init__(self, lessons: list[Lesson], teachers: list[Teacher],
                 college_name: str = "Texnikum"):
        self.lessons      = sort_lessons(lessons)
        self.teachers     = {t.id: t for t in teachers}
        self.college_name = college_name
        self.days         = day_columns()

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_grid(wb)
        self._sheet_list(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header(self, ws, headers: list[str], row: int = 1) -> None:
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    # ─── Blätter ──────────────────────────────────────────────────────────────

    def _sheet_grid(self, wb) -> None:
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet("Jadval")
        ws.column_dimensions["A"].width = self.COL_PARA_W
        ws.column_dimensions["B"].width = self.COL_VAQT_W
        for col in range(3, 3 + len(self.days)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

        self._write_header(ws, ["Para", "Vaqt"] + self.days)
        slot_map = build_slot_map(self.lessons)
        border = self._thin_border()

        for r, (period, time_range) in enumerate(period_rows(), start=2):
            ws.cell(row=r, column=1, value=period).font = Font(bold=True)
            ws.cell(row=r, column=2, value=time_range)
            for c in (1, 2):
                ws.cell(row=r, column=c).alignment = self._center_align(wrap=False)
                ws.cell(row=r, column=c).border = border
            for c, day in enumerate(self.days, start=3):
                lesson = slot_map.get((day, period))
                cell = ws.cell(row=r, column=c)
                if lesson is None:
                    cell.value = MISSING
                    cell.fill = self._fill(COLORS["free"])
                else:
                    cell.value = format_lesson(lesson, self.teachers)
                    key = "maxraj" if lesson.maxraj_subject else "surat"
                    cell.fill = self._fill(COLORS[key])
                cell.alignment = self._center_align()
                cell.border = border
            ws.row_dimensions[r].height = self.ROW_LESSON_H

        footer = len(PERIOD_TIME_MAP) + 3
        ws.cell(row=footer, column=1,
                value=f"{self.college_name} · Stand {today_str()}").font = Font(italic=True, size=8)
        ws.freeze_panes = "C2"

    def _sheet_list(self, wb) -> None:
        ws = wb.create_sheet("Darslar")
        headers = ["Kun", "Para", "Vaqt", "Surat", "Maxraj", "Xona",
                   "Surat o'qituvchi", "Maxraj o'qituvchi"]
        self._write_header(ws, headers)
        for r, lesson in enumerate(self.lessons, start=2):
            values = [
                lesson.day, lesson.period, lesson.time_range,
                lesson.surat_subject, lesson.maxraj_subject or "", lesson.room or "",
                teacher_label(lesson.surat_teacher_id, self.teachers),
                teacher_label(lesson.maxraj_teacher_id, self.teachers),
            ]
            for c, v in enumerate(values, start=1):
                ws.cell(row=r, column=c, value=v)
        for col, width in zip("ABCDEFGH", (8, 6, 14, 22, 22, 10, 16, 16)):
            ws.column_dimensions[col].width = width
