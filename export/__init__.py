"""Export-Modul: Terminal (Rich), CSV und Excel (openpyxl) für Wochenplan und Listen."""

from export.excel_export import ScheduleExcelExporter
from export.tui_renderer import build_schedule_table, render_schedule_rows

__all__ = ["ScheduleExcelExporter", "build_schedule_table", "render_schedule_rows"]
