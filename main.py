"""Texnikum ERP — Haupt-CLI.

Verwendung:
  python main.py login <username> --role admin     Anmelden
  python main.py whoami                            Aktuelle Rolle
  python main.py dashboard                         Übersicht
  python main.py teacher add --first Ali ...       Lehrkraft anlegen
  python main.py teacher import <datei.csv>        Lehrkräfte importieren
  python main.py student list --group 5-26         Studierende einer Gruppe
  python main.py schedule add --day Dush --period 1 --subject Fizika
  python main.py schedule export -o jadval.xlsx    Wochenplan exportieren
  python main.py attendance mark <id> present      Anwesenheit markieren
  python main.py config init                       Konfigurationsdatei anlegen
"""

import logging
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from config.defaults import (
    COURSE_OPTIONS,
    DAY_OPTIONS,
    EDUCATION_FORM_OPTIONS,
    PERIOD_OPTIONS,
    PROGRAM_OPTIONS,
    SPECIALIZATION_OPTIONS,
)
from config.manager import ConfigManager
from config.schema import AppConfig
from models.attendance import AttendanceStatus
from models.lesson import LessonPatch
from models.session import UserRole
from services.attendance import AttendanceService
from services.auth import AuthService
from services.errors import AuthError, PermissionDenied
from services.library import LibraryService
from services.schedule import LessonStore
from services.students import StudentService
from services.teachers import TeacherService
from storage.json_store import JsonFileStorage

console = Console()
logger = logging.getLogger("texnikum")

ADMIN = (UserRole.ADMIN,)
STAFF = (UserRole.ADMIN, UserRole.TEACHER)


# ─── Kontext ──────────────────────────────────────────────────────────────────

@dataclass
class App:
    """Eine Speicher-Instanz pro Prozess, explizit an alle Services gereicht."""

    config: AppConfig
    storage: JsonFileStorage
    teachers: TeacherService
    students: StudentService
    library: LibraryService
    lessons: LessonStore
    attendance: AttendanceService
    auth: AuthService

    @classmethod
    def build(cls, config: AppConfig) -> "App":
        storage = JsonFileStorage(ConfigManager.resolve_data_dir(config))
        teachers = TeacherService(storage, config.auth)
        return cls(
            config=config,
            storage=storage,
            teachers=teachers,
            students=StudentService(storage),
            library=LibraryService(storage),
            lessons=LessonStore(storage),
            attendance=AttendanceService(storage),
            auth=AuthService(storage, teachers, config.auth),
        )

    def require(self, *roles: UserRole) -> None:
        """Bricht mit Exit-Code 1 ab, wenn die aktuelle Rolle nicht erlaubt ist."""
        try:
            if roles:
                self.auth.require_role(*roles)
            else:
                self.auth.require_login()
        except PermissionDenied as e:
            console.print(f"[red]{e}[/red]\n"
                          "Anmelden mit [bold]python main.py login[/bold].")
            sys.exit(1)


pass_app = click.make_pass_decorator(App)


def _setup_logging(config: AppConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level)
    handlers: list[logging.Handler] = [
        RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    ]
    if config.logging.file:
        Path(config.logging.file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.logging.file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handlers.append(file_handler)
    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)


def _patch_from(**options) -> dict:
    """Nur explizit angegebene Optionen (nicht None) landen im Patch."""
    return {k: v for k, v in options.items() if v is not None}


def _abort_invalid(e: ValidationError) -> None:
    console.print("[red bold]Ungültige Eingabe:[/red bold]")
    for err in e.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "—"
        console.print(f"  [red]• {loc}: {err['msg']}[/red]")
    sys.exit(1)


# ─── ANMELDUNG ────────────────────────────────────────────────────────────────

@click.command("login")
@click.argument("username")
@click.option("--role", type=click.Choice([UserRole.ADMIN.value, UserRole.TEACHER.value]),
              default=UserRole.TEACHER.value, show_default=True)
@click.option("--password", prompt=True, hide_input=True, help="Passwort.")
@pass_app
def cmd_login(app: App, username: str, role: str, password: str):
    """Anmelden als Admin oder Lehrkraft."""
    try:
        session = app.auth.login(username, UserRole(role), password)
    except AuthError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    console.print(f"[green]✓[/green] Angemeldet: [bold]{session.user_name}[/bold] ({session.role.value})")


@click.command("logout")
@pass_app
def cmd_logout(app: App):
    """Abmelden (Rolle wird 'guest')."""
    app.auth.logout()
    console.print("[green]✓[/green] Abgemeldet.")


@click.command("whoami")
@pass_app
def cmd_whoami(app: App):
    """Zeigt Benutzer und Rolle der aktuellen Sitzung."""
    session = app.auth.current()
    console.print(f"{session.user_name or '—'} ({session.role.value})")


# ─── DASHBOARD ────────────────────────────────────────────────────────────────

@click.command("dashboard")
@pass_app
def cmd_dashboard(app: App):
    """Übersicht: Anzahl Lehrkräfte, Studierende, Bücher, Stunden."""
    app.require()
    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("Bereich", style="bold")
    table.add_column("Anzahl", justify="right")
    table.add_row("O'qituvchilar", str(len(app.teachers.list_teachers())))
    table.add_row("Talabalar", str(len(app.students.list_students())))
    table.add_row("Kutubxona", str(len(app.library.list_library())))
    table.add_row("Darslar", str(len(app.lessons.list_lessons())))
    console.print(Panel(table, title=app.config.college_name, border_style="cyan"))


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@pass_app
def config_show(app: App):
    """Zeigt die aktive Konfiguration an."""
    cfg = app.config
    table = Table(title="Konfiguration", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("college_name", cfg.college_name)
    table.add_row("data_dir", str(app.storage.data_dir))
    table.add_row("logging.level", cfg.logging.level)
    table.add_row("logging.file", cfg.logging.file or "—")
    table.add_row("auth.password_length", str(cfg.auth.password_length))
    console.print(table)


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Vorhandene Datei überschreiben.")
@pass_app
def config_init(app: App, force: bool):
    """Schreibt die aktuelle Konfiguration als YAML-Datei."""
    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(f"[yellow]{mgr.path} existiert bereits (--force zum Überschreiben).[/yellow]")
        return
    mgr.save(app.config)


# ─── TEACHER ──────────────────────────────────────────────────────────────────

@click.group("teacher")
def cmd_teacher():
    """Lehrkräfte verwalten."""


def _teacher_options(func):
    for opt in reversed([
        click.option("--first", "first_name", default=None, help="Ism"),
        click.option("--last", "last_name", default=None, help="Familiya"),
        click.option("--middle", "middle_name", default=None, help="Sharifi"),
        click.option("--phone", default=None),
        click.option("--department", default=None, help="Kafedra"),
        click.option("--degree", default=None, help="Daraja"),
        click.option("--specialization", type=click.Choice(SPECIALIZATION_OPTIONS),
                     default=None, help="Mutaxasislik"),
    ]):
        func = opt(func)
    return func


@cmd_teacher.command("list")
@click.option("--query", "-q", default="", help="Filter auf den Namen.")
@pass_app
def teacher_list(app: App, query: str):
    """Listet alle Lehrkräfte."""
    app.require()
    q = query.strip().lower()
    teachers = [t for t in app.teachers.list_teachers() if q in t.full_name.lower()]
    table = Table(title="O'qituvchilar", box=box.ROUNDED)
    for col in ("ID", "F.I.Sh", "Username", "Telefon", "Kafedra", "Mutaxasislik"):
        table.add_column(col)
    for t in teachers:
        table.add_row(t.id, t.full_name, t.username, t.phone or "",
                      t.department or "", t.specialization or "")
    console.print(table)


@cmd_teacher.command("add")
@_teacher_options
@pass_app
def teacher_add(app: App, **fields):
    """Legt eine Lehrkraft an; Username und Passwort werden erzeugt."""
    app.require(*ADMIN)
    from models.teacher import TeacherInput
    try:
        data = TeacherInput(**fields)
    except ValidationError as e:
        _abort_invalid(e)
    t = app.teachers.create_teacher(data)
    console.print(f"[green]✓[/green] {t.full_name}: Username [bold]{t.username}[/bold], "
                  f"Passwort [bold]{t.password}[/bold]")


@cmd_teacher.command("update")
@click.argument("teacher_id")
@_teacher_options
@pass_app
def teacher_update(app: App, teacher_id: str, **fields):
    """Ändert eine Lehrkraft (nur angegebene Felder)."""
    app.require(*ADMIN)
    try:
        updated = app.teachers.update_teacher(teacher_id, _patch_from(**fields))
    except ValidationError as e:
        _abort_invalid(e)
    if updated is None:
        console.print(f"[yellow]Keine Lehrkraft mit ID {teacher_id}.[/yellow]")
        sys.exit(1)
    console.print(f"[green]✓[/green] {updated.full_name} ({updated.username})")


@cmd_teacher.command("delete")
@click.argument("teacher_id")
@pass_app
def teacher_delete(app: App, teacher_id: str):
    """Löscht eine Lehrkraft (Stunden behalten ihre Referenz)."""
    app.require(*ADMIN)
    if app.teachers.delete_teacher(teacher_id):
        console.print("[green]✓[/green] Gelöscht.")
    else:
        console.print("[dim]Nichts zu löschen.[/dim]")


@cmd_teacher.command("password")
@click.argument("teacher_id")
@pass_app
def teacher_password(app: App, teacher_id: str):
    """Zeigt das Passwort einer Lehrkraft."""
    app.require(*ADMIN)
    password = app.teachers.get_teacher_password(teacher_id)
    if password is None:
        console.print(f"[yellow]Keine Lehrkraft mit ID {teacher_id}.[/yellow]")
        sys.exit(1)
    console.print(password)


@cmd_teacher.command("export")
@click.option("--output", "-o", default="output/oqituvchilar.csv", show_default=True)
@pass_app
def teacher_export(app: App, output: str):
    """Exportiert alle Lehrkräfte als CSV."""
    app.require()
    from data.csv_io import write_csv_file
    from export.csv_export import teacher_rows
    path = write_csv_file(Path(output), teacher_rows(app.teachers.list_teachers()))
    console.print(f"[green]✓[/green] CSV gespeichert: {path}")


@cmd_teacher.command("import")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@pass_app
def teacher_import(app: App, datei: Path):
    """Importiert Lehrkräfte aus einer CSV-Datei."""
    app.require(*ADMIN)
    from data.csv_import import import_teachers
    from data.csv_io import read_csv_file
    report = import_teachers(read_csv_file(datei), app.teachers)
    report.print_rich("O'qituvchilar-Import")


# ─── STUDENT ──────────────────────────────────────────────────────────────────

@click.group("student")
def cmd_student():
    """Studierende verwalten."""


@cmd_student.command("list")
@click.option("--group", "-g", default=None, help="Nur eine Gruppe (z.B. 5-26).")
@click.option("--query", "-q", default="", help="Filter auf den Namen.")
@pass_app
def student_list(app: App, group: Optional[str], query: str):
    """Listet Studierende."""
    app.require()
    students = app.students.list_group(group) if group else app.students.list_students()
    q = query.strip().lower()
    table = Table(title="Talabalar", box=box.ROUNDED)
    for col in ("ID", "F.I.Sh", "Yo‘nalish", "Kurs", "Ta'lim shakli", "Guruh"):
        table.add_column(col)
    for s in students:
        if q and q not in s.full_name.lower():
            continue
        table.add_row(s.id, s.full_name, s.program or "", s.course or "",
                      s.education_form or "", s.group or "")
    console.print(table)


@cmd_student.command("add")
@click.argument("full_name")
@click.option("--course", type=click.Choice(COURSE_OPTIONS), required=True)
@click.option("--form", "education_form", type=click.Choice(EDUCATION_FORM_OPTIONS), required=True)
@click.option("--program", type=click.Choice(PROGRAM_OPTIONS), required=True)
@click.option("--group", required=True, help="Gruppe passend zum Kurs (1-kurs: x-26, 2-kurs: x-25).")
@pass_app
def student_add(app: App, full_name: str, **fields):
    """Legt einen Studenten an."""
    app.require(*ADMIN)
    from models.student import StudentInput
    try:
        data = StudentInput(full_name=full_name, **fields)
    except ValidationError as e:
        _abort_invalid(e)
    s = app.students.create_student(data)
    console.print(f"[green]✓[/green] {s.full_name} ({s.group}) — ID {s.id}")


@cmd_student.command("update")
@click.argument("student_id")
@click.option("--name", "full_name", default=None)
@click.option("--course", type=click.Choice(COURSE_OPTIONS), default=None)
@click.option("--form", "education_form", type=click.Choice(EDUCATION_FORM_OPTIONS), default=None)
@click.option("--program", type=click.Choice(PROGRAM_OPTIONS), default=None)
@click.option("--group", default=None)
@pass_app
def student_update(app: App, student_id: str, **fields):
    """Ändert einen Studenten (nur angegebene Felder)."""
    app.require(*ADMIN)
    try:
        updated = app.students.update_student(student_id, _patch_from(**fields))
    except ValidationError as e:
        _abort_invalid(e)
    if updated is None:
        console.print(f"[yellow]Kein Student mit ID {student_id}.[/yellow]")
        sys.exit(1)
    console.print(f"[green]✓[/green] {updated.full_name} ({updated.group or '—'})")


@cmd_student.command("delete")
@click.argument("student_id")
@pass_app
def student_delete(app: App, student_id: str):
    """Löscht einen Studenten."""
    app.require(*ADMIN)
    if app.students.delete_student(student_id):
        console.print("[green]✓[/green] Gelöscht.")
    else:
        console.print("[dim]Nichts zu löschen.[/dim]")


@cmd_student.command("export")
@click.option("--output", "-o", default="output/talabalar.csv", show_default=True)
@pass_app
def student_export(app: App, output: str):
    """Exportiert alle Studierenden als CSV."""
    app.require()
    from data.csv_io import write_csv_file
    from export.csv_export import student_rows
    path = write_csv_file(Path(output), student_rows(app.students.list_students()))
    console.print(f"[green]✓[/green] CSV gespeichert: {path}")


@cmd_student.command("import")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@pass_app
def student_import(app: App, datei: Path):
    """Importiert Studierende aus einer CSV-Datei."""
    app.require(*ADMIN)
    from data.csv_import import import_students
    from data.csv_io import read_csv_file
    report = import_students(read_csv_file(datei), app.students)
    report.print_rich("Talabalar-Import")


# ─── LIBRARY ──────────────────────────────────────────────────────────────────

@click.group("library")
def cmd_library():
    """Bibliothekskatalog."""


@cmd_library.command("list")
@pass_app
def library_list(app: App):
    """Listet alle Bücher."""
    app.require()
    table = Table(title="Kutubxona", box=box.ROUNDED)
    for col in ("ID", "Nomi", "Muallif", "Havola"):
        table.add_column(col)
    for item in app.library.list_library():
        table.add_row(item.id, item.title, item.author or "", item.url or "")
    console.print(table)


@cmd_library.command("add")
@click.argument("title")
@click.option("--author", default=None)
@click.option("--url", default=None)
@pass_app
def library_add(app: App, title: str, author: Optional[str], url: Optional[str]):
    """Fügt ein Buch hinzu."""
    app.require(*ADMIN)
    from models.library import LibraryItemInput
    try:
        data = LibraryItemInput(title=title, author=author, url=url)
    except ValidationError as e:
        _abort_invalid(e)
    item = app.library.add_library_item(data)
    console.print(f"[green]✓[/green] {item.title} — ID {item.id}")


@cmd_library.command("remove")
@click.argument("item_id")
@pass_app
def library_remove(app: App, item_id: str):
    """Entfernt ein Buch."""
    app.require(*ADMIN)
    if app.library.remove_library_item(item_id):
        console.print("[green]✓[/green] Entfernt.")
    else:
        console.print("[dim]Nichts zu entfernen.[/dim]")


# ─── SCHEDULE ─────────────────────────────────────────────────────────────────

@click.group("schedule")
def cmd_schedule():
    """Wochenplan (ein Eintrag pro Tag und Para)."""


def _resolve_teacher(app: App, username: Optional[str]) -> Optional[str]:
    """Username → ID; leerer String entfernt die Zuordnung."""
    if username is None:
        return None
    if not username.strip():
        return ""
    teacher = app.teachers.find_by_username(username)
    if teacher is None:
        console.print(f"[red]Unbekannter Username: {username}[/red]")
        sys.exit(1)
    return teacher.id


@cmd_schedule.command("list")
@click.option("--flat", is_flag=True, default=False, help="Liste statt Wochenraster.")
@pass_app
def schedule_list(app: App, flat: bool):
    """Zeigt den Wochenplan."""
    app.require()
    from export.helpers import teacher_label
    from export.tui_renderer import build_schedule_table
    from services.schedule import sort_lessons

    lessons = app.lessons.list_lessons()
    teachers = app.teachers.list_teachers()
    if not flat:
        console.print(build_schedule_table(lessons, teachers))
        return

    by_id = {t.id: t for t in teachers}
    table = Table(title="Darslar", box=box.ROUNDED)
    for col in ("ID", "Kun", "Para", "Surat", "Maxraj", "Xona", "O'qituvchi"):
        table.add_column(col)
    for l in sort_lessons(lessons):
        teachers_txt = " / ".join(x for x in (teacher_label(l.surat_teacher_id, by_id),
                                              teacher_label(l.maxraj_teacher_id, by_id)) if x)
        table.add_row(l.id, l.day, str(l.period), l.surat_subject,
                      l.maxraj_subject or "", l.room or "", teachers_txt)
    console.print(table)


@cmd_schedule.command("add")
@click.option("--day", type=click.Choice(DAY_OPTIONS), required=True)
@click.option("--period", type=click.Choice([str(p) for p in PERIOD_OPTIONS]), required=True)
@click.option("--subject", required=True, help="Surat-Fach")
@click.option("--maxraj", default=None, help="Maxraj-Fach (alternierend)")
@click.option("--room", default=None)
@click.option("--surat-teacher", default=None, help="Username")
@click.option("--maxraj-teacher", default=None, help="Username")
@pass_app
def schedule_add(app: App, day: str, period: str, subject: str, maxraj: Optional[str],
                 room: Optional[str], surat_teacher: Optional[str], maxraj_teacher: Optional[str]):
    """Belegt einen Slot; ein bereits belegter Slot wird überschrieben."""
    app.require(*ADMIN)
    from models.lesson import LessonInput
    try:
        # Nicht angegebene Optionen bleiben beim Überschreiben eines Slots erhalten
        data = LessonInput(
            day=day, period=int(period), surat_subject=subject, maxraj_subject=maxraj,
            **_patch_from(
                room=room,
                surat_teacher_id=_resolve_teacher(app, surat_teacher),
                maxraj_teacher_id=_resolve_teacher(app, maxraj_teacher),
            ),
        )
    except ValidationError as e:
        _abort_invalid(e)
    lesson = app.lessons.add_lesson(data)
    console.print(f"[green]✓[/green] {lesson.day} {lesson.period}. para: "
                  f"{lesson.surat_subject} — ID {lesson.id}")


@cmd_schedule.command("update")
@click.argument("lesson_id")
@click.option("--day", type=click.Choice(DAY_OPTIONS), default=None)
@click.option("--period", type=click.Choice([str(p) for p in PERIOD_OPTIONS]), default=None)
@click.option("--subject", default=None)
@click.option("--maxraj", default=None)
@click.option("--room", default=None)
@click.option("--surat-teacher", default=None)
@click.option("--maxraj-teacher", default=None)
@pass_app
def schedule_update(app: App, lesson_id: str, day, period, subject, maxraj, room,
                    surat_teacher, maxraj_teacher):
    """Ändert eine Stunde. Doppelbelegungen zeigt 'schedule check'."""
    app.require(*ADMIN)
    patch = _patch_from(
        day=day,
        period=int(period) if period else None,
        surat_subject=subject,
        maxraj_subject=maxraj,
        room=room,
        surat_teacher_id=_resolve_teacher(app, surat_teacher),
        maxraj_teacher_id=_resolve_teacher(app, maxraj_teacher),
    )
    try:
        patch = LessonPatch.model_validate(patch)
    except ValidationError as e:
        _abort_invalid(e)
    updated = app.lessons.update_lesson(lesson_id, patch)
    if updated is None:
        console.print(f"[yellow]Keine Stunde mit ID {lesson_id}.[/yellow]")
        sys.exit(1)
    console.print(f"[green]✓[/green] {updated.day} {updated.period}. para: {updated.surat_subject}")


@cmd_schedule.command("remove")
@click.argument("lesson_id")
@pass_app
def schedule_remove(app: App, lesson_id: str):
    """Entfernt eine Stunde."""
    app.require(*ADMIN)
    if app.lessons.remove_lesson(lesson_id):
        console.print("[green]✓[/green] Entfernt.")
    else:
        console.print("[dim]Nichts zu entfernen.[/dim]")


@cmd_schedule.command("check")
@pass_app
def schedule_check(app: App):
    """Meldet doppelt belegte Slots."""
    app.require()
    from services.schedule import find_slot_conflicts
    conflicts = find_slot_conflicts(app.lessons.list_lessons())
    if not conflicts:
        console.print("[green]✓ Keine Doppelbelegungen.[/green]")
        return
    for (day, period), items in sorted(conflicts.items()):
        subjects = ", ".join(f"{l.surat_subject} ({l.id})" for l in items)
        console.print(f"[red]• {day} {period}. para:[/red] {subjects}")
    sys.exit(1)


@cmd_schedule.command("export")
@click.option("--output", "-o", default="output/dars_jadvali.xlsx", show_default=True,
              help="Ziel (.xlsx oder .csv).")
@pass_app
def schedule_export(app: App, output: str):
    """Exportiert den Wochenplan als Excel oder CSV."""
    app.require()
    lessons = app.lessons.list_lessons()
    teachers = app.teachers.list_teachers()
    out_path = Path(output)
    if out_path.suffix.lower() == ".csv":
        from data.csv_io import write_csv_file
        from export.csv_export import schedule_rows
        write_csv_file(out_path, schedule_rows(lessons, teachers))
    else:
        from export.excel_export import ScheduleExcelExporter
        ScheduleExcelExporter(lessons, teachers, app.config.college_name).export(out_path)
    console.print(f"[green]✓[/green] Gespeichert: {out_path}")


@cmd_schedule.command("import")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@pass_app
def schedule_import(app: App, datei: Path):
    """Importiert Stunden aus CSV (belegte Slots werden überschrieben)."""
    app.require(*ADMIN)
    from data.csv_import import import_lessons
    from data.csv_io import read_csv_file
    report = import_lessons(read_csv_file(datei), app.lessons, app.teachers)
    report.print_rich("Dars jadvali-Import")


# ─── ATTENDANCE ───────────────────────────────────────────────────────────────

@click.group("attendance")
def cmd_attendance():
    """Anwesenheit pro Tag."""


_date_option = click.option(
    "--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
    help="Datum (YYYY-MM-DD), Standard: heute.")


def _iso(day) -> str:
    return (day.date() if day else date.today()).isoformat()


@cmd_attendance.command("mark")
@click.argument("student_id")
@click.argument("status", type=click.Choice([s.value for s in AttendanceStatus]))
@_date_option
@pass_app
def attendance_mark(app: App, student_id: str, status: str, day):
    """Markiert einen Studenten (present/absent/late)."""
    app.require(*STAFF)
    student = app.students.get_student(student_id)
    if student is None:
        console.print(f"[yellow]Kein Student mit ID {student_id}.[/yellow]")
        sys.exit(1)
    record = app.attendance.set_attendance(_iso(day), student_id, AttendanceStatus(status))
    console.print(f"[green]✓[/green] {student.full_name}: {record.status.label} ({record.date})")


@cmd_attendance.command("show")
@click.option("--group", "-g", required=True)
@_date_option
@pass_app
def attendance_show(app: App, group: str, day):
    """Anwesenheit einer Gruppe an einem Tag."""
    app.require()
    from models.attendance import UNMARKED_LABEL
    iso = _iso(day)
    students = app.students.list_group(group)
    statuses = app.attendance.status_map(iso)
    table = Table(title=f"Davomat {group} · {iso}", box=box.ROUNDED)
    for col in ("T/r", "F.I.Sh", "Holat"):
        table.add_column(col)
    for idx, s in enumerate(students, start=1):
        status = statuses.get(s.id)
        table.add_row(str(idx), s.full_name, status.label if status else UNMARKED_LABEL)
    console.print(table)
    summary = app.attendance.summarize(iso, students)
    console.print(f"Keldi: {summary.present} | Kelmedi: {summary.absent} | "
                  f"Kechikdi: {summary.late} | Belgilanmagan: {summary.unmarked}")


@cmd_attendance.command("export")
@click.option("--group", "-g", required=True)
@_date_option
@click.option("--output", "-o", default=None, help="Standard: output/davomat-<gruppe>-<datum>.csv")
@pass_app
def attendance_export(app: App, group: str, day, output: Optional[str]):
    """Exportiert die Anwesenheit einer Gruppe als CSV."""
    app.require()
    from data.csv_io import write_csv_file
    from export.csv_export import attendance_rows
    iso = _iso(day)
    rows = attendance_rows(app.students.list_students(), group, app.attendance.status_map(iso))
    path = write_csv_file(Path(output or f"output/davomat-{group}-{iso}.csv"), rows)
    console.print(f"[green]✓[/green] CSV gespeichert: {path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration (Standard: config/app_config.yaml).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool):
    """Texnikum ERP — Verwaltung von Lehrkräften, Studierenden, Stundenplan und Anwesenheit."""
    try:
        config = ConfigManager(config_path).load()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    _setup_logging(config, verbose)
    ctx.obj = App.build(config)


def main():
    cli()


# Befehle registrieren
cli.add_command(cmd_login)
cli.add_command(cmd_logout)
cli.add_command(cmd_whoami)
cli.add_command(cmd_dashboard)
cli.add_command(cmd_config)
cli.add_command(cmd_teacher)
cli.add_command(cmd_student)
cli.add_command(cmd_library)
cli.add_command(cmd_schedule)
cli.add_command(cmd_attendance)


if __name__ == "__main__":
    main()
