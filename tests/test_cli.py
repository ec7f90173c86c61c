"""CLI-Tests (click.testing.CliRunner) in einem isolierten Verzeichnis."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from config.manager import DATA_DIR_ENV
from main import cli
from storage.json_store import JsonFileStorage

ADMIN_LOGIN = ["login", "admin", "--role", "admin", "--password", "texnikum-admin-2025"]


@pytest.fixture
def runner(monkeypatch) -> CliRunner:
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    return CliRunner()


def _store() -> JsonFileStorage:
    return JsonFileStorage(Path("data_store"))


# ─── ALLGEMEIN ────────────────────────────────────────────────────────────────

class TestGeneral:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "schedule" in result.output
        assert "attendance" in result.output

    def test_whoami_guest(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["whoami"])
            assert result.exit_code == 0
            assert "guest" in result.output

    def test_invalid_config_file(self, runner):
        with runner.isolated_filesystem():
            Path("bad.yaml").write_text("logging:\n  level: LAUT\n", encoding="utf-8")
            result = runner.invoke(cli, ["--config", "bad.yaml", "whoami"])
            assert result.exit_code == 1

    def test_config_init(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["config", "init"])
            assert result.exit_code == 0
            assert Path("config/app_config.yaml").exists()
            again = runner.invoke(cli, ["config", "init"])
            assert "existiert bereits" in again.output


# ─── ANMELDUNG & ROLLEN ───────────────────────────────────────────────────────

class TestAuth:
    def test_guest_denied(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["teacher", "add", "--first", "Ali"])
            assert result.exit_code == 1
            assert not _store().exists("teachers")

    def test_wrong_admin_password(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["login", "admin", "--role", "admin",
                                         "--password", "falsch"])
            assert result.exit_code == 1
            assert "guest" in runner.invoke(cli, ["whoami"]).output

    def test_login_logout(self, runner):
        with runner.isolated_filesystem():
            assert runner.invoke(cli, ADMIN_LOGIN).exit_code == 0
            assert "admin (admin)" in runner.invoke(cli, ["whoami"]).output
            runner.invoke(cli, ["logout"])
            assert "guest" in runner.invoke(cli, ["whoami"]).output

    def test_teacher_login_with_generated_password(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            runner.invoke(cli, ["teacher", "add", "--first", "Ali", "--last", "Valiyev"])
            teacher = next(t for t in _store().load("teachers", []) if t["username"] == "ali")
            result = runner.invoke(cli, ["login", "ali", "--password", teacher["password"]])
            assert result.exit_code == 0
            denied = runner.invoke(cli, ["schedule", "add", "--day", "Pay",
                                         "--period", "2", "--subject", "X"])
            assert denied.exit_code == 1


# ─── LEHRKRÄFTE & STUDIERENDE ─────────────────────────────────────────────────

class TestPeople:
    def test_teacher_add_generates_username(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            result = runner.invoke(cli, ["teacher", "add", "--first", "Anvar", "--last", "Karimov"])
            assert result.exit_code == 0
            usernames = [t["username"] for t in _store().load("teachers", [])]
            assert usernames[0] == "anvar1"
            assert "anvar1" in result.output

    def test_teacher_export_import(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            assert runner.invoke(cli, ["teacher", "export", "-o", "t.csv"]).exit_code == 0
            result = runner.invoke(cli, ["teacher", "import", "t.csv"])
            assert result.exit_code == 0
            usernames = {t["username"] for t in _store().load("teachers", [])}
            assert usernames == {"anvar", "mohira", "anvar1", "mohira1"}

    def test_student_add_invalid_group(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            result = runner.invoke(cli, ["student", "add", "Aziz Karimov", "--course", "1-kurs",
                                         "--form", "Dual", "--program", "Avtomobil",
                                         "--group", "3-25"])
            assert result.exit_code == 1
            names = [s["fullName"] for s in _store().load("students", [])]
            assert "Aziz Karimov" not in names


# ─── STUNDENPLAN ──────────────────────────────────────────────────────────────

class TestSchedule:
    def test_add_into_seeded_slot_merges(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            result = runner.invoke(cli, ["schedule", "add", "--day", "Dush", "--period", "1",
                                         "--subject", "Fizika"])
            assert result.exit_code == 0
            lessons = _store().load("schedule-lessons", [])
            assert len(lessons) == 2
            l1 = next(l for l in lessons if l["id"] == "l1")
            assert l1["suratSubject"] == "Fizika"
            assert "maxrajSubject" not in l1
            assert l1["room"] == "A-101"

    def test_add_with_teacher(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            result = runner.invoke(cli, ["schedule", "add", "--day", "Jum", "--period", "4",
                                         "--subject", "Tarix", "--surat-teacher", "mohira"])
            assert result.exit_code == 0
            lesson = _store().load("schedule-lessons", [])[0]
            assert lesson["suratTeacherId"] == "t2"

    def test_unknown_teacher_username(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            result = runner.invoke(cli, ["schedule", "add", "--day", "Jum", "--period", "4",
                                         "--subject", "Tarix", "--surat-teacher", "nobody"])
            assert result.exit_code == 1

    def test_list_and_check(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            assert runner.invoke(cli, ["schedule", "list"]).exit_code == 0
            assert runner.invoke(cli, ["schedule", "list", "--flat"]).exit_code == 0
            assert runner.invoke(cli, ["schedule", "check"]).exit_code == 0

            runner.invoke(cli, ["schedule", "update", "l2", "--day", "Dush", "--period", "1"])
            result = runner.invoke(cli, ["schedule", "check"])
            assert result.exit_code == 1
            assert "Dush 1. para" in result.output

    def test_update_unknown(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            result = runner.invoke(cli, ["schedule", "update", "nope", "--room", "X"])
            assert result.exit_code == 1

    def test_remove(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            assert runner.invoke(cli, ["schedule", "remove", "l1"]).exit_code == 0
            assert runner.invoke(cli, ["schedule", "remove", "l1"]).exit_code == 0
            assert [l["id"] for l in _store().load("schedule-lessons", [])] == ["l2"]

    def test_export_xlsx_and_csv(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            assert runner.invoke(cli, ["schedule", "export", "-o", "out/j.xlsx"]).exit_code == 0
            assert Path("out/j.xlsx").exists()
            assert runner.invoke(cli, ["schedule", "export", "-o", "out/j.csv"]).exit_code == 0
            text = Path("out/j.csv").read_text(encoding="utf-8")
            assert text.splitlines()[1].startswith("Dush,1,08:30-09:50,Matematika,Tarix")

    def test_import_csv(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            Path("plan.csv").write_text(
                "Kun,Para,Surat,Xona\nPay,3,Kimyo,C-1\nYakshanba,1,X,\n", encoding="utf-8")
            result = runner.invoke(cli, ["schedule", "import", "plan.csv"])
            assert result.exit_code == 0
            subjects = {l["suratSubject"] for l in _store().load("schedule-lessons", [])}
            assert subjects == {"Matematika", "Dasturlash", "Kimyo"}


# ─── ANWESENHEIT ──────────────────────────────────────────────────────────────

class TestAttendance:
    def test_mark_show_export(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            result = runner.invoke(cli, ["attendance", "mark", "s1", "late",
                                         "--date", "2025-09-01"])
            assert result.exit_code == 0
            assert "Kechikdi" in result.output

            show = runner.invoke(cli, ["attendance", "show", "-g", "5-26",
                                       "--date", "2025-09-01"])
            assert "Kechikdi: 1" in show.output

            runner.invoke(cli, ["attendance", "export", "-g", "5-26",
                                "--date", "2025-09-01", "-o", "dav.csv"])
            assert "Mohira Qahhorova,5-26,Kechikdi" in Path("dav.csv").read_text(encoding="utf-8")

    def test_mark_unknown_student(self, runner):
        with runner.isolated_filesystem():
            runner.invoke(cli, ADMIN_LOGIN)
            result = runner.invoke(cli, ["attendance", "mark", "nope", "present"])
            assert result.exit_code == 1

    def test_guest_cannot_mark(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["attendance", "mark", "s1", "present"])
            assert result.exit_code == 1
