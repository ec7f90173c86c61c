"""Tests für Lehrkräfte, Studierende, Bibliothek, Anwesenheit und Anmeldung."""

import pytest
from pydantic import ValidationError

from config.schema import AuthConfig
from models import (
    AttendanceStatus,
    LibraryItemInput,
    StudentInput,
    TeacherInput,
    TeacherPatch,
    UserRole,
)
from services.attendance import ATTENDANCE_KEY, AttendanceService
from services.auth import AUTH_KEY, AuthService
from services.errors import AuthError, PermissionDenied
from services.library import LibraryService
from services.students import STUDENTS_KEY, StudentService
from services.teachers import TEACHERS_KEY, TeacherService, build_full_name
from storage.memory import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def empty_storage() -> MemoryStorage:
    s = MemoryStorage()
    s.save(TEACHERS_KEY, [])
    s.save(STUDENTS_KEY, [])
    return s


def _student(**overrides) -> StudentInput:
    data = dict(full_name="Aziz Karimov", course="1-kurs", education_form="Kunduzgi",
                program="Avtomobil", group="3-26")
    data.update(overrides)
    return StudentInput(**data)


# ─── LEHRKRÄFTE ───────────────────────────────────────────────────────────────

class TestTeacherService:
    def test_seed_gets_passwords(self, storage):
        auth = AuthConfig()
        teachers = TeacherService(storage, auth).list_teachers()
        assert [t.username for t in teachers] == ["anvar", "mohira"]
        for t in teachers:
            assert len(t.password) == auth.password_length
            assert set(t.password) <= set(auth.password_alphabet)

    def test_seed_passwords_stable_after_first_read(self, storage):
        service = TeacherService(storage)
        first = service.get_teacher_password("t1")
        assert service.get_teacher_password("t1") == first

    def test_create(self, empty_storage):
        service = TeacherService(empty_storage)
        created = service.create_teacher(TeacherInput(
            first_name=" Ali ", last_name="Valiyev", middle_name="Karimovich",
        ))
        assert created.username == "ali"
        assert created.full_name == "Ali Valiyev Karimovich"
        assert created.first_name == "Ali"
        assert service.list_teachers() == [created]

    def test_create_without_name_uses_username(self, empty_storage):
        created = TeacherService(empty_storage).create_teacher(TeacherInput(phone="+998"))
        assert created.username == "user"
        assert created.full_name == "user"

    def test_create_avoids_existing_usernames(self, storage):
        service = TeacherService(storage)
        created = service.create_teacher(TeacherInput(first_name="Anvar", last_name="Karimov"))
        assert created.username == "anvar1"
        assert service.list_teachers()[0].id == created.id

    def test_unknown_specialization_rejected(self):
        with pytest.raises(ValidationError):
            TeacherInput(first_name="Ali", specialization="Astrologiya")

    def test_update_name_keeps_own_username(self, empty_storage):
        service = TeacherService(empty_storage)
        created = service.create_teacher(TeacherInput(first_name="Ali", last_name="Valiyev"))
        updated = service.update_teacher(created.id, {"first_name": "Ali", "last_name": "Karimov"})
        assert updated.username == "ali"
        assert updated.full_name == "Ali Karimov"

    def test_update_name_regenerates_username(self, storage):
        service = TeacherService(storage)
        created = service.create_teacher(TeacherInput(first_name="Ali", last_name="Valiyev"))
        updated = service.update_teacher(created.id, TeacherPatch(first_name="Mohira"))
        assert updated.username == "mohira1"
        assert updated.password == created.password

    def test_update_without_name_keeps_username(self, empty_storage):
        service = TeacherService(empty_storage)
        created = service.create_teacher(TeacherInput(first_name="Ali"))
        updated = service.update_teacher(created.id, {"phone": "+998 99"})
        assert updated.username == "ali"
        assert updated.phone == "+998 99"

    def test_update_unknown(self, storage):
        assert TeacherService(storage).update_teacher("nope", {"phone": "1"}) is None

    def test_delete(self, storage):
        service = TeacherService(storage)
        assert service.delete_teacher("t1") is True
        assert service.delete_teacher("t1") is False
        assert [t.id for t in service.list_teachers()] == ["t2"]

    def test_authenticate(self, storage):
        service = TeacherService(storage)
        password = service.get_teacher_password("t2")
        assert service.authenticate_teacher(" MOHIRA ", password).id == "t2"
        assert service.authenticate_teacher("mohira", password + "x") is None
        assert service.authenticate_teacher("mohira", "Ғ") is None
        assert service.authenticate_teacher("nobody", password) is None

    def test_build_full_name(self):
        assert build_full_name("Anvar", None, " ") == "Anvar"
        assert build_full_name(None, None) == ""


# ─── STUDIERENDE ──────────────────────────────────────────────────────────────

class TestStudentService:
    def test_seed(self, storage):
        students = StudentService(storage).list_students()
        assert [s.id for s in students] == ["s1", "s2"]

    def test_create_and_list_group(self, empty_storage):
        service = StudentService(empty_storage)
        created = service.create_student(_student())
        service.create_student(_student(full_name="Bobur", group="4-26"))
        assert service.list_group("3-26") == [created]

    def test_group_must_match_course(self):
        with pytest.raises(ValidationError):
            _student(group="3-25")

    def test_group_requires_course(self):
        with pytest.raises(ValidationError):
            _student(course=None)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            _student(full_name="   ")

    def test_update(self, empty_storage):
        service = StudentService(empty_storage)
        created = service.create_student(_student())
        updated = service.update_student(created.id, {"course": "2-kurs", "group": "3-25"})
        assert updated.group == "3-25"
        assert service.get_student(created.id).course == "2-kurs"

    def test_update_invalid_combination(self, empty_storage):
        service = StudentService(empty_storage)
        created = service.create_student(_student())
        with pytest.raises(ValidationError):
            service.update_student(created.id, {"group": "3-25"})
        assert service.get_student(created.id).group == "3-26"

    def test_update_unknown(self, storage):
        assert StudentService(storage).update_student("nope", {"full_name": "X"}) is None

    def test_delete(self, storage):
        service = StudentService(storage)
        assert service.delete_student("s1") is True
        assert service.delete_student("s1") is False


# ─── BIBLIOTHEK ───────────────────────────────────────────────────────────────

class TestLibraryService:
    def test_seed_add_remove(self, storage):
        service = LibraryService(storage)
        assert len(service.list_library()) == 2
        item = service.add_library_item(LibraryItemInput(title=" Python ", url=""))
        assert item.title == "Python"
        assert item.url is None
        assert service.list_library()[0].id == item.id
        assert service.remove_library_item(item.id) is True
        assert len(service.list_library()) == 2

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            LibraryItemInput(title="  ")


# ─── ANWESENHEIT ──────────────────────────────────────────────────────────────

class TestAttendanceService:
    def test_upsert_per_day(self, storage):
        service = AttendanceService(storage)
        first = service.set_attendance("2025-09-01", "s1", AttendanceStatus.PRESENT)
        second = service.set_attendance("2025-09-01", "s1", "late")
        service.set_attendance("2025-09-02", "s1", AttendanceStatus.ABSENT)

        day = service.list_attendance("2025-09-01")
        assert len(day) == 1
        assert second.id == first.id
        assert day[0].status == AttendanceStatus.LATE
        assert service.status_map("2025-09-02") == {"s1": AttendanceStatus.ABSENT}
        assert len(storage.load(ATTENDANCE_KEY, [])) == 2

    def test_invalid_date(self, storage):
        with pytest.raises(ValidationError):
            AttendanceService(storage).set_attendance("01.09.2025", "s1", "present")

    def test_summary(self, storage):
        students = StudentService(storage).list_students()
        service = AttendanceService(storage)
        service.set_attendance("2025-09-01", "s1", AttendanceStatus.ABSENT)
        summary = service.summarize("2025-09-01", students)
        assert (summary.present, summary.absent, summary.late, summary.unmarked) == (0, 1, 0, 1)
        assert summary.total == len(students)

    def test_labels(self):
        assert AttendanceStatus.PRESENT.label == "Keldi"
        assert AttendanceStatus("absent").label == "Kelmedi"


# ─── ANMELDUNG ────────────────────────────────────────────────────────────────

class TestAuthService:
    @pytest.fixture
    def auth(self, storage) -> AuthService:
        return AuthService(storage, TeacherService(storage), AuthConfig(admin_password="geheim"))

    def test_default_guest(self, auth):
        session = auth.current()
        assert session.role == UserRole.GUEST
        assert session.is_guest

    def test_admin_login(self, auth, storage):
        session = auth.login(" admin ", UserRole.ADMIN, "geheim")
        assert session.user_name == "admin"
        assert auth.current().role == UserRole.ADMIN
        assert storage.load(AUTH_KEY, None) == {"role": "admin", "userName": "admin"}

    def test_admin_wrong_password(self, auth):
        with pytest.raises(AuthError):
            auth.login("admin", "admin", "falsch")
        assert auth.current().is_guest

    def test_blank_username(self, auth):
        with pytest.raises(AuthError):
            auth.login("  ", UserRole.STUDENT)

    def test_teacher_login(self, auth):
        password = auth.teachers.get_teacher_password("t1")
        assert auth.login("anvar", UserRole.TEACHER, password).role == UserRole.TEACHER
        with pytest.raises(AuthError):
            auth.login("anvar", UserRole.TEACHER, "falsch")

    def test_logout(self, auth):
        auth.login("Ali", UserRole.STUDENT)
        auth.logout()
        assert auth.current().is_guest

    def test_require_role(self, auth):
        with pytest.raises(PermissionDenied):
            auth.require_login()
        auth.login("Ali", UserRole.STUDENT)
        assert auth.require_login().user_name == "Ali"
        with pytest.raises(PermissionDenied):
            auth.require_role(UserRole.ADMIN)

    def test_corrupt_session_is_guest(self, auth, storage):
        storage.put_raw(AUTH_KEY, "{kaputt")
        assert auth.current().is_guest
        storage.save(AUTH_KEY, {"role": "superuser"})
        assert auth.current().is_guest
