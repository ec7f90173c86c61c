"""Tests für Normalisierung und Slot-Verwaltung des Wochenplans."""

import pytest

from models.lesson import LessonInput, LessonPatch
from services.schedule import (
    LESSONS_KEY,
    LessonStore,
    Rejected,
    Valid,
    find_slot_conflicts,
    normalize_lesson,
    parse_lesson,
    sort_lessons,
)
from storage.memory import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    s = MemoryStorage()
    s.save(LESSONS_KEY, [])
    return s


@pytest.fixture
def store(storage) -> LessonStore:
    return LessonStore(storage)


def _input(day="Dush", period=1, subject="Matematika", **extra) -> LessonInput:
    return LessonInput(day=day, period=period, surat_subject=subject, **extra)


# ─── NORMALISIERUNG ───────────────────────────────────────────────────────────

class TestNormalize:
    def test_legacy_subject_and_string_period(self):
        lesson = normalize_lesson({"subject": "Fizika", "period": "2"})
        assert lesson is not None
        assert lesson.surat_subject == "Fizika"
        assert lesson.period == 2

    def test_huge_int_period_falls_back(self):
        """Riesige Ganzzahl ist keine gültige Para und bricht nichts ab."""
        assert normalize_lesson({"subject": "Fizika", "period": 10**400}).period == 1
        lesson = normalize_lesson({"subject": "Fizika", "period": 10**400, "time": "10:00-11:20"})
        assert lesson.period == 2

    def test_blank_subject_rejected(self):
        assert normalize_lesson({"suratSubject": "  ", "period": 1, "day": "Dush"}) is None

    def test_blank_surat_subject_does_not_fall_back(self):
        """Ein leeres suratSubject wird nicht durch subject ersetzt."""
        assert normalize_lesson({"suratSubject": "", "subject": "Fizika"}) is None

    def test_null_surat_subject_falls_back(self):
        lesson = normalize_lesson({"suratSubject": None, "subject": "Kimyo"})
        assert lesson.surat_subject == "Kimyo"

    def test_rejected_carries_reason(self):
        result = parse_lesson({"period": 1})
        assert isinstance(result, Rejected)
        assert "Surat" in result.reason

    def test_non_mapping_rejected(self):
        assert isinstance(parse_lesson(None), Rejected)
        assert isinstance(parse_lesson(["Fizika"]), Rejected)

    def test_valid_result(self):
        result = parse_lesson({"suratSubject": "Tarix", "day": "Pay", "period": 4})
        assert isinstance(result, Valid)
        assert result.lesson.day == "Pay"
        assert result.lesson.period == 4

    def test_defaults_for_unknown_day_and_period(self):
        lesson = normalize_lesson({"subject": "X", "day": "Yak", "period": 9})
        assert lesson.day == "Dush"
        assert lesson.period == 1

    def test_legacy_time_field(self):
        lesson = normalize_lesson({"subject": "X", "time": "11:30-12:50"})
        assert lesson.period == 3

    def test_period_field_wins_over_time(self):
        lesson = normalize_lesson({"subject": "X", "period": 5, "time": "11:30-12:50"})
        assert lesson.period == 5

    def test_bool_period_is_not_a_number(self):
        lesson = normalize_lesson({"subject": "X", "period": True, "time": "10:00-11:20"})
        assert lesson.period == 2

    def test_float_period(self):
        assert normalize_lesson({"subject": "X", "period": "6.0"}).period == 6
        assert normalize_lesson({"subject": "X", "period": 2.5}).period == 1

    def test_id_kept_or_generated(self):
        assert normalize_lesson({"id": "abc", "subject": "X"}).id == "abc"
        generated = normalize_lesson({"id": "  ", "subject": "X"}).id
        assert generated and generated.strip()

    def test_optional_fields_trimmed(self):
        lesson = normalize_lesson({
            "suratSubject": " Matematika ", "maxrajSubject": " Tarix ",
            "room": "   ", "suratTeacherId": " t1 ", "maxrajTeacherId": 42,
        })
        assert lesson.surat_subject == "Matematika"
        assert lesson.maxraj_subject == "Tarix"
        assert lesson.room is None
        assert lesson.surat_teacher_id == "t1"
        assert lesson.maxraj_teacher_id is None


# ─── LADEN ────────────────────────────────────────────────────────────────────

class TestListLessons:
    def test_seed_when_nothing_stored(self):
        storage = MemoryStorage()
        lessons = LessonStore(storage).list_lessons()
        assert [l.id for l in lessons] == ["l1", "l2"]
        assert storage.exists(LESSONS_KEY)

    def test_corrupt_storage_falls_back_to_seed(self):
        storage = MemoryStorage()
        storage.put_raw(LESSONS_KEY, "{kaputt")
        lessons = LessonStore(storage).list_lessons()
        assert len(lessons) == 2

    def test_self_healing_migration(self, storage, store):
        """Legacy-Felder werden beim Lesen in die kanonische Form zurückgeschrieben."""
        storage.save(LESSONS_KEY, [
            {"id": "a", "subject": "Fizika", "time": "14:30-15:50", "day": "Jum"},
            {"id": "b", "suratSubject": ""},
            "kein Datensatz",
        ])
        lessons = store.list_lessons()
        assert len(lessons) == 1
        stored = storage.load(LESSONS_KEY, None)
        assert stored == [{"id": "a", "day": "Jum", "period": 5, "suratSubject": "Fizika"}]

    def test_returns_fresh_list(self, store):
        first = store.list_lessons()
        first.append("x")
        assert store.list_lessons() == []


# ─── HINZUFÜGEN ───────────────────────────────────────────────────────────────

class TestAddLesson:
    def test_add_creates_with_id(self, store):
        lesson = store.add_lesson(_input())
        assert lesson.id
        assert store.list_lessons() == [lesson]

    def test_new_lesson_prepended(self, store):
        store.add_lesson(_input(day="Dush"))
        second = store.add_lesson(_input(day="Sesh"))
        assert store.list_lessons()[0].id == second.id

    def test_same_slot_merges(self, store):
        """Zweimal derselbe Slot → genau ein Eintrag mit den Feldern des zweiten Aufrufs."""
        first = store.add_lesson(_input(subject="Matematika"))
        second = store.add_lesson(_input(subject="Fizika"))
        lessons = store.list_lessons()
        assert len(lessons) == 1
        assert second.id == first.id
        assert lessons[0].surat_subject == "Fizika"

    def test_merge_keeps_unset_fields_but_replaces_maxraj(self, store):
        store.add_lesson(_input(maxraj_subject="Tarix", room="A-101"))
        merged = store.add_lesson(_input(subject="Fizika"))
        assert merged.room == "A-101"
        assert merged.maxraj_subject is None

    def test_slot_invariant_after_many_adds(self, store):
        for subject in ("A", "B", "C"):
            for day in ("Dush", "Sesh"):
                store.add_lesson(_input(day=day, period=2, subject=subject))
        lessons = store.list_lessons()
        assert len(lessons) == 2
        assert not find_slot_conflicts(lessons)


# ─── ÄNDERN & LÖSCHEN ─────────────────────────────────────────────────────────

class TestUpdateRemove:
    def test_update_unknown_id(self, store):
        store.add_lesson(_input())
        assert store.update_lesson("gibt-es-nicht", {"surat_subject": "X"}) is None
        assert len(store.list_lessons()) == 1

    def test_update_keeps_subject_when_omitted(self, store):
        lesson = store.add_lesson(_input(subject="Kimyo"))
        updated = store.update_lesson(lesson.id, LessonPatch(room="B-2"))
        assert updated.surat_subject == "Kimyo"
        assert updated.room == "B-2"
        assert updated.id == lesson.id

    def test_update_blank_subject_keeps_previous(self, store):
        lesson = store.add_lesson(_input(subject="Kimyo"))
        updated = store.update_lesson(lesson.id, {"surat_subject": "   "})
        assert updated.surat_subject == "Kimyo"

    def test_update_can_clear_optional(self, store):
        lesson = store.add_lesson(_input(maxraj_subject="Tarix"))
        updated = store.update_lesson(lesson.id, {"maxraj_subject": ""})
        assert updated.maxraj_subject is None

    def test_update_does_not_enforce_slot_uniqueness(self, store):
        """Bekannte Lücke: update kann einen Slot doppelt belegen."""
        store.add_lesson(_input(day="Dush", period=1, subject="A"))
        other = store.add_lesson(_input(day="Sesh", period=1, subject="B"))
        store.update_lesson(other.id, {"day": "Dush"})
        conflicts = find_slot_conflicts(store.list_lessons())
        assert list(conflicts) == [("Dush", 1)]
        assert len(conflicts[("Dush", 1)]) == 2

    def test_update_invalid_day_returns_none(self, store, storage):
        """Ungültiger Tag im Patch → None, gespeicherte Daten unverändert."""
        lesson = store.add_lesson(_input())
        before = storage.load(LESSONS_KEY, None)
        assert store.update_lesson(lesson.id, {"day": "Yak"}) is None
        assert storage.load(LESSONS_KEY, None) == before

    def test_remove(self, store):
        lesson = store.add_lesson(_input())
        assert store.remove_lesson(lesson.id) is True
        assert store.list_lessons() == []

    def test_remove_absent_is_noop(self, store):
        store.add_lesson(_input())
        assert store.remove_lesson("nope") is False
        assert len(store.list_lessons()) == 1


# ─── SORTIERUNG ───────────────────────────────────────────────────────────────

class TestSortLessons:
    def test_day_then_period(self, store):
        for day, period in [("Shan", 1), ("Dush", 3), ("Chor", 2), ("Dush", 1)]:
            store.add_lesson(_input(day=day, period=period, subject=f"{day}{period}"))
        ordered = sort_lessons(store.list_lessons())
        assert [(l.day, l.period) for l in ordered] == [
            ("Dush", 1), ("Dush", 3), ("Chor", 2), ("Shan", 1),
        ]

    def test_stable_for_equal_slots(self):
        a = normalize_lesson({"id": "a", "subject": "A", "day": "Pay", "period": 2})
        b = normalize_lesson({"id": "b", "subject": "B", "day": "Pay", "period": 2})
        assert [l.id for l in sort_lessons([b, a])] == ["b", "a"]
