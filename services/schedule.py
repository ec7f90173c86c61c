"""Wochenplan: Normalisierung gespeicherter Stunden und Slot-Verwaltung.

Invariante: jeder Slot (day, period) ist höchstens einmal belegt.
add_lesson() in einen belegten Slot überschreibt den vorhandenen Eintrag
(die ID bleibt erhalten) statt ein Duplikat anzulegen.

update_lesson() prüft die Invariante NICHT erneut; find_slot_conflicts()
macht solche Doppelbelegungen sichtbar.
"""

import logging
import math
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import ValidationError

from config.defaults import DAY_OPTIONS, PERIOD_BY_TIME, PERIOD_OPTIONS, SEED_LESSONS
from models.lesson import Lesson, LessonInput, LessonPatch
from services.collection import load_raw, new_id, save_models
from storage.base import StoragePort

logger = logging.getLogger(__name__)

LESSONS_KEY = "schedule-lessons"

DAY_INDEX: dict[str, int] = {day: i for i, day in enumerate(DAY_OPTIONS)}


# ─── Normalisierung ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Valid:
    lesson: Lesson


@dataclass(frozen=True)
class Rejected:
    reason: str


ParseResult = Union[Valid, Rejected]


def _text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _to_number(value: Any) -> Optional[float]:
    # bool ist in Python ein int, zählt hier aber nicht als Zahl
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, str) and value.strip():
        try:
            return float(value)
        except ValueError:
            return None
    return None


def resolve_period(raw: Mapping) -> int:
    """period-Feld → Legacy-"time"-Feld ("10:00-11:20") → Para 1."""
    numeric = _to_number(raw.get("period"))
    if numeric is not None and numeric in PERIOD_OPTIONS:
        return int(numeric)
    time = raw.get("time")
    if isinstance(time, str) and time.strip() in PERIOD_BY_TIME:
        return PERIOD_BY_TIME[time.strip()]
    return PERIOD_OPTIONS[0]


def parse_lesson(raw: Any) -> ParseResult:
    """Wandelt einen locker typisierten Datensatz in eine kanonische Stunde.

    Fehlende oder unbekannte Werte bekommen Defaults (neue ID, erster Tag,
    Para 1); nur ein fehlendes Surat-Fach verwirft den Datensatz.
    """
    if not isinstance(raw, Mapping):
        return Rejected(f"Kein Datensatz: {type(raw).__name__}")

    value = raw.get("suratSubject")
    if value is None:
        value = raw.get("subject")
    subject = _text(value)
    if subject is None:
        return Rejected("Surat-Fach fehlt oder ist leer")

    raw_id = raw.get("id")
    lesson_id = raw_id if isinstance(raw_id, str) and raw_id.strip() else new_id()
    day = raw.get("day")
    if not isinstance(day, str) or day not in DAY_OPTIONS:
        day = DAY_OPTIONS[0]

    lesson = Lesson(
        id=lesson_id,
        day=day,
        period=resolve_period(raw),
        surat_subject=subject,
        maxraj_subject=_text(raw.get("maxrajSubject")),
        room=_text(raw.get("room")),
        surat_teacher_id=_text(raw.get("suratTeacherId")),
        maxraj_teacher_id=_text(raw.get("maxrajTeacherId")),
    )
    return Valid(lesson)


def normalize_lesson(raw: Any) -> Optional[Lesson]:
    result = parse_lesson(raw)
    return result.lesson if isinstance(result, Valid) else None


# ─── Sortierung & Konflikte ───────────────────────────────────────────────────

def sort_lessons(lessons: list[Lesson]) -> list[Lesson]:
    """Stabil nach Tag (kanonische Reihenfolge), dann Para aufsteigend."""
    return sorted(lessons, key=lambda l: (DAY_INDEX.get(l.day, len(DAY_OPTIONS)), l.period))


def find_slot_conflicts(lessons: list[Lesson]) -> dict[tuple[str, int], list[Lesson]]:
    """Slots, die mehrfach belegt sind (nur über update_lesson möglich)."""
    by_slot: dict[tuple[str, int], list[Lesson]] = defaultdict(list)
    for lesson in lessons:
        by_slot[lesson.slot].append(lesson)
    return {slot: items for slot, items in by_slot.items() if len(items) > 1}


# ─── Store ────────────────────────────────────────────────────────────────────

class LessonStore:
    """Lese-Ändere-Schreibe-Zyklen über die komplette Stundensammlung."""

    def __init__(self, storage: StoragePort):
        self.storage = storage

    def list_lessons(self) -> list[Lesson]:
        """Normalisiert alle Einträge, verwirft ungültige und speichert das Ergebnis zurück."""
        lessons: list[Lesson] = []
        rejected = 0
        for raw in load_raw(self.storage, LESSONS_KEY, SEED_LESSONS):
            result = parse_lesson(raw)
            if isinstance(result, Valid):
                lessons.append(result.lesson)
            else:
                rejected += 1
                logger.info(f"Stunde verworfen: {result.reason}")
        if rejected:
            logger.warning(f"{rejected} ungültige Stunde(n) beim Laden entfernt")
        save_models(self.storage, LESSONS_KEY, lessons)
        return lessons

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        return next((l for l in self.list_lessons() if l.id == lesson_id), None)

    def add_lesson(self, data: LessonInput) -> Lesson:
        """Legt eine Stunde an oder überschreibt die Stunde im selben Slot."""
        lessons = self.list_lessons()
        idx = next((i for i, l in enumerate(lessons) if l.slot == data.slot), None)

        if idx is not None:
            existing = lessons[idx]
            changes = data.model_dump(exclude_unset=True)
            # Maxraj wird immer übernommen, auch wenn es leer ist
            changes["maxraj_subject"] = data.maxraj_subject
            updated = existing.model_copy(update=changes)
            lessons[idx] = updated
            save_models(self.storage, LESSONS_KEY, lessons)
            logger.info(f"Slot {existing.day}/{existing.period} überschrieben (ID {existing.id})")
            return updated

        created = Lesson(id=new_id(), **data.model_dump())
        save_models(self.storage, LESSONS_KEY, [created, *lessons])
        logger.info(f"Stunde angelegt: {created.day}/{created.period} {created.surat_subject}")
        return created

    def update_lesson(self, lesson_id: str,
                      patch: Union[LessonPatch, Mapping]) -> Optional[Lesson]:
        """Übernimmt gesetzte Felder; None wenn die ID unbekannt oder der Patch ungültig ist."""
        if not isinstance(patch, LessonPatch):
            try:
                patch = LessonPatch.model_validate(patch)
            except ValidationError as e:
                logger.warning(f"Ungültige Änderung an Stunde {lesson_id}: {e.error_count()} Fehler")
                return None

        lessons = self.list_lessons()
        idx = next((i for i, l in enumerate(lessons) if l.id == lesson_id), None)
        if idx is None:
            return None

        changes = patch.model_dump(exclude_unset=True)
        for field in ("surat_subject", "day", "period"):
            if changes.get(field) is None:
                changes.pop(field, None)

        updated = lessons[idx].model_copy(update=changes)
        lessons[idx] = updated
        save_models(self.storage, LESSONS_KEY, lessons)
        return updated

    def remove_lesson(self, lesson_id: str) -> bool:
        """Entfernt die Stunde; unbekannte IDs sind kein Fehler."""
        lessons = self.list_lessons()
        left = [l for l in lessons if l.id != lesson_id]
        save_models(self.storage, LESSONS_KEY, left)
        return len(left) != len(lessons)
