"""Lehrkräfte: Anlegen mit generiertem Username/Passwort, Bearbeiten, Login-Prüfung."""

import logging
import secrets
from collections.abc import Mapping
from typing import Optional, Union

from config.defaults import SEED_TEACHERS
from config.schema import AuthConfig
from models.teacher import Teacher, TeacherInput, TeacherPatch
from services.collection import load_models, new_id, save_models
from services.usernames import generate_username
from storage.base import StoragePort

logger = logging.getLogger(__name__)

TEACHERS_KEY = "teachers"


def build_full_name(first_name: Optional[str], last_name: Optional[str],
                    middle_name: Optional[str] = None) -> str:
    """'Anvar', 'Aliyev', 'Karimovich' → 'Anvar Aliyev Karimovich'."""
    parts = [p.strip() for p in (first_name, last_name, middle_name) if p and p.strip()]
    return " ".join(parts)


class TeacherService:
    def __init__(self, storage: StoragePort, auth: Optional[AuthConfig] = None):
        self.storage = storage
        self.auth = auth or AuthConfig()

    def generate_password(self) -> str:
        alphabet = self.auth.password_alphabet
        return "".join(secrets.choice(alphabet) for _ in range(self.auth.password_length))

    # ─── Lesen ───

    def list_teachers(self) -> list[Teacher]:
        seed = [dict(t, password=self.generate_password()) for t in SEED_TEACHERS]
        return load_models(self.storage, TEACHERS_KEY, Teacher, seed)

    def get_teacher(self, teacher_id: str) -> Optional[Teacher]:
        return next((t for t in self.list_teachers() if t.id == teacher_id), None)

    def find_by_username(self, username: str) -> Optional[Teacher]:
        norm = username.strip().lower()
        return next((t for t in self.list_teachers() if t.username.strip().lower() == norm), None)

    # ─── Schreiben ───

    def create_teacher(self, data: TeacherInput) -> Teacher:
        """Neue Lehrkraft vorne einfügen; Username wird gegen den aktuellen Bestand geprüft."""
        teachers = self.list_teachers()
        username = generate_username(
            data.first_name or "", data.last_name or "", data.middle_name,
            existing={t.id: t.username for t in teachers},
        )
        full_name = build_full_name(data.first_name, data.last_name, data.middle_name)
        created = Teacher(
            **data.model_dump(),
            id=new_id(),
            full_name=full_name or username,
            username=username,
            password=self.generate_password(),
        )
        save_models(self.storage, TEACHERS_KEY, [created, *teachers])
        logger.info(f"Lehrkraft angelegt: {created.full_name} ({created.username})")
        return created

    def update_teacher(self, teacher_id: str,
                       patch: Union[TeacherPatch, Mapping]) -> Optional[Teacher]:
        """Bei Namensänderung werden voller Name und Username neu gebildet."""
        if not isinstance(patch, TeacherPatch):
            patch = TeacherPatch.model_validate(patch)

        teachers = self.list_teachers()
        idx = next((i for i, t in enumerate(teachers) if t.id == teacher_id), None)
        if idx is None:
            return None

        current = teachers[idx]
        updated = current.model_copy(update=patch.model_dump(exclude_unset=True))

        if patch.touches_name:
            full_name = build_full_name(updated.first_name, updated.last_name, updated.middle_name)
            username = generate_username(
                updated.first_name or "", updated.last_name or "", updated.middle_name,
                existing={t.id: t.username for t in teachers},
                exclude_id=teacher_id,
            )
            updated = updated.model_copy(update={
                "full_name": full_name or current.full_name,
                "username": username,
            })

        teachers[idx] = updated
        save_models(self.storage, TEACHERS_KEY, teachers)
        return updated

    def delete_teacher(self, teacher_id: str) -> bool:
        teachers = self.list_teachers()
        left = [t for t in teachers if t.id != teacher_id]
        save_models(self.storage, TEACHERS_KEY, left)
        return len(left) != len(teachers)

    # ─── Zugang ───

    def get_teacher_password(self, teacher_id: str) -> Optional[str]:
        teacher = self.get_teacher(teacher_id)
        return teacher.password if teacher else None

    def authenticate_teacher(self, username: str, password: str) -> Optional[Teacher]:
        teacher = self.find_by_username(username)
        if teacher is not None and secrets.compare_digest(
            teacher.password.encode("utf-8"), password.encode("utf-8")
        ):
            return teacher
        return None
