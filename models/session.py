"""Angemeldete Rolle (persistiert unter dem Schlüssel "auth")."""

from enum import Enum
from typing import Optional

from models.base import StoredModel


class UserRole(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
    GUEST = "guest"


class Session(StoredModel):
    role: UserRole = UserRole.GUEST
    user_name: Optional[str] = None

    @property
    def is_guest(self) -> bool:
        return self.role == UserRole.GUEST
