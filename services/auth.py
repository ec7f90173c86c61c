"""Anmeldung und Rollenprüfung.

Die Sitzung liegt unter dem Schlüssel "auth" im Speicher; fehlt sie oder
ist sie unlesbar, gilt die Rolle "guest".
"""

import logging
import secrets
from typing import Optional

from pydantic import ValidationError

from config.schema import AuthConfig
from models.session import Session, UserRole
from services.errors import AuthError, PermissionDenied
from services.teachers import TeacherService
from storage.base import StoragePort

logger = logging.getLogger(__name__)

AUTH_KEY = "auth"


class AuthService:
    def __init__(self, storage: StoragePort, teachers: TeacherService,
                 config: Optional[AuthConfig] = None):
        self.storage = storage
        self.teachers = teachers
        self.config = config or AuthConfig()

    def current(self) -> Session:
        raw = self.storage.load(AUTH_KEY, None)
        if raw is None:
            return Session()
        try:
            return Session.model_validate(raw)
        except ValidationError:
            logger.warning("Gespeicherte Sitzung ungültig, falle auf 'guest' zurück")
            return Session()

    def _store(self, session: Session) -> Session:
        self.storage.save(AUTH_KEY, session.to_storage())
        return session

    def login(self, user_name: str, role: UserRole, password: str = "") -> Session:
        """Admin braucht das konfigurierte Passwort, Lehrkräfte ihr eigenes."""
        user_name = user_name.strip()
        role = UserRole(role)
        if not user_name:
            raise AuthError("Username darf nicht leer sein.")

        if role == UserRole.ADMIN:
            if not secrets.compare_digest(
                password.encode("utf-8"), self.config.admin_password.encode("utf-8")
            ):
                raise AuthError("Admin-Passwort ist falsch.")
        elif role == UserRole.TEACHER:
            if self.teachers.authenticate_teacher(user_name, password) is None:
                raise AuthError("Username oder Passwort ist falsch.")

        logger.info(f"Angemeldet: {user_name} ({role.value})")
        return self._store(Session(role=role, user_name=user_name))

    def logout(self) -> Session:
        return self._store(Session())

    def require_role(self, *allowed: UserRole) -> Session:
        session = self.current()
        if session.role not in allowed:
            names = ", ".join(r.value for r in allowed)
            raise PermissionDenied(
                f"Rolle '{session.role.value}' darf das nicht (erlaubt: {names})."
            )
        return session

    def require_login(self) -> Session:
        return self.require_role(UserRole.ADMIN, UserRole.TEACHER, UserRole.STUDENT)
