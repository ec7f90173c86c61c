"""Studierende: CRUD über die Sammlung "students"."""

import logging
from collections.abc import Mapping
from typing import Optional, Union

from config.defaults import SEED_STUDENTS
from models.student import Student, StudentInput, StudentPatch
from services.collection import load_models, new_id, save_models
from storage.base import StoragePort

logger = logging.getLogger(__name__)

STUDENTS_KEY = "students"


class StudentService:
    def __init__(self, storage: StoragePort):
        self.storage = storage

    def list_students(self) -> list[Student]:
        return load_models(self.storage, STUDENTS_KEY, Student, SEED_STUDENTS)

    def list_group(self, group: str) -> list[Student]:
        return [s for s in self.list_students() if s.group == group]

    def get_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.list_students() if s.id == student_id), None)

    def create_student(self, data: StudentInput) -> Student:
        students = self.list_students()
        created = Student(**data.model_dump(), id=new_id())
        save_models(self.storage, STUDENTS_KEY, [created, *students])
        logger.info(f"Student angelegt: {created.full_name} ({created.group or '—'})")
        return created

    def update_student(self, student_id: str,
                       patch: Union[StudentPatch, Mapping]) -> Optional[Student]:
        """None wenn die ID unbekannt ist; das Ergebnis wird komplett neu validiert."""
        if not isinstance(patch, StudentPatch):
            patch = StudentPatch.model_validate(patch)

        students = self.list_students()
        idx = next((i for i, s in enumerate(students) if s.id == student_id), None)
        if idx is None:
            return None

        merged = {**students[idx].model_dump(), **patch.model_dump(exclude_unset=True)}
        updated = Student.model_validate(merged)
        students[idx] = updated
        save_models(self.storage, STUDENTS_KEY, students)
        return updated

    def delete_student(self, student_id: str) -> bool:
        students = self.list_students()
        left = [s for s in students if s.id != student_id]
        save_models(self.storage, STUDENTS_KEY, left)
        return len(left) != len(students)
