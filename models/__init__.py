from models.lesson import Lesson, LessonInput, LessonPatch
from models.teacher import Teacher, TeacherInput, TeacherPatch
from models.student import Student, StudentInput, StudentPatch
from models.library import LibraryItem, LibraryItemInput
from models.attendance import AttendanceRecord, AttendanceStatus
from models.session import Session, UserRole

__all__ = [
    "Lesson",
    "LessonInput",
    "LessonPatch",
    "Teacher",
    "TeacherInput",
    "TeacherPatch",
    "Student",
    "StudentInput",
    "StudentPatch",
    "LibraryItem",
    "LibraryItemInput",
    "AttendanceRecord",
    "AttendanceStatus",
    "Session",
    "UserRole",
]
