"""Records Service - Student, course and instructor records with load/save and search."""

from ccrm.registry.exceptions import (
    CourseExistsError,
    CourseNotFoundError,
    InstructorExistsError,
    InstructorNotFoundError,
    RegistryError,
    StudentExistsError,
    StudentNotFoundError,
)
from ccrm.registry.service import UNASSIGNED_INSTRUCTOR_NAME, RecordsService

__all__ = [
    "UNASSIGNED_INSTRUCTOR_NAME",
    "CourseExistsError",
    "CourseNotFoundError",
    "InstructorExistsError",
    "InstructorNotFoundError",
    "RecordsService",
    "RegistryError",
    "StudentExistsError",
    "StudentNotFoundError",
]
