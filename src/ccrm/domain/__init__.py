"""Domain - Entity model for students, instructors, courses and enrollments."""

from ccrm.domain.exceptions import DomainError, ValidationError
from ccrm.domain.models import (
    GRADE_POINTS,
    Course,
    CourseCode,
    CourseOptions,
    Enrollment,
    Grade,
    Instructor,
    Person,
    Semester,
    Student,
    profile,
)

__all__ = [
    "GRADE_POINTS",
    "Course",
    "CourseCode",
    "CourseOptions",
    "DomainError",
    "Enrollment",
    "Grade",
    "Instructor",
    "Person",
    "Semester",
    "Student",
    "ValidationError",
    "profile",
]
