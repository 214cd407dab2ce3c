"""Entity model for CCRM.

Students and instructors are the two kinds of person; courses are keyed by a
``CourseCode`` and enrollments tie one student to one course.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any

from ccrm.domain.exceptions import ValidationError

MIN_COURSE_NUMBER = 100
MAX_COURSE_NUMBER = 999
DEFAULT_CREDITS = 3

_DEPARTMENT_PATTERN = re.compile(r"[A-Za-z]+")
_COURSE_CODE_PATTERN = re.compile(r"([A-Za-z]+)([0-9]+)")


class Semester(StrEnum):
    """Academic term a course runs in."""

    SPRING = "SPRING"
    SUMMER = "SUMMER"
    FALL = "FALL"
    WINTER = "WINTER"

    @classmethod
    def parse(cls, value: str) -> Semester:
        """Parse a semester name, ignoring case.

        Raises:
            ValidationError: If the name is not a known semester.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError as e:
            raise ValidationError(f"Unknown semester '{value}'") from e


class Grade(StrEnum):
    """Letter grade with an associated grade point."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    NOT_GRADED = "NOT_GRADED"

    @property
    def grade_point(self) -> float:
        return GRADE_POINTS[self]

    @property
    def is_graded(self) -> bool:
        return self is not Grade.NOT_GRADED

    @classmethod
    def parse(cls, value: str) -> Grade:
        """Parse a grade name, ignoring case.

        Raises:
            ValidationError: If the name is not a known grade.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError as e:
            raise ValidationError(f"Unknown grade '{value}'") from e


GRADE_POINTS: dict[Grade, float] = {
    Grade.S: 10.0,
    Grade.A: 9.0,
    Grade.B: 8.0,
    Grade.C: 7.0,
    Grade.D: 6.0,
    Grade.E: 5.0,
    Grade.F: 0.0,
    Grade.NOT_GRADED: -1.0,
}


@dataclass(frozen=True, order=True)
class CourseCode:
    """Course identifier made of department letters and a course number.

    Attributes:
        department: Department letters, e.g. "CS".
        number: Course number between 100 and 999 inclusive.
    """

    department: str
    number: int

    def __post_init__(self) -> None:
        if not isinstance(self.department, str) or not self.department.strip():
            raise ValidationError("Department cannot be blank")
        if not _DEPARTMENT_PATTERN.fullmatch(self.department):
            raise ValidationError(f"Department must contain only letters, got '{self.department}'")
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise ValidationError(f"Course number must be an integer, got {self.number!r}")
        if not MIN_COURSE_NUMBER <= self.number <= MAX_COURSE_NUMBER:
            raise ValidationError(
                f"Course number must be between {MIN_COURSE_NUMBER} and "
                f"{MAX_COURSE_NUMBER}, got {self.number}"
            )

    def __str__(self) -> str:
        return f"{self.department}{self.number}"

    @classmethod
    def parse(cls, text: str) -> CourseCode:
        """Parse the string form, e.g. "CS101".

        The department is upper-cased, so "cs101" and "CS101" are the same code.

        Raises:
            ValidationError: If the text is not letters followed by digits,
                or the parts are out of range.
        """
        match = _COURSE_CODE_PATTERN.fullmatch(text.strip())
        if match is None:
            raise ValidationError(f"Malformed course code '{text}'")
        return cls(match.group(1).upper(), int(match.group(2)))


@dataclass
class Instructor:
    """Teaching staff member affiliated with a department."""

    id: str
    full_name: str
    email: str
    department: str


@dataclass
class Student:
    """Registered student.

    ``enrollment_date`` is fixed when the student is created; ``active`` can be
    toggled at any time.
    """

    id: str
    reg_no: str
    full_name: str
    email: str
    active: bool = True
    enrollment_date: date = field(default_factory=date.today)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "enrollment_date" and "enrollment_date" in self.__dict__:
            raise AttributeError("enrollment_date cannot be changed")
        super().__setattr__(name, value)


Person = Student | Instructor


def profile(person: Person) -> str:
    """One-line profile text for either kind of person."""
    match person:
        case Student(full_name=name, reg_no=reg_no, active=active):
            status = "Active" if active else "Inactive"
            return (
                f"Student: {name} (Reg# {reg_no}) | Status: {status} "
                f"| Enrolled: {person.enrollment_date.isoformat()}"
            )
        case Instructor(full_name=name, email=email, department=department):
            return f"Instructor: {name} ({email}) - Dept: {department}"
        case _:
            raise TypeError(f"Not a person: {person!r}")


@dataclass(frozen=True)
class CourseOptions:
    """Optional course settings."""

    credits: int = DEFAULT_CREDITS
    semester: Semester = Semester.FALL
    instructor_id: str | None = None


@dataclass
class Course:
    """Course offering keyed by its code.

    The instructor is held by id only and resolved against the instructor
    table when displayed.
    """

    code: CourseCode
    title: str
    credits: int = DEFAULT_CREDITS
    semester: Semester = Semester.FALL
    instructor_id: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.credits, bool) or not isinstance(self.credits, int) or self.credits < 1:
            raise ValidationError(f"Credits must be a positive integer, got {self.credits!r}")

    @classmethod
    def create(cls, code: CourseCode, title: str, options: CourseOptions | None = None) -> Course:
        """Create a course from required fields plus optional settings."""
        options = options or CourseOptions()
        return cls(
            code=code,
            title=title,
            credits=options.credits,
            semester=options.semester,
            instructor_id=options.instructor_id,
        )

    @property
    def department(self) -> str:
        return self.code.department


@dataclass
class Enrollment:
    """A student's place in a course and the grade earned there."""

    student: Student
    course: Course
    grade: Grade = Grade.NOT_GRADED

    @property
    def key(self) -> tuple[str, CourseCode]:
        return (self.student.id, self.course.code)

    @property
    def is_graded(self) -> bool:
        return self.grade.is_graded

    def __repr__(self) -> str:
        return (
            f"<Enrollment(student={self.student.id!r}, course={str(self.course.code)!r}, "
            f"grade={self.grade.value!r})>"
        )
