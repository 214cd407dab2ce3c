"""RecordCodec - Reads and writes entity collections as delimited text."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, NamedTuple, TypeVar

from ccrm.codec.exceptions import MalformedRecordError
from ccrm.domain import (
    Course,
    CourseCode,
    CourseOptions,
    Enrollment,
    Grade,
    Instructor,
    Semester,
    Student,
    ValidationError,
)
from ccrm.logging import truncate_output

if TYPE_CHECKING:
    from ccrm.storage import StoragePath, VirtualStorage

logger = logging.getLogger("ccrm.codec")

STUDENT_IMPORT_HEADER = "id,regNo,fullName,email"
STUDENT_EXPORT_HEADER = "id,regNo,fullName,email,active"
INSTRUCTOR_HEADER = "id,fullName,email,department"
COURSE_HEADER = "code,title,credits,semester,instructorId"
ENROLLMENT_HEADER = "studentId,courseCode,grade"

UNASSIGNED_INSTRUCTOR = "N/A"

T = TypeVar("T")


class EnrollmentRecord(NamedTuple):
    """One persisted enrollment resolved against loaded entities."""

    student: Student
    course: Course
    grade: Grade


def format_row(fields: Iterable[object]) -> str:
    """Render one delimited line, quoting fields only where needed."""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="").writerow(fields)
    return buffer.getvalue()


def split_row(line: str) -> list[str]:
    """Split one delimited line into trimmed fields."""
    return [part.strip() for part in next(csv.reader([line]))]


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise MalformedRecordError(f"unreadable boolean '{value}'")


def _require_fields(fields: list[str], count: int) -> None:
    if len(fields) < count:
        raise MalformedRecordError(f"expected at least {count} fields, got {len(fields)}")


def _parse_credits(value: str) -> int:
    # int() would also take "1_8" and non-ASCII digits
    if not (value.isascii() and value.isdigit()):
        raise MalformedRecordError(f"unreadable credits '{value}'")
    return int(value)


class RecordCodec:
    """Delimited-text codec over a VirtualStorage.

    Every file starts with a header row, which is skipped without being
    checked. Lines that cannot be turned into an entity are logged and
    dropped; the rest of the file is still imported. When a key repeats, the
    first row wins and the later ones are logged and dropped.
    """

    def __init__(self, storage: VirtualStorage) -> None:
        self.storage = storage

    # --- Import ---

    def import_students(self, path: StoragePath) -> dict[str, Student]:
        """Import students keyed by id.

        Raises:
            PathNotFoundError: If the file does not exist
        """
        return self._import(path, "student", self._parse_student, lambda s: s.id)

    def import_instructors(self, path: StoragePath) -> dict[str, Instructor]:
        """Import instructors keyed by id.

        Raises:
            PathNotFoundError: If the file does not exist
        """
        return self._import(path, "instructor", self._parse_instructor, lambda i: i.id)

    def import_courses(
        self, path: StoragePath, instructors: Mapping[str, Instructor]
    ) -> dict[CourseCode, Course]:
        """Import courses keyed by code.

        Instructor ids missing from ``instructors`` leave the course
        unassigned.

        Raises:
            PathNotFoundError: If the file does not exist
        """
        return self._import(
            path,
            "course",
            lambda fields: self._parse_course(fields, instructors),
            lambda c: c.code,
        )

    def import_enrollments(
        self,
        path: StoragePath,
        students: Mapping[str, Student],
        courses: Mapping[CourseCode, Course],
    ) -> list[EnrollmentRecord]:
        """Import enrollment rows resolved against loaded students and courses.

        Raises:
            PathNotFoundError: If the file does not exist
        """
        records = self._import(
            path,
            "enrollment",
            lambda fields: self._parse_enrollment(fields, students, courses),
            lambda r: (r.student.id, r.course.code),
        )
        return list(records.values())

    # --- Export ---

    def render_students(self, students: Iterable[Student]) -> list[str]:
        lines = [STUDENT_EXPORT_HEADER]
        for s in students:
            lines.append(
                format_row([s.id, s.reg_no, s.full_name, s.email, "true" if s.active else "false"])
            )
        return lines

    def render_instructors(self, instructors: Iterable[Instructor]) -> list[str]:
        lines = [INSTRUCTOR_HEADER]
        for i in instructors:
            lines.append(format_row([i.id, i.full_name, i.email, i.department]))
        return lines

    def render_courses(self, courses: Iterable[Course]) -> list[str]:
        lines = [COURSE_HEADER]
        for c in courses:
            lines.append(
                format_row(
                    [
                        str(c.code),
                        c.title,
                        c.credits,
                        c.semester.value,
                        c.instructor_id or UNASSIGNED_INSTRUCTOR,
                    ]
                )
            )
        return lines

    def render_enrollments(self, enrollments: Iterable[Enrollment]) -> list[str]:
        lines = [ENROLLMENT_HEADER]
        for e in enrollments:
            lines.append(format_row([e.student.id, str(e.course.code), e.grade.value]))
        return lines

    def export_students(self, path: StoragePath, students: Iterable[Student]) -> int:
        """Write students to path. Returns the number of rows written."""
        return self._write(path, self.render_students(students))

    def export_instructors(self, path: StoragePath, instructors: Iterable[Instructor]) -> int:
        """Write instructors to path. Returns the number of rows written."""
        return self._write(path, self.render_instructors(instructors))

    def export_courses(self, path: StoragePath, courses: Iterable[Course]) -> int:
        """Write courses to path. Returns the number of rows written."""
        return self._write(path, self.render_courses(courses))

    def export_enrollments(self, path: StoragePath, enrollments: Iterable[Enrollment]) -> int:
        """Write enrollments to path. Returns the number of rows written."""
        return self._write(path, self.render_enrollments(enrollments))

    # --- Internals ---

    def _write(self, path: StoragePath, lines: list[str]) -> int:
        self.storage.write(path, lines)
        return len(lines) - 1

    def _rows(self, path: StoragePath) -> Iterator[tuple[int, str]]:
        lines = self.storage.read_lines(path)
        for line_no, line in enumerate(lines[1:], start=2):
            if line.strip():
                yield line_no, line

    def _import(
        self,
        path: StoragePath,
        kind: str,
        parse: Callable[[list[str]], T],
        key: Callable[[T], object],
    ) -> dict:
        result: dict = {}
        skipped = 0
        for line_no, line in self._rows(path):
            try:
                item = parse(split_row(line))
            except (MalformedRecordError, ValidationError, ValueError, csv.Error) as e:
                skipped += 1
                logger.warning(
                    "Skipping invalid %s line %d in %s (%s): %s",
                    kind,
                    line_no,
                    path,
                    e,
                    truncate_output(line),
                )
                continue
            item_key = key(item)
            if item_key in result:
                skipped += 1
                logger.warning(
                    "Skipping duplicate %s line %d in %s (%s already imported): %s",
                    kind,
                    line_no,
                    path,
                    item_key,
                    truncate_output(line),
                )
                continue
            result[item_key] = item
        logger.info("Imported %d %s records from %s (%d skipped)", len(result), kind, path, skipped)
        return result

    @staticmethod
    def _parse_student(fields: list[str]) -> Student:
        _require_fields(fields, 4)
        active = _parse_bool(fields[4]) if len(fields) > 4 and fields[4] else True
        return Student(
            id=fields[0],
            reg_no=fields[1],
            full_name=fields[2],
            email=fields[3],
            active=active,
        )

    @staticmethod
    def _parse_instructor(fields: list[str]) -> Instructor:
        _require_fields(fields, 4)
        return Instructor(
            id=fields[0],
            full_name=fields[1],
            email=fields[2],
            department=fields[3],
        )

    @staticmethod
    def _parse_course(fields: list[str], instructors: Mapping[str, Instructor]) -> Course:
        _require_fields(fields, 5)
        code = CourseCode.parse(fields[0])
        instructor = instructors.get(fields[4])
        return Course.create(
            code,
            fields[1],
            CourseOptions(
                credits=_parse_credits(fields[2]),
                semester=Semester.parse(fields[3]),
                instructor_id=instructor.id if instructor is not None else None,
            ),
        )

    @staticmethod
    def _parse_enrollment(
        fields: list[str],
        students: Mapping[str, Student],
        courses: Mapping[CourseCode, Course],
    ) -> EnrollmentRecord:
        _require_fields(fields, 3)
        student = students.get(fields[0])
        if student is None:
            raise MalformedRecordError(f"unknown student '{fields[0]}'")
        course = courses.get(CourseCode.parse(fields[1]))
        if course is None:
            raise MalformedRecordError(f"unknown course '{fields[1]}'")
        return EnrollmentRecord(student, course, Grade.parse(fields[2]))
