"""RecordsService - Owns the student, course and instructor collections."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from ccrm.codec import RecordCodec
from ccrm.config import (
    COURSES_FILE,
    ENROLLMENTS_FILE,
    INSTRUCTORS_FILE,
    STUDENTS_FILE,
    AppConfig,
)
from ccrm.domain import (
    Course,
    CourseCode,
    Instructor,
    Person,
    Semester,
    Student,
    ValidationError,
    profile,
)
from ccrm.registry.exceptions import (
    CourseExistsError,
    CourseNotFoundError,
    InstructorExistsError,
    InstructorNotFoundError,
    StudentExistsError,
    StudentNotFoundError,
)
from ccrm.storage import PathNotADirectoryError, PathNotAFileError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import PurePosixPath

    from ccrm.codec import EnrollmentRecord
    from ccrm.domain import Enrollment
    from ccrm.storage import VirtualStorage

logger = logging.getLogger("ccrm.registry")

UNASSIGNED_INSTRUCTOR_NAME = "TBD"


class RecordsService:
    """Main API for student, course and instructor records.

    Collections are keyed by identity and iterate in insertion order, which
    is the order exports are written in.
    """

    def __init__(
        self,
        storage: VirtualStorage,
        config: AppConfig | None = None,
        codec: RecordCodec | None = None,
    ) -> None:
        """Initialize the service with empty collections.

        Args:
            storage: Store the data files are read from and written to
            config: Directory layout. Defaults to ``AppConfig()``.
            codec: Record codec. Defaults to a codec over ``storage``.
        """
        self.storage = storage
        self.config = config or AppConfig()
        self.codec = codec or RecordCodec(storage)
        self._students: dict[str, Student] = {}
        self._courses: dict[CourseCode, Course] = {}
        self._instructors: dict[str, Instructor] = {}

    # --- Persistence ---

    def load_data(self) -> list[EnrollmentRecord]:
        """Replace the in-memory collections with the configured data files.

        Malformed rows are dropped by the codec. Nothing is replaced unless
        every file, including an optional enrollments file, was read.

        Returns:
            Persisted enrollment rows resolved against the new collections,
            for the enrollment engine to restore

        Raises:
            StorageError: If a data file is missing or unreadable; prior
                state is kept
        """
        instructors = self.codec.import_instructors(self.config.instructors_path)
        courses = self.codec.import_courses(self.config.courses_path, instructors)
        students = self.codec.import_students(self.config.students_path)
        enrollments = self._import_enrollments(students, courses)

        self._instructors = instructors
        self._courses = courses
        self._students = students
        logger.info(
            "Loaded %d students, %d courses and %d instructors",
            len(students),
            len(courses),
            len(instructors),
        )
        return enrollments

    def save_data(self, enrollments: Iterable[Enrollment] | None = None) -> list[PurePosixPath]:
        """Export the collections to the export directory.

        All files are rendered and their targets checked before anything is
        written.

        Args:
            enrollments: Ledger to export alongside the records (optional)

        Returns:
            Paths of the files written

        Raises:
            StorageError: If the export directory or a target path is
                unusable; persisted files are left untouched
        """
        outputs: dict[PurePosixPath, list[str]] = {
            self.config.export_path(STUDENTS_FILE): self.codec.render_students(
                self._students.values()
            ),
            self.config.export_path(COURSES_FILE): self.codec.render_courses(
                self._courses.values()
            ),
            self.config.export_path(INSTRUCTORS_FILE): self.codec.render_instructors(
                self._instructors.values()
            ),
        }
        if enrollments is not None:
            outputs[self.config.export_path(ENROLLMENTS_FILE)] = self.codec.render_enrollments(
                enrollments
            )

        export_dir = self.config.export_dir
        if self.storage.exists(export_dir) and not self.storage.is_directory(export_dir):
            raise PathNotADirectoryError(f"Export directory is a file: {export_dir}")
        for path in outputs:
            if self.storage.is_directory(path):
                raise PathNotAFileError(f"Cannot export to directory: {path}")
        if not self.storage.exists(export_dir):
            self.storage.create_directory(export_dir)

        for path, lines in outputs.items():
            self.storage.write(path, lines)
            logger.info("Exported %d rows to %s", len(lines) - 1, path)
        return list(outputs)

    def read_enrollments(self) -> list[EnrollmentRecord]:
        """Read persisted enrollments from the data directory.

        Returns:
            Rows resolved against the current students and courses, or an
            empty list when no enrollments file exists
        """
        return self._import_enrollments(self._students, self._courses)

    def _import_enrollments(
        self, students: Mapping[str, Student], courses: Mapping[CourseCode, Course]
    ) -> list[EnrollmentRecord]:
        path = self.config.enrollments_path
        if not self.storage.exists(path):
            logger.debug("No enrollments file at %s", path)
            return []
        return self.codec.import_enrollments(path, students, courses)

    # --- Read-only views ---

    @property
    def students(self) -> Mapping[str, Student]:
        return MappingProxyType(self._students)

    @property
    def courses(self) -> Mapping[CourseCode, Course]:
        return MappingProxyType(self._courses)

    @property
    def instructors(self) -> Mapping[str, Instructor]:
        return MappingProxyType(self._instructors)

    # --- Students ---

    def add_student(self, student: Student) -> Student:
        """Register a new student.

        Raises:
            StudentExistsError: If a student with the same id exists
        """
        if student.id in self._students:
            raise StudentExistsError(f"Student with id '{student.id}' already exists")
        self._students[student.id] = student
        logger.info("Added student %s", student.id)
        return student

    def find_student(self, student_id: str) -> Student | None:
        """Get a student by id, or None if not found."""
        return self._students.get(student_id)

    def get_student(self, student_id: str) -> Student:
        """Get a student by id.

        Raises:
            StudentNotFoundError: If the student doesn't exist
        """
        student = self._students.get(student_id)
        if student is None:
            raise StudentNotFoundError(f"Student with id '{student_id}' not found")
        return student

    def list_students(self) -> list[Student]:
        return list(self._students.values())

    def set_student_active(self, student_id: str, active: bool) -> Student:
        """Activate or deactivate a student.

        Raises:
            StudentNotFoundError: If the student doesn't exist
        """
        student = self.get_student(student_id)
        student.active = active
        logger.info("Student %s marked %s", student_id, "active" if active else "inactive")
        return student

    # --- Instructors ---

    def add_instructor(self, instructor: Instructor) -> Instructor:
        """Register a new instructor.

        Raises:
            InstructorExistsError: If an instructor with the same id exists
        """
        if instructor.id in self._instructors:
            raise InstructorExistsError(f"Instructor with id '{instructor.id}' already exists")
        self._instructors[instructor.id] = instructor
        logger.info("Added instructor %s", instructor.id)
        return instructor

    def find_instructor(self, instructor_id: str) -> Instructor | None:
        return self._instructors.get(instructor_id)

    def list_instructors(self) -> list[Instructor]:
        return list(self._instructors.values())

    # --- Courses ---

    def add_course(self, course: Course) -> Course:
        """Register a new course.

        Raises:
            CourseExistsError: If a course with the same code exists
            InstructorNotFoundError: If the course names an unknown instructor
        """
        if course.code in self._courses:
            raise CourseExistsError(f"Course with code '{course.code}' already exists")
        if course.instructor_id is not None and course.instructor_id not in self._instructors:
            raise InstructorNotFoundError(
                f"Instructor with id '{course.instructor_id}' not found"
            )
        self._courses[course.code] = course
        logger.info("Added course %s", course.code)
        return course

    def find_course(self, code: CourseCode | str) -> Course | None:
        """Get a course by code, or None if not found.

        A string that is not a well-formed course code cannot match any
        course and also gives None.
        """
        if isinstance(code, str):
            try:
                code = CourseCode.parse(code)
            except ValidationError:
                return None
        return self._courses.get(code)

    def get_course(self, code: CourseCode | str) -> Course:
        """Get a course by code.

        Raises:
            CourseNotFoundError: If the course doesn't exist
        """
        course = self.find_course(code)
        if course is None:
            raise CourseNotFoundError(f"Course with code '{code}' not found")
        return course

    def list_courses(self) -> list[Course]:
        """List all courses, ordered by code."""
        return sorted(self._courses.values(), key=lambda c: c.code)

    def find_courses(
        self,
        semester: Semester | None = None,
        department: str | None = None,
        instructor_id: str | None = None,
    ) -> list[Course]:
        """List courses matching every given filter.

        Args:
            semester: Only courses running in this semester
            department: Only courses of this department (case-insensitive)
            instructor_id: Only courses taught by this instructor

        Returns:
            Matching courses in collection order
        """
        results = []
        for course in self._courses.values():
            if semester is not None and course.semester is not semester:
                continue
            if department is not None and course.department.lower() != department.lower():
                continue
            if instructor_id is not None and course.instructor_id != instructor_id:
                continue
            results.append(course)
        return results

    def search(self, query: str) -> list[Course]:
        """Find courses whose title or code contains query, ignoring case."""
        needle = query.lower()
        return [
            c
            for c in self._courses.values()
            if needle in c.title.lower() or needle in str(c.code).lower()
        ]

    # --- Display helpers ---

    def instructor_for(self, course: Course) -> Instructor | None:
        """Resolve a course's instructor, or None if unassigned or unknown."""
        if course.instructor_id is None:
            return None
        return self._instructors.get(course.instructor_id)

    def instructor_name(self, course: Course) -> str:
        instructor = self.instructor_for(course)
        return instructor.full_name if instructor is not None else UNASSIGNED_INSTRUCTOR_NAME

    def describe_course(self, course: Course) -> str:
        return (
            f"Course[{course.code}]: {course.title} ({course.credits} credits) "
            f"| Instructor: {self.instructor_name(course)} | Semester: {course.semester.value}"
        )

    def profile(self, person: Person) -> str:
        return profile(person)
