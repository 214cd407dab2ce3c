"""EnrollmentEngine - Enrollment ledger, credit-limit rules and GPA."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ccrm.domain import CourseCode, Enrollment, Grade
from ccrm.enrollment.exceptions import (
    CreditLimitExceededError,
    DuplicateEnrollmentError,
    EnrollmentError,
    EnrollmentNotFoundError,
)
from ccrm.enrollment.models import Transcript

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ccrm.domain import Course, Student

logger = logging.getLogger("ccrm.enrollment")

MAX_CREDITS = 18


class EnrollmentEngine:
    """Owns the enrollment ledger and enforces enrollment rules.

    The engine:
    - Rejects a second enrollment for the same student and course
    - Caps the credits a student may hold at ``MAX_CREDITS``
    - Records grades, overwriting any earlier grade
    - Computes credit-weighted GPAs and transcripts

    Enrollments reference students and courses owned by the records service;
    those entities must outlive the engine.

    Not thread-safe: ``enroll`` checks the rules and then appends, so callers
    must serialize mutations. Sync FastAPI routes run in a threadpool and
    assume one user at a time.
    """

    def __init__(self) -> None:
        self._ledger: list[Enrollment] = []

    @property
    def enrollments(self) -> tuple[Enrollment, ...]:
        """All enrollments in ledger order."""
        return tuple(self._ledger)

    def enroll(self, student: Student, course: Course) -> Enrollment:
        """Enroll a student in a course.

        Args:
            student: The student to enroll.
            course: The course to enroll in.

        Returns:
            The new enrollment, graded NOT_GRADED.

        Raises:
            DuplicateEnrollmentError: If the student is already enrolled.
            CreditLimitExceededError: If the course would take the student
                over MAX_CREDITS.
        """
        if self.find_enrollment(student.id, course.code) is not None:
            raise DuplicateEnrollmentError(
                f"Student {student.reg_no} is already enrolled in {course.code}"
            )

        current_credits = self.credits_for(student.id)
        if current_credits + course.credits > MAX_CREDITS:
            raise CreditLimitExceededError(
                f"Enrollment failed. Student {student.reg_no} has {current_credits} credits; "
                f"adding {course.code} ({course.credits}) would exceed the limit of {MAX_CREDITS}"
            )

        enrollment = Enrollment(student=student, course=course)
        self._ledger.append(enrollment)
        logger.info("Enrolled student %s in %s", student.id, course.code)
        return enrollment

    def record_grade(self, student_id: str, course_code: CourseCode, grade: Grade) -> Enrollment:
        """Record a grade, replacing any grade already recorded.

        Raises:
            EnrollmentNotFoundError: If the student is not enrolled in the course.
        """
        enrollment = self.find_enrollment(student_id, course_code)
        if enrollment is None:
            raise EnrollmentNotFoundError(
                f"Student '{student_id}' is not enrolled in {course_code}"
            )
        previous = enrollment.grade
        enrollment.grade = grade
        if previous.is_graded and previous is not grade:
            logger.info(
                "Regraded student %s in %s: %s -> %s", student_id, course_code, previous, grade
            )
        else:
            logger.info("Graded student %s in %s: %s", student_id, course_code, grade)
        return enrollment

    def find_enrollment(self, student_id: str, course_code: CourseCode) -> Enrollment | None:
        for enrollment in self._ledger:
            if enrollment.key == (student_id, course_code):
                return enrollment
        return None

    def enrollments_for(self, student_id: str) -> list[Enrollment]:
        """A student's enrollments in ledger order."""
        return [e for e in self._ledger if e.student.id == student_id]

    def credits_for(self, student_id: str) -> int:
        """Total credits of all courses the student is enrolled in."""
        return sum(e.course.credits for e in self.enrollments_for(student_id))

    def gpa(self, student_id: str) -> float:
        """Credit-weighted GPA over graded enrollments.

        Returns:
            The GPA, or 0.0 when the student has no graded enrollments.
        """
        graded = [e for e in self.enrollments_for(student_id) if e.is_graded]
        total_credits = sum(e.course.credits for e in graded)
        if total_credits == 0:
            return 0.0
        total_points = sum(e.grade.grade_point * e.course.credits for e in graded)
        return total_points / total_credits

    def transcript(self, student_id: str) -> Transcript:
        """Enrollments for a student paired with the computed GPA."""
        return Transcript(
            student_id=student_id,
            enrollments=self.enrollments_for(student_id),
            gpa=self.gpa(student_id),
        )

    def restore(self, records: Iterable[tuple[Student, Course, Grade]]) -> int:
        """Rebuild ledger entries from persisted rows.

        Each row goes through the same rules as ``enroll``; rows the rules
        reject are logged and skipped.

        Returns:
            Number of enrollments restored.
        """
        restored = 0
        for student, course, grade in records:
            try:
                enrollment = self.enroll(student, course)
            except EnrollmentError as e:
                logger.warning("Skipping persisted enrollment: %s", e)
                continue
            enrollment.grade = grade
            restored += 1
        logger.info("Restored %d enrollments", restored)
        return restored

    def clear(self) -> None:
        """Drop every enrollment, e.g. before records are reloaded."""
        self._ledger.clear()
        logger.info("Enrollment ledger cleared")

    def __len__(self) -> int:
        return len(self._ledger)
