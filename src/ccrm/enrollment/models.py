"""Data models for the Enrollment Engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ccrm.domain import Enrollment


@dataclass
class Transcript:
    """A student's enrollments in ledger order with their GPA.

    Attributes:
        student_id: The student's id.
        enrollments: Enrollments for the student, oldest first.
        gpa: Credit-weighted grade point average over graded enrollments.
    """

    student_id: str
    enrollments: list[Enrollment] = field(default_factory=list)
    gpa: float = 0.0

    @property
    def total_credits(self) -> int:
        return sum(e.course.credits for e in self.enrollments)

    @property
    def graded_credits(self) -> int:
        return sum(e.course.credits for e in self.enrollments if e.is_graded)

    @property
    def display_gpa(self) -> float:
        """GPA rounded to two decimals."""
        return round(self.gpa, 2)
