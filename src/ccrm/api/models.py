"""Pydantic models for REST API."""

from __future__ import annotations

from datetime import date  # noqa: TC003 - used at runtime by pydantic
from typing import TYPE_CHECKING, Generic, TypeVar

from pydantic import BaseModel, Field

from ccrm.domain import Grade, Semester, profile

if TYPE_CHECKING:
    from ccrm.domain import Course, Enrollment, Instructor, Student
    from ccrm.enrollment import Transcript
    from ccrm.registry import RecordsService

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Student models


class StudentCreate(BaseModel):
    """Request model for registering a student."""

    id: str = Field(..., min_length=1, max_length=64)
    reg_no: str = Field(..., min_length=1, max_length=64)
    full_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s,]+@[^@\s,]+$")


class StudentUpdate(BaseModel):
    """Request model for updating a student's status."""

    active: bool


class StudentResponse(BaseModel):
    """Response model for a student."""

    id: str
    reg_no: str
    full_name: str
    email: str
    active: bool
    enrollment_date: date
    profile: str


def student_to_response(student: Student) -> StudentResponse:
    """Convert a Student to StudentResponse."""
    return StudentResponse(
        id=student.id,
        reg_no=student.reg_no,
        full_name=student.full_name,
        email=student.email,
        active=student.active,
        enrollment_date=student.enrollment_date,
        profile=profile(student),
    )


# Instructor models


class InstructorResponse(BaseModel):
    """Response model for an instructor."""

    id: str
    full_name: str
    email: str
    department: str
    profile: str


def instructor_to_response(instructor: Instructor) -> InstructorResponse:
    """Convert an Instructor to InstructorResponse."""
    return InstructorResponse(
        id=instructor.id,
        full_name=instructor.full_name,
        email=instructor.email,
        department=instructor.department,
        profile=profile(instructor),
    )


# Course models


class CourseCreate(BaseModel):
    """Request model for creating a course."""

    code: str = Field(..., pattern=r"^[A-Za-z]+\d{3}$")
    title: str = Field(..., min_length=1, max_length=255)
    credits: int = Field(default=3, ge=1, le=18)
    semester: Semester = Semester.FALL
    instructor_id: str | None = None


class CourseResponse(BaseModel):
    """Response model for a course."""

    code: str
    department: str
    number: int
    title: str
    credits: int
    semester: Semester
    instructor_id: str | None
    instructor_name: str


def course_to_response(course: Course, records: RecordsService) -> CourseResponse:
    """Convert a Course to CourseResponse, resolving the instructor name."""
    return CourseResponse(
        code=str(course.code),
        department=course.code.department,
        number=course.code.number,
        title=course.title,
        credits=course.credits,
        semester=course.semester,
        instructor_id=course.instructor_id,
        instructor_name=records.instructor_name(course),
    )


# Enrollment models


class EnrollmentCreate(BaseModel):
    """Request model for enrolling a student in a course."""

    student_id: str = Field(..., min_length=1)
    course_code: str = Field(..., min_length=4)


class GradeUpdate(BaseModel):
    """Request model for recording a grade."""

    grade: Grade


class EnrollmentResponse(BaseModel):
    """Response model for an enrollment."""

    student_id: str
    course_code: str
    course_title: str
    credits: int
    grade: Grade


def enrollment_to_response(enrollment: Enrollment) -> EnrollmentResponse:
    """Convert an Enrollment to EnrollmentResponse."""
    return EnrollmentResponse(
        student_id=enrollment.student.id,
        course_code=str(enrollment.course.code),
        course_title=enrollment.course.title,
        credits=enrollment.course.credits,
        grade=enrollment.grade,
    )


class TranscriptResponse(BaseModel):
    """Response model for a student transcript."""

    student_id: str
    profile: str
    enrollments: list[EnrollmentResponse]
    total_credits: int
    gpa: float


def transcript_to_response(student: Student, transcript: Transcript) -> TranscriptResponse:
    """Convert a Transcript to TranscriptResponse with the GPA rounded for display."""
    return TranscriptResponse(
        student_id=transcript.student_id,
        profile=profile(student),
        enrollments=[enrollment_to_response(e) for e in transcript.enrollments],
        total_credits=transcript.total_credits,
        gpa=transcript.display_gpa,
    )


# Data file models


class LoadResponse(BaseModel):
    """Response model for a data reload."""

    students: int
    courses: int
    instructors: int
    enrollments: int


class SaveResponse(BaseModel):
    """Response model for an export."""

    files: list[str]


class BackupResponse(BaseModel):
    """Response model for a backup run."""

    directory: str
    files: list[str]


class BackupSizeResponse(BaseModel):
    """Response model for the backup directory size."""

    size: int
