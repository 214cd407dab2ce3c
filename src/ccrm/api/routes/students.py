"""Student endpoints."""

from fastapi import APIRouter, status

from ccrm.api.dependencies import EnrollmentEngineDep, RecordsServiceDep
from ccrm.api.models import (
    APIResponse,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
    TranscriptResponse,
    student_to_response,
    transcript_to_response,
)
from ccrm.domain import Student

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=APIResponse[list[StudentResponse]])
def list_students(records: RecordsServiceDep) -> APIResponse[list[StudentResponse]]:
    """List all students."""
    return APIResponse(data=[student_to_response(s) for s in records.list_students()])


@router.post(
    "",
    response_model=APIResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_student(
    student: StudentCreate, records: RecordsServiceDep
) -> APIResponse[StudentResponse]:
    """Register a new student."""
    created = records.add_student(
        Student(
            id=student.id,
            reg_no=student.reg_no,
            full_name=student.full_name,
            email=student.email,
        )
    )
    return APIResponse(data=student_to_response(created))


@router.get("/{student_id}", response_model=APIResponse[StudentResponse])
def get_student(student_id: str, records: RecordsServiceDep) -> APIResponse[StudentResponse]:
    """Get a student by ID."""
    return APIResponse(data=student_to_response(records.get_student(student_id)))


@router.patch("/{student_id}", response_model=APIResponse[StudentResponse])
def update_student(
    student_id: str, update: StudentUpdate, records: RecordsServiceDep
) -> APIResponse[StudentResponse]:
    """Activate or deactivate a student."""
    student = records.set_student_active(student_id, update.active)
    return APIResponse(data=student_to_response(student))


@router.get("/{student_id}/transcript", response_model=APIResponse[TranscriptResponse])
def get_transcript(
    student_id: str, records: RecordsServiceDep, engine: EnrollmentEngineDep
) -> APIResponse[TranscriptResponse]:
    """Get a student's enrollments and GPA."""
    student = records.get_student(student_id)
    transcript = engine.transcript(student.id)
    return APIResponse(data=transcript_to_response(student, transcript))
