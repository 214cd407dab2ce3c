"""Enrollment and grading endpoints."""

from fastapi import APIRouter, status

from ccrm.api.dependencies import EnrollmentEngineDep, RecordsServiceDep
from ccrm.api.models import (
    APIResponse,
    EnrollmentCreate,
    EnrollmentResponse,
    GradeUpdate,
    enrollment_to_response,
)
from ccrm.domain import CourseCode

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@router.get("", response_model=APIResponse[list[EnrollmentResponse]])
def list_enrollments(engine: EnrollmentEngineDep) -> APIResponse[list[EnrollmentResponse]]:
    """List the whole ledger in enrollment order."""
    return APIResponse(data=[enrollment_to_response(e) for e in engine.enrollments])


@router.post(
    "",
    response_model=APIResponse[EnrollmentResponse],
    status_code=status.HTTP_201_CREATED,
)
def enroll_student(
    request: EnrollmentCreate, records: RecordsServiceDep, engine: EnrollmentEngineDep
) -> APIResponse[EnrollmentResponse]:
    """Enroll a student in a course."""
    student = records.get_student(request.student_id)
    course = records.get_course(CourseCode.parse(request.course_code))
    enrollment = engine.enroll(student, course)
    return APIResponse(data=enrollment_to_response(enrollment))


@router.put(
    "/{student_id}/{course_code}/grade",
    response_model=APIResponse[EnrollmentResponse],
)
def record_grade(
    student_id: str, course_code: str, update: GradeUpdate, engine: EnrollmentEngineDep
) -> APIResponse[EnrollmentResponse]:
    """Record or overwrite the grade for an enrollment."""
    enrollment = engine.record_grade(student_id, CourseCode.parse(course_code), update.grade)
    return APIResponse(data=enrollment_to_response(enrollment))
