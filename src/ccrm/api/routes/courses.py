"""Course and instructor endpoints."""

from fastapi import APIRouter, Query, status

from ccrm.api.dependencies import RecordsServiceDep
from ccrm.api.models import (
    APIResponse,
    CourseCreate,
    CourseResponse,
    InstructorResponse,
    course_to_response,
    instructor_to_response,
)
from ccrm.domain import Course, CourseCode, CourseOptions, Semester

router = APIRouter(tags=["courses"])


@router.get("/courses", response_model=APIResponse[list[CourseResponse]])
def list_courses(
    records: RecordsServiceDep,
    semester: Semester | None = Query(default=None, description="Filter by semester"),
    department: str | None = Query(default=None, description="Filter by department"),
    instructor_id: str | None = Query(default=None, description="Filter by instructor ID"),
) -> APIResponse[list[CourseResponse]]:
    """List courses ordered by code, with optional filters."""
    courses = records.find_courses(
        semester=semester, department=department, instructor_id=instructor_id
    )
    courses.sort(key=lambda c: c.code)
    return APIResponse(data=[course_to_response(c, records) for c in courses])


@router.get("/courses/search", response_model=APIResponse[list[CourseResponse]])
def search_courses(
    records: RecordsServiceDep,
    q: str = Query(..., min_length=1, description="Substring of course title or code"),
) -> APIResponse[list[CourseResponse]]:
    """Search courses by title or code."""
    return APIResponse(data=[course_to_response(c, records) for c in records.search(q)])


@router.post(
    "/courses",
    response_model=APIResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_course(course: CourseCreate, records: RecordsServiceDep) -> APIResponse[CourseResponse]:
    """Create a new course."""
    created = records.add_course(
        Course.create(
            CourseCode.parse(course.code),
            course.title,
            CourseOptions(
                credits=course.credits,
                semester=course.semester,
                instructor_id=course.instructor_id,
            ),
        )
    )
    return APIResponse(data=course_to_response(created, records))


@router.get("/courses/{code}", response_model=APIResponse[CourseResponse])
def get_course(code: str, records: RecordsServiceDep) -> APIResponse[CourseResponse]:
    """Get a course by code, e.g. CS101."""
    course = records.get_course(code)
    return APIResponse(data=course_to_response(course, records))


@router.get("/instructors", response_model=APIResponse[list[InstructorResponse]])
def list_instructors(records: RecordsServiceDep) -> APIResponse[list[InstructorResponse]]:
    """List all instructors."""
    return APIResponse(data=[instructor_to_response(i) for i in records.list_instructors()])
