"""REST API for CCRM."""

from ccrm.api.app import app, create_app
from ccrm.api.models import (
    APIResponse,
    CourseResponse,
    EnrollmentResponse,
    StudentResponse,
    TranscriptResponse,
)

__all__ = [
    "APIResponse",
    "CourseResponse",
    "EnrollmentResponse",
    "StudentResponse",
    "TranscriptResponse",
    "app",
    "create_app",
]
