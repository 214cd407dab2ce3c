"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ccrm import __version__
from ccrm.api.dependencies import (
    close_backup_service,
    close_enrollment_engine,
    close_records_service,
    init_backup_service,
    init_enrollment_engine,
    init_records_service,
)
from ccrm.api.models import APIResponse
from ccrm.api.routes import courses, data, enrollments, students
from ccrm.config import AppConfig
from ccrm.domain import ValidationError
from ccrm.enrollment import (
    CreditLimitExceededError,
    DuplicateEnrollmentError,
    EnrollmentNotFoundError,
)
from ccrm.registry import (
    CourseExistsError,
    CourseNotFoundError,
    InstructorExistsError,
    InstructorNotFoundError,
    StudentExistsError,
    StudentNotFoundError,
)
from ccrm.storage import StorageError, create_storage

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger("ccrm.api")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    config = app.state.config if hasattr(app.state, "config") else AppConfig()
    seed = app.state.seed if hasattr(app.state, "seed") else True
    storage = create_storage(config, seed=seed)

    records = init_records_service(storage, config)
    engine = init_enrollment_engine()
    init_backup_service(storage, config)

    try:
        engine.restore(records.load_data())
    except StorageError as e:
        logger.warning("Could not load initial data: %s", e)

    yield
    # Shutdown
    close_backup_service()
    close_enrollment_engine()
    close_records_service()


def create_app(config: AppConfig | None = None, seed: bool = True) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Directory layout inside the virtual storage.
        seed: Whether to start from the example data set.
    """
    app = FastAPI(
        title="CCRM API",
        description="REST API for CCRM - Campus Course & Records Manager",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.config = config or AppConfig()
    app.state.seed = seed

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(students.router, prefix="/api/v1")
    app.include_router(courses.router, prefix="/api/v1")
    app.include_router(enrollments.router, prefix="/api/v1")
    app.include_router(data.router, prefix="/api/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Translate service errors into JSON error responses."""

    @app.exception_handler(StudentNotFoundError)
    async def student_not_found_handler(
        _request: Request, exc: StudentNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(CourseNotFoundError)
    async def course_not_found_handler(
        _request: Request, exc: CourseNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(InstructorNotFoundError)
    async def instructor_not_found_handler(
        _request: Request, exc: InstructorNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(EnrollmentNotFoundError)
    async def enrollment_not_found_handler(
        _request: Request, exc: EnrollmentNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(StudentExistsError)
    async def student_exists_handler(_request: Request, exc: StudentExistsError) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(CourseExistsError)
    async def course_exists_handler(_request: Request, exc: CourseExistsError) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(InstructorExistsError)
    async def instructor_exists_handler(
        _request: Request, exc: InstructorExistsError
    ) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(DuplicateEnrollmentError)
    async def duplicate_enrollment_handler(
        _request: Request, exc: DuplicateEnrollmentError
    ) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(CreditLimitExceededError)
    async def credit_limit_handler(
        _request: Request, exc: CreditLimitExceededError
    ) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(ValidationError)
    async def validation_error_handler(_request: Request, exc: ValidationError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(_request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage operation failed: %s", exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage operation failed")


# Default app instance
app = create_app()
