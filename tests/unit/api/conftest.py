"""Fixtures for API route tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ccrm.api.app import register_exception_handlers
from ccrm.api.dependencies import (
    get_backup_service,
    get_enrollment_engine,
    get_records_service,
)
from ccrm.api.routes import courses, data, enrollments, students
from ccrm.backup import BackupService
from ccrm.enrollment import EnrollmentEngine
from ccrm.registry import RecordsService
from ccrm.storage import VirtualStorage, create_storage


@pytest.fixture
def storage() -> VirtualStorage:
    return create_storage()


@pytest.fixture
def records(storage: VirtualStorage) -> RecordsService:
    """RecordsService loaded from the example data."""
    service = RecordsService(storage)
    service.load_data()
    return service


@pytest.fixture
def engine() -> EnrollmentEngine:
    return EnrollmentEngine()


@pytest.fixture
def backup(storage: VirtualStorage) -> BackupService:
    return BackupService(storage)


@pytest.fixture
def app(records: RecordsService, engine: EnrollmentEngine, backup: BackupService) -> FastAPI:
    """Create a test FastAPI app with overridden dependencies."""
    app = FastAPI()

    def override_get_records_service():
        yield records

    def override_get_enrollment_engine():
        yield engine

    def override_get_backup_service():
        yield backup

    app.dependency_overrides[get_records_service] = override_get_records_service
    app.dependency_overrides[get_enrollment_engine] = override_get_enrollment_engine
    app.dependency_overrides[get_backup_service] = override_get_backup_service

    register_exception_handlers(app)

    app.include_router(students.router, prefix="/api/v1")
    app.include_router(courses.router, prefix="/api/v1")
    app.include_router(enrollments.router, prefix="/api/v1")
    app.include_router(data.router, prefix="/api/v1")

    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
