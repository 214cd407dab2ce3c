"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from ccrm.backup import BackupService
from ccrm.config import AppConfig
from ccrm.enrollment import EnrollmentEngine
from ccrm.registry import RecordsService
from ccrm.storage import VirtualStorage

# Global RecordsService instance (initialized on app startup)
_records_service: RecordsService | None = None


def init_records_service(
    storage: VirtualStorage, config: AppConfig | None = None
) -> RecordsService:
    """Initialize the global RecordsService instance."""
    global _records_service  # noqa: PLW0603
    _records_service = RecordsService(storage, config)
    return _records_service


def close_records_service() -> None:
    """Release the global RecordsService instance."""
    global _records_service  # noqa: PLW0603
    _records_service = None


def get_records_service() -> Generator[RecordsService, None, None]:
    """Dependency that provides the RecordsService instance."""
    if _records_service is None:
        raise RuntimeError("RecordsService not initialized. Call init_records_service() first.")
    yield _records_service


# Type alias for dependency injection
RecordsServiceDep = Annotated[RecordsService, Depends(get_records_service)]

# Global EnrollmentEngine instance (initialized on app startup)
_enrollment_engine: EnrollmentEngine | None = None


def init_enrollment_engine() -> EnrollmentEngine:
    """Initialize the global EnrollmentEngine instance."""
    global _enrollment_engine  # noqa: PLW0603
    _enrollment_engine = EnrollmentEngine()
    return _enrollment_engine


def close_enrollment_engine() -> None:
    """Release the global EnrollmentEngine instance."""
    global _enrollment_engine  # noqa: PLW0603
    _enrollment_engine = None


def get_enrollment_engine() -> Generator[EnrollmentEngine, None, None]:
    """Dependency that provides the EnrollmentEngine instance."""
    if _enrollment_engine is None:
        raise RuntimeError(
            "EnrollmentEngine not initialized. Call init_enrollment_engine() first."
        )
    yield _enrollment_engine


# Type alias for dependency injection
EnrollmentEngineDep = Annotated[EnrollmentEngine, Depends(get_enrollment_engine)]

# Global BackupService instance (initialized on app startup)
_backup_service: BackupService | None = None


def init_backup_service(storage: VirtualStorage, config: AppConfig | None = None) -> BackupService:
    """Initialize the global BackupService instance."""
    global _backup_service  # noqa: PLW0603
    _backup_service = BackupService(storage, config)
    return _backup_service


def close_backup_service() -> None:
    """Release the global BackupService instance."""
    global _backup_service  # noqa: PLW0603
    _backup_service = None


def get_backup_service() -> Generator[BackupService, None, None]:
    """Dependency that provides the BackupService instance."""
    if _backup_service is None:
        raise RuntimeError("BackupService not initialized. Call init_backup_service() first.")
    yield _backup_service


# Type alias for dependency injection
BackupServiceDep = Annotated[BackupService, Depends(get_backup_service)]
