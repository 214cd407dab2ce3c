"""Data file endpoints: reload, export and backup."""

import logging

from fastapi import APIRouter

from ccrm.api.dependencies import BackupServiceDep, EnrollmentEngineDep, RecordsServiceDep
from ccrm.api.models import (
    APIResponse,
    BackupResponse,
    BackupSizeResponse,
    LoadResponse,
    SaveResponse,
)

logger = logging.getLogger("ccrm.api")

router = APIRouter(prefix="/data", tags=["data"])


@router.post("/load", response_model=APIResponse[LoadResponse])
def load_data(
    records: RecordsServiceDep, engine: EnrollmentEngineDep
) -> APIResponse[LoadResponse]:
    """Reload records from the data directory.

    The ledger is rebuilt from the persisted enrollments, since existing
    enrollments point at the records being replaced. A failed read leaves
    both records and ledger as they were.
    """
    rows = records.load_data()
    engine.clear()
    restored = engine.restore(rows)
    return APIResponse(
        data=LoadResponse(
            students=len(records.students),
            courses=len(records.courses),
            instructors=len(records.instructors),
            enrollments=restored,
        )
    )


@router.post("/save", response_model=APIResponse[SaveResponse])
def save_data(
    records: RecordsServiceDep, engine: EnrollmentEngineDep
) -> APIResponse[SaveResponse]:
    """Export records and enrollments to the export directory."""
    written = records.save_data(enrollments=engine.enrollments)
    return APIResponse(data=SaveResponse(files=[str(p) for p in written]))


@router.post("/backup", response_model=APIResponse[BackupResponse])
def create_backup(backup: BackupServiceDep) -> APIResponse[BackupResponse]:
    """Copy the exported files into a new timestamped backup directory."""
    result = backup.perform_backup()
    if result.is_empty:
        logger.info("Backup %s created with no files", result.directory)
    return APIResponse(
        data=BackupResponse(
            directory=str(result.directory), files=[str(p) for p in result.copied]
        )
    )


@router.get("/backups/size", response_model=APIResponse[BackupSizeResponse])
def get_backup_size(backup: BackupServiceDep) -> APIResponse[BackupSizeResponse]:
    """Total size of all backups, in characters."""
    return APIResponse(data=BackupSizeResponse(size=backup.backup_size()))
