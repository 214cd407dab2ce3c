"""Backup - Timestamped copies of exported record files."""

from ccrm.backup.models import BackupResult
from ccrm.backup.service import BackupService, directory_size, list_backups

__all__ = [
    "BackupResult",
    "BackupService",
    "directory_size",
    "list_backups",
]
