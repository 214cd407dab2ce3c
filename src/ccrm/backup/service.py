"""BackupService - Copies exported files into timestamped backup directories."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from ccrm.backup.models import BackupResult
from ccrm.config import AppConfig

if TYPE_CHECKING:
    from pathlib import PurePosixPath

    from ccrm.storage import StoragePath, VirtualStorage

logger = logging.getLogger("ccrm.backup")

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class BackupService:
    """Backs up the export directory inside the same VirtualStorage."""

    def __init__(self, storage: VirtualStorage, config: AppConfig | None = None) -> None:
        self.storage = storage
        self.config = config or AppConfig()

    def perform_backup(self, timestamp: datetime | None = None) -> BackupResult:
        """Copy every exported file into ``backup_<timestamp>``.

        Args:
            timestamp: Time used to name the backup directory. Defaults to now.

        Returns:
            BackupResult listing the copies; empty when there is nothing
            exported yet.

        Raises:
            StorageError: If the backup directory cannot be created or a
                copy fails.
        """
        stamp = (timestamp or datetime.now()).strftime(TIMESTAMP_FORMAT)
        backup_root = self.config.backup_dir
        target_dir = backup_root / f"backup_{stamp}"
        logger.info("Starting backup to %s", target_dir)

        if not self.storage.exists(backup_root):
            self.storage.create_directory(backup_root)
        self.storage.create_directory(target_dir)

        result = BackupResult(directory=target_dir)
        source_dir = self.config.export_dir
        if not self.storage.is_directory(source_dir):
            logger.warning("No export files to back up in %s", source_dir)
            return result

        for source in self.storage.list(source_dir):
            if self.storage.is_directory(source):
                continue
            target = target_dir / source.name
            self.storage.copy(source, target)
            result.copied.append(target)
            logger.info("Backed up %s to %s", source, target)

        logger.info("Backup completed: %d files copied", len(result.copied))
        return result

    def backup_size(self) -> int:
        """Total size of everything under the backup directory, 0 if absent."""
        if not self.storage.is_directory(self.config.backup_dir):
            return 0
        return directory_size(self.storage, self.config.backup_dir)


def directory_size(storage: VirtualStorage, path: StoragePath) -> int:
    """Sum the sizes of all files beneath a directory, recursively.

    Raises:
        PathNotFoundError: If path does not exist
        PathNotADirectoryError: If path is a file
    """
    total = 0
    for child in storage.list(path):
        if storage.is_directory(child):
            total += directory_size(storage, child)
        else:
            total += storage.size(child)
    return total


def list_backups(storage: VirtualStorage, config: AppConfig) -> list[PurePosixPath]:
    """Backup directories in name order, i.e. oldest first."""
    if not storage.is_directory(config.backup_dir):
        return []
    return [p for p in storage.list(config.backup_dir) if storage.is_directory(p)]
