"""Application configuration for CCRM.

Directory locations are carried in an explicit ``AppConfig`` value that is
handed to the storage bootstrap, the services and the API at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import PurePosixPath

DEFAULT_DATA_DIR = "data"
DEFAULT_EXPORT_DIR = "exports"
DEFAULT_BACKUP_DIR = "backups"

STUDENTS_FILE = "students.csv"
COURSES_FILE = "courses.csv"
INSTRUCTORS_FILE = "instructors.csv"
ENROLLMENTS_FILE = "enrollments.csv"


@dataclass(frozen=True)
class AppConfig:
    """Directory layout inside the virtual storage.

    Attributes:
        data_dir: Directory holding the seeded import files.
        export_dir: Directory that ``save_data`` writes to.
        backup_dir: Root directory for timestamped backups.
    """

    data_dir: PurePosixPath = PurePosixPath(DEFAULT_DATA_DIR)
    export_dir: PurePosixPath = PurePosixPath(DEFAULT_EXPORT_DIR)
    backup_dir: PurePosixPath = PurePosixPath(DEFAULT_BACKUP_DIR)

    def __post_init__(self) -> None:
        # Accept plain strings from callers
        for name in ("data_dir", "export_dir", "backup_dir"):
            object.__setattr__(self, name, PurePosixPath(getattr(self, name)))

    @classmethod
    def from_env(cls) -> AppConfig:
        """Build a config from CCRM_DATA_DIR, CCRM_EXPORT_DIR and CCRM_BACKUP_DIR."""
        return cls(
            data_dir=PurePosixPath(os.environ.get("CCRM_DATA_DIR", DEFAULT_DATA_DIR)),
            export_dir=PurePosixPath(os.environ.get("CCRM_EXPORT_DIR", DEFAULT_EXPORT_DIR)),
            backup_dir=PurePosixPath(os.environ.get("CCRM_BACKUP_DIR", DEFAULT_BACKUP_DIR)),
        )

    @property
    def students_path(self) -> PurePosixPath:
        return self.data_dir / STUDENTS_FILE

    @property
    def courses_path(self) -> PurePosixPath:
        return self.data_dir / COURSES_FILE

    @property
    def instructors_path(self) -> PurePosixPath:
        return self.data_dir / INSTRUCTORS_FILE

    @property
    def enrollments_path(self) -> PurePosixPath:
        return self.data_dir / ENROLLMENTS_FILE

    def export_path(self, filename: str) -> PurePosixPath:
        """Path of an exported file inside the export directory."""
        return self.export_dir / filename
