"""Data models for the Backup module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import PurePosixPath


@dataclass
class BackupResult:
    """Result of a backup run.

    Attributes:
        directory: The timestamped directory created for this backup.
        copied: Backup copies written, one per exported file.
    """

    directory: PurePosixPath
    copied: list[PurePosixPath] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.copied
