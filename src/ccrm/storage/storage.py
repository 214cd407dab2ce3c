"""VirtualStorage - In-memory hierarchical store standing in for a filesystem."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import PurePosixPath

from ccrm.storage.exceptions import (
    PathExistsError,
    PathNotADirectoryError,
    PathNotAFileError,
    PathNotFoundError,
    UnsupportedOperationError,
)

logger = logging.getLogger("ccrm.storage")

StoragePath = str | PurePosixPath

ROOT = PurePosixPath(".")


def _as_path(path: StoragePath) -> PurePosixPath:
    return PurePosixPath(path)


class VirtualStorage:
    """Arena of path entries, each either a directory or a file of lines.

    The root directory ``.`` always exists. New entries are registered as
    children of their parent only when the parent is a known directory;
    parents are never created implicitly.
    """

    def __init__(self) -> None:
        self._files: dict[PurePosixPath, list[str]] = {}
        self._directories: dict[PurePosixPath, set[PurePosixPath]] = {ROOT: set()}

    # --- Queries ---

    def exists(self, path: StoragePath) -> bool:
        """Check whether a file or directory is registered at path."""
        p = _as_path(path)
        return p in self._files or p in self._directories

    def is_directory(self, path: StoragePath) -> bool:
        """Check whether path is a registered directory."""
        return _as_path(path) in self._directories

    def read_lines(self, path: StoragePath) -> list[str]:
        """Read a file's lines.

        Args:
            path: File to read

        Returns:
            A copy of the file's lines, in order

        Raises:
            PathNotFoundError: If path is absent or is a directory
        """
        p = _as_path(path)
        if p not in self._files:
            raise PathNotFoundError(f"File not found: {p}")
        return list(self._files[p])

    def size(self, path: StoragePath) -> int:
        """Total character count of a file's lines.

        Raises:
            PathNotFoundError: If path does not exist
            PathNotAFileError: If path is a directory
        """
        p = _as_path(path)
        if p in self._directories:
            raise PathNotAFileError(f"Cannot get size of directory: {p}")
        if p not in self._files:
            raise PathNotFoundError(f"Cannot get size for: {p}")
        return sum(len(line) for line in self._files[p])

    def list(self, directory: StoragePath) -> list[PurePosixPath]:
        """List a directory's registered children.

        Returns:
            Child paths, sorted

        Raises:
            PathNotFoundError: If directory does not exist
            PathNotADirectoryError: If path is a file
        """
        p = _as_path(directory)
        if p in self._files:
            raise PathNotADirectoryError(f"Not a directory: {p}")
        if p not in self._directories:
            raise PathNotFoundError(f"Directory not found: {p}")
        return sorted(self._directories[p])

    # --- Mutations ---

    def create_directory(self, path: StoragePath) -> None:
        """Register a new directory.

        Raises:
            PathExistsError: If path is already a file or directory
        """
        p = _as_path(path)
        if self.exists(p):
            raise PathExistsError(f"Path already exists: {p}")
        self._directories[p] = set()
        self._register(p)
        logger.debug("Created directory %s", p)

    def write(self, path: StoragePath, lines: Iterable[str]) -> None:
        """Create or overwrite a file.

        Raises:
            PathNotAFileError: If path is a directory
        """
        p = _as_path(path)
        if p in self._directories:
            raise PathNotAFileError(f"Cannot write to directory: {p}")
        self._files[p] = list(lines)
        self._register(p)
        logger.debug("Wrote %d lines to %s", len(self._files[p]), p)

    def copy(self, source: StoragePath, target: StoragePath) -> None:
        """Copy a file's content to target, overwriting it.

        Raises:
            PathNotFoundError: If source does not exist
            UnsupportedOperationError: If source is a directory
            PathNotAFileError: If target is a directory
        """
        src = _as_path(source)
        if not self.exists(src):
            raise PathNotFoundError(f"Source does not exist: {src}")
        if src in self._directories:
            raise UnsupportedOperationError(f"Copying directories is not supported: {src}")
        self.write(target, self._files[src])

    def _register(self, path: PurePosixPath) -> None:
        parent = path.parent
        if parent != path and parent in self._directories:
            self._directories[parent].add(path)

    def __repr__(self) -> str:
        return f"<VirtualStorage(files={len(self._files)}, directories={len(self._directories)})>"
