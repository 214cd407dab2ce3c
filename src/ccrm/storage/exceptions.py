"""Custom exceptions for Virtual Storage."""


class StorageError(Exception):
    """Base exception for Virtual Storage errors."""


class PathExistsError(StorageError):
    """Path is already registered as a file or directory."""


class PathNotFoundError(StorageError):
    """Path does not exist, or is not a readable file."""


class PathNotADirectoryError(StorageError):
    """Path exists but is a file where a directory was expected."""


class PathNotAFileError(StorageError):
    """Path exists but is a directory where a file was expected."""


class UnsupportedOperationError(StorageError):
    """Operation is not supported for this kind of path."""
