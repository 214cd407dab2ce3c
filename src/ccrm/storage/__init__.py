"""Virtual Storage - In-memory hierarchical store for record files."""

from ccrm.storage.exceptions import (
    PathExistsError,
    PathNotADirectoryError,
    PathNotAFileError,
    PathNotFoundError,
    StorageError,
    UnsupportedOperationError,
)
from ccrm.storage.seed import create_storage, seed_example_data
from ccrm.storage.storage import ROOT, StoragePath, VirtualStorage

__all__ = [
    "ROOT",
    "PathExistsError",
    "PathNotADirectoryError",
    "PathNotAFileError",
    "PathNotFoundError",
    "StorageError",
    "StoragePath",
    "UnsupportedOperationError",
    "VirtualStorage",
    "create_storage",
    "seed_example_data",
]
