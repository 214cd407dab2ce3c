"""Bootstrap for a VirtualStorage seeded with the canonical example data."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ccrm.config import AppConfig
from ccrm.storage.storage import VirtualStorage

if TYPE_CHECKING:
    from pathlib import PurePosixPath

logger = logging.getLogger("ccrm.storage")

EXAMPLE_STUDENTS = [
    "id,regNo,fullName,email",
    "s001,B23001,Alice Johnson,alice@example.com",
    "s002,B23002,Bob Smith,bob@example.com",
    "s003,A22105,Charlie Brown,charlie@example.com",
]

EXAMPLE_COURSES = [
    "code,title,credits,semester,instructorId",
    "CS101,Intro to Programming,3,FALL,i01",
    "MA201,Calculus I,4,FALL,i02",
    "PY105,Modern Physics,3,SPRING,i02",
]

EXAMPLE_INSTRUCTORS = [
    "id,fullName,email,department",
    "i01,Dr. Evelyn Reed,e.reed@example.com,Computer Science",
    "i02,Dr. Samuel Tan,s.tan@example.com,Physics & Math",
]


def _ensure_directory(storage: VirtualStorage, path: PurePosixPath) -> None:
    # Create missing ancestors first so every level is registered with its parent
    for ancestor in reversed(path.parents):
        if not storage.exists(ancestor):
            storage.create_directory(ancestor)
    if not storage.exists(path):
        storage.create_directory(path)


def seed_example_data(storage: VirtualStorage, config: AppConfig) -> None:
    """Write the example students, courses and instructors files.

    Args:
        storage: Store to seed
        config: Supplies the data directory and file names
    """
    _ensure_directory(storage, config.data_dir)
    storage.write(config.students_path, EXAMPLE_STUDENTS)
    storage.write(config.courses_path, EXAMPLE_COURSES)
    storage.write(config.instructors_path, EXAMPLE_INSTRUCTORS)
    logger.info("Seeded example data under %s", config.data_dir)


def create_storage(config: AppConfig | None = None, seed: bool = True) -> VirtualStorage:
    """Create a VirtualStorage, seeded with example data by default.

    Args:
        config: Directory layout. Defaults to ``AppConfig()``.
        seed: Whether to write the example data files.

    Returns:
        The new store
    """
    storage = VirtualStorage()
    if seed:
        seed_example_data(storage, config or AppConfig())
    return storage
