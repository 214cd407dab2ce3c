"""Shared pytest fixtures and configuration."""

import pytest

from ccrm.config import AppConfig
from ccrm.storage import VirtualStorage, create_storage


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def config() -> AppConfig:
    """Default directory layout."""
    return AppConfig()


@pytest.fixture
def storage(config: AppConfig) -> VirtualStorage:
    """VirtualStorage seeded with the example data set."""
    return create_storage(config)


@pytest.fixture
def empty_storage() -> VirtualStorage:
    """VirtualStorage holding only the root directory."""
    return VirtualStorage()
