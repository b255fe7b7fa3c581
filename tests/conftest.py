"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Test configuration and markers
- In-memory stores and a mocked task store
- Seeded users and authenticated user info
"""

import os
from typing import Any, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from _pytest.config import Config

from domain.repositories import TaskStore
from integration.repositories import InMemoryTaskStore, InMemoryUserDirectory
from tests.fixtures.factories import TokenFactory, UserFactory

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config: Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "auth: Authentication/authorization tests")
    config.addinivalue_line("markers", "repository: Repository layer tests")
    config.addinivalue_line("markers", "command: Command handler tests")
    config.addinivalue_line("markers", "query: Query handler tests")


# ============================================================================
# STORE FIXTURES
# ============================================================================


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    """Provide an empty in-memory task store."""
    return InMemoryTaskStore()


@pytest.fixture
def user_directory() -> InMemoryUserDirectory:
    """Provide a user directory seeded with alice, bob, carol and dave."""
    return InMemoryUserDirectory(UserFactory.create_many("alice", "bob", "carol", "dave"))


@pytest.fixture
def mock_task_store() -> MagicMock:
    """Provide a mock task store for testing command/query handlers in isolation."""
    mock: MagicMock = MagicMock(spec=TaskStore)
    mock.insert_async = AsyncMock(side_effect=lambda task: task)
    mock.find_async = AsyncMock(return_value=[])
    mock.find_one_async = AsyncMock(return_value=None)
    mock.set_fields_async = AsyncMock(return_value=None)
    mock.toggle_checklist_item_async = AsyncMock(return_value=None)
    mock.add_to_set_async = AsyncMock(return_value=None)
    mock.pull_async = AsyncMock(return_value=None)
    return mock


# ============================================================================
# USER FIXTURES
# ============================================================================


@pytest.fixture
def alice() -> dict[str, Any]:
    return TokenFactory.user_info("alice")


@pytest.fixture
def bob() -> dict[str, Any]:
    return TokenFactory.user_info("bob")


@pytest.fixture
def carol() -> dict[str, Any]:
    return TokenFactory.user_info("carol")


# ============================================================================
# CLEANUP FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables after each test."""
    original_env: dict[str, str] = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
