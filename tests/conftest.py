# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.core.config import clear_settings_cache
from src.infrastructure.database.models import (
    Career,
    Role,
    StudentProfile,
    SubjectReference,
    UserReference,
)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture
def test_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[dict[str, str]]:
    """Provide test environment variables and a fresh settings cache.

    Returns:
        Dictionary of environment variables set for the test.
    """
    env = {
        "ENVIRONMENT": "development",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "DB_HOST": "localhost",
        "DB_PORT": "5432",
        "DB_USER": "academic",
        "DB_PASSWORD": "academic_password",
        "DB_DATABASE": "academic_records_test",
        "JWT_SECRET_KEY": "test-secret-key-for-testing-only",
        "JWT_ALGORITHM": "HS256",
        "ACCESS_TOKEN_EXPIRE_MINUTES": "30",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    clear_settings_cache()
    yield env
    clear_settings_cache()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def mock_db() -> AsyncMock:
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.add_all = MagicMock()
    db.delete = AsyncMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    db.in_transaction = MagicMock(return_value=False)
    return db


def _result_with(value: object) -> MagicMock:
    """Build a mock execute() result returning value from the usual accessors."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar_one.return_value = value
    result.scalars.return_value.all.return_value = value if isinstance(value, list) else []
    return result


# =============================================================================
# Model Builders
# =============================================================================


def _make_student(
    user_id: int = 7,
    profile_id: int = 70,
    status: str = "active",
    role_id: int = Role.STUDENT,
    with_profile: bool = True,
) -> UserReference:
    """Build a transient student user reference."""
    user = UserReference(
        id=user_id,
        name=f"Student {user_id}",
        email=f"student{user_id}@example.com",
        status=status,
        role_id=role_id,
    )
    if with_profile:
        user.student_profile = StudentProfile(id=profile_id, user_id=user_id)
    else:
        user.student_profile = None
    return user


def _make_subject(subject_id: int = 3, capacity: int = 1, name: str = "Algebra") -> SubjectReference:
    """Build a transient subject."""
    subject = SubjectReference(id=subject_id, name=name, capacity=capacity)
    subject.career = Career(id=1, name="Engineering")
    subject.career_id = 1
    subject.subject_assignments = []
    return subject


@pytest.fixture
def make_result():
    """Factory for mock execute() results."""
    return _result_with


@pytest.fixture
def make_student():
    """Factory for transient student user references."""
    return _make_student


@pytest.fixture
def make_subject():
    """Factory for transient subjects."""
    return _make_subject
