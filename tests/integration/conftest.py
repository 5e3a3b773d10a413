# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for API integration tests.

The application is built with create_app(). The lifespan is not run,
so no database pool is opened; services and the database session are
replaced through dependency overrides.
"""

import time
from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.dependencies import require_auth
from src.api.middleware.auth import CurrentUser
from src.api.middleware.rate_limit import limiter
from src.domains.auth.jwt import TokenPayload
from src.infrastructure.database.models import Role


@pytest.fixture
def reset_rate_limit() -> Iterator[None]:
    """Start every test with empty rate limit counters."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def app(test_environment, reset_rate_limit) -> Iterator[FastAPI]:
    """Create the application with a clean set of overrides."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def admin_user() -> CurrentUser:
    """Authenticated administrator."""
    return CurrentUser(
        TokenPayload(sub="1", role_id=Role.ADMIN, exp=int(time.time()) + 600)
    )


@pytest.fixture
def client(app: FastAPI, admin_user: CurrentUser) -> TestClient:
    """Test client with authentication satisfied by admin_user."""
    app.dependency_overrides[require_auth] = lambda: admin_user
    return TestClient(app)


@pytest.fixture
def mock_service() -> AsyncMock:
    """Service double whose methods are all awaitable."""
    return AsyncMock()
