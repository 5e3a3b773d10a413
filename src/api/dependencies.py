# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get authenticated users
- Get service instances

Example:
    @router.get("/enrollments")
    async def list_enrollments(
        db: AsyncSession = Depends(get_db),
        current_user: CurrentUser = Depends(require_auth),
    ):
        ...
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.middleware.auth import CurrentUser, get_current_user
from src.core.config import get_settings
from src.domains.auth.jwt import JWTManager
from src.domains.enrollment import (
    EnrollmentCoordinator,
    EnrollmentService,
    SqlEnrollmentStore,
)
from src.domains.teacher import TeacherService
from src.infrastructure.database import close_database, get_session, init_database
from src.infrastructure.database.models import UserReference

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection pool."""
    await init_database(get_settings())


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a request-scoped database session.

    Yields:
        AsyncSession committed when the request succeeds.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


async def require_auth(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """Require an authenticated user that still exists.

    Args:
        request: HTTP request.
        db: Database session.

    Returns:
        CurrentUser.

    Raises:
        HTTPException: If not authenticated or the user no longer exists.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await db.execute(select(UserReference.id).where(UserReference.id == user.id))
    if result.scalar_one_or_none() is None:
        logger.info("Token subject not found: user=%s", user.id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token not valid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_jwt_manager() -> JWTManager:
    """Get JWT manager instance.

    Returns:
        JWTManager.
    """
    settings = get_settings()
    return JWTManager(settings.jwt)


def get_enrollment_coordinator(
    db: AsyncSession = Depends(get_db),
) -> EnrollmentCoordinator:
    """Get EnrollmentCoordinator bound to the request session."""
    return EnrollmentCoordinator(SqlEnrollmentStore(db))


def get_enrollment_service(
    db: AsyncSession = Depends(get_db),
) -> EnrollmentService:
    """Get EnrollmentService instance."""
    return EnrollmentService(db)


def get_teacher_service(
    db: AsyncSession = Depends(get_db),
) -> TeacherService:
    """Get TeacherService instance."""
    return TeacherService(db)
