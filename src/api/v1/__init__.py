# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    enrollments: Transactional enrollment and enrollment records.
    teachers: Teacher management and queries.
"""

from fastapi import APIRouter

from src.api.v1 import enrollments, teachers

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(enrollments.router, prefix="/enrollments", tags=["Enrollments"])
router.include_router(teachers.router, prefix="/teachers", tags=["Teachers"])

__all__ = ["router"]
