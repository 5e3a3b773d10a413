# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher API endpoints.

This module provides endpoints for teacher management:
- GET / - List teachers (paginated)
- GET /multiple-subjects - Teachers with more than one subject
- GET /filter/status-subjects - Teachers filtered by status and subjects
- GET /{teacher_id} - Get teacher details
- PATCH /{teacher_id} - Update teacher
- DELETE /{teacher_id} - Remove teacher
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_teacher_service, require_auth
from src.api.errors import to_http_exception
from src.api.middleware.auth import CurrentUser
from src.domains.errors import ServiceError
from src.domains.teacher import TeacherService
from src.models.common import MessageResponse, PaginatedResponse, PaginationParams
from src.models.teacher import TeacherResponse, TeacherUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[TeacherResponse],
    summary="List teachers",
)
async def list_teachers(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 10,
    current_user: CurrentUser = Depends(require_auth),
    service: TeacherService = Depends(get_teacher_service),
) -> PaginatedResponse[TeacherResponse]:
    """List teachers one page at a time."""
    try:
        return await service.list_teachers(PaginationParams(page=page, limit=limit))
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.get(
    "/multiple-subjects",
    response_model=list[TeacherResponse],
    summary="Teachers with multiple subjects",
)
async def list_teachers_with_multiple_subjects(
    current_user: CurrentUser = Depends(require_auth),
    service: TeacherService = Depends(get_teacher_service),
) -> list[TeacherResponse]:
    """List teachers assigned to more than one subject."""
    try:
        return await service.list_teachers_with_multiple_subjects()
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.get(
    "/filter/status-subjects",
    response_model=list[TeacherResponse],
    summary="Filter teachers by status and subjects",
    description="Teachers that are active and teach a subject, or are not inactive.",
)
async def filter_teachers_by_status_and_subjects(
    current_user: CurrentUser = Depends(require_auth),
    service: TeacherService = Depends(get_teacher_service),
) -> list[TeacherResponse]:
    """Filter teachers by status and subject assignments."""
    try:
        return await service.filter_teachers_by_status_and_subjects()
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.get(
    "/{teacher_id}",
    response_model=TeacherResponse,
    summary="Get teacher",
)
async def get_teacher(
    teacher_id: int,
    current_user: CurrentUser = Depends(require_auth),
    service: TeacherService = Depends(get_teacher_service),
) -> TeacherResponse:
    """Get teacher details."""
    try:
        return await service.get_teacher(teacher_id)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.patch(
    "/{teacher_id}",
    response_model=TeacherResponse,
    summary="Update teacher",
)
async def update_teacher(
    teacher_id: int,
    data: TeacherUpdateRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: TeacherService = Depends(get_teacher_service),
) -> TeacherResponse:
    """Update a teacher.

    Args:
        teacher_id: User id of the teacher.
        data: Fields to update.
        current_user: Authenticated user.
        service: Teacher service.

    Returns:
        The updated teacher.

    Raises:
        HTTPException: 404 if not a teacher, 409 if the email is taken.
    """
    logger.info("Updating teacher %s by %s", teacher_id, current_user.id)

    try:
        return await service.update_teacher(teacher_id, data)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.delete(
    "/{teacher_id}",
    response_model=MessageResponse,
    summary="Remove teacher",
)
async def remove_teacher(
    teacher_id: int,
    current_user: CurrentUser = Depends(require_auth),
    service: TeacherService = Depends(get_teacher_service),
) -> MessageResponse:
    """Remove a teacher and its profile."""
    logger.info("Removing teacher %s by %s", teacher_id, current_user.id)

    try:
        return await service.remove_teacher(teacher_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
