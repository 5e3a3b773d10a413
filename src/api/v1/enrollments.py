# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment API endpoints.

This module provides endpoints for student enrollment:
- POST /enroll - Transactional enrollment (takes one seat)
- POST / - Create an enrollment record
- GET / - List enrollment records (paginated)
- GET /students/{student_id} - List enrollments of a student
- GET /{enrollment_id} - Get enrollment details
- PATCH /{enrollment_id} - Update an enrollment record
- DELETE /{enrollment_id} - Remove an enrollment record

Only /enroll changes subject capacity.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.api.dependencies import (
    get_enrollment_coordinator,
    get_enrollment_service,
    require_auth,
)
from src.api.errors import to_http_exception
from src.api.middleware.auth import CurrentUser
from src.api.middleware.rate_limit import ENROLL_RATE_LIMIT, limiter
from src.domains.enrollment import EnrollmentCoordinator, EnrollmentService
from src.domains.errors import ServiceError
from src.models.common import MessageResponse, PaginatedResponse, PaginationParams
from src.models.enrollment import (
    EnrollmentCreateRequest,
    EnrollmentDetailResponse,
    EnrollmentResponse,
    EnrollmentUpdateRequest,
    EnrollRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/enroll",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll student",
    description="Enroll an active student in a subject, taking one seat.",
)
@limiter.limit(ENROLL_RATE_LIMIT)
async def enroll_student(
    request: Request,
    data: EnrollRequest,
    current_user: CurrentUser = Depends(require_auth),
    coordinator: EnrollmentCoordinator = Depends(get_enrollment_coordinator),
) -> EnrollmentResponse:
    """Enroll a student in a subject.

    Args:
        request: HTTP request (used by the rate limiter).
        data: Student and subject ids.
        current_user: Authenticated user.
        coordinator: Enrollment coordinator.

    Returns:
        The created enrollment.

    Raises:
        HTTPException: 404 subject missing, 409 already enrolled,
            422 student not eligible or no capacity, 500 otherwise.
    """
    logger.info(
        "Enrolling student %s in subject %s by %s",
        data.student_id,
        data.subject_id,
        current_user.id,
    )

    try:
        return await coordinator.enroll(data.student_id, data.subject_id)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.post(
    "",
    response_model=EnrollmentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create enrollment",
    description="Create an enrollment record without touching capacity.",
)
async def create_enrollment(
    data: EnrollmentCreateRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> EnrollmentDetailResponse:
    """Create an enrollment record."""
    try:
        return await service.create_enrollment(data)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.get(
    "",
    response_model=PaginatedResponse[EnrollmentDetailResponse],
    summary="List enrollments",
)
async def list_enrollments(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 10,
    current_user: CurrentUser = Depends(require_auth),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> PaginatedResponse[EnrollmentDetailResponse]:
    """List enrollment records one page at a time."""
    try:
        return await service.list_enrollments(PaginationParams(page=page, limit=limit))
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.get(
    "/students/{student_id}",
    response_model=list[EnrollmentDetailResponse],
    summary="List student enrollments",
    description="List the enrollments of a student, optionally for one subject.",
)
async def list_student_enrollments(
    student_id: int,
    subject_id: Annotated[int | None, Query(gt=0, description="Filter by subject")] = None,
    current_user: CurrentUser = Depends(require_auth),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> list[EnrollmentDetailResponse]:
    """List the enrollments of a student.

    Args:
        student_id: User id of the student.
        subject_id: Optional subject filter.
        current_user: Authenticated user.
        service: Enrollment service.

    Returns:
        Enrollments of the student.
    """
    try:
        return await service.list_enrollments_by_period(student_id, subject_id)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.get(
    "/{enrollment_id}",
    response_model=EnrollmentDetailResponse,
    summary="Get enrollment",
)
async def get_enrollment(
    enrollment_id: int,
    current_user: CurrentUser = Depends(require_auth),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> EnrollmentDetailResponse:
    """Get enrollment details."""
    try:
        return await service.get_enrollment(enrollment_id)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.patch(
    "/{enrollment_id}",
    response_model=EnrollmentDetailResponse,
    summary="Update enrollment",
)
async def update_enrollment(
    enrollment_id: int,
    data: EnrollmentUpdateRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> EnrollmentDetailResponse:
    """Update an enrollment record."""
    logger.info("Updating enrollment %s by %s", enrollment_id, current_user.id)

    try:
        return await service.update_enrollment(enrollment_id, data)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.delete(
    "/{enrollment_id}",
    response_model=MessageResponse,
    summary="Remove enrollment",
)
async def remove_enrollment(
    enrollment_id: int,
    current_user: CurrentUser = Depends(require_auth),
    service: EnrollmentService = Depends(get_enrollment_service),
) -> MessageResponse:
    """Remove an enrollment record."""
    logger.info("Removing enrollment %s by %s", enrollment_id, current_user.id)

    try:
        return await service.remove_enrollment(enrollment_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
