# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for administrative enrollment records.

This module provides the EnrollmentService class for:
- Creating, reading, updating and removing enrollment records
- Paginated listing of enrollments
- Listing the enrollments of one student

These operations never touch subject capacity. Seat accounting belongs
to EnrollmentCoordinator.
"""

from __future__ import annotations

import logging
from functools import partial

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.enrollment.exceptions import (
    AlreadyEnrolledError,
    EnrollmentInternalError,
    EnrollmentNotFoundError,
)
from src.domains.errors import translate_errors
from src.infrastructure.database.connection import is_unique_violation
from src.infrastructure.database.models import (
    StudentProfile,
    StudentSubject,
    SubjectAssignment,
    SubjectReference,
)
from src.models.common import MessageResponse, PaginatedResponse, PaginationParams
from src.models.enrollment import (
    EnrollmentCreateRequest,
    EnrollmentDetailResponse,
    EnrollmentUpdateRequest,
)

logger = logging.getLogger(__name__)

DUPLICATE_ENROLLMENT_MESSAGE = "This student is already enrolled in this subject"

_translate_errors = partial(translate_errors, error_class=EnrollmentInternalError, log=logger)


def _detail_options() -> tuple:
    """Loader options for EnrollmentDetailResponse."""
    return (
        selectinload(StudentSubject.student_profile).selectinload(StudentProfile.user),
        selectinload(StudentSubject.student_profile).selectinload(StudentProfile.career),
        selectinload(StudentSubject.subject).selectinload(SubjectReference.career),
        selectinload(StudentSubject.subject)
        .selectinload(SubjectReference.subject_assignments)
        .selectinload(SubjectAssignment.teacher_profile),
    )


class EnrollmentService:
    """Service for managing enrollment records.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize enrollment service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def create_enrollment(
        self,
        request: EnrollmentCreateRequest,
    ) -> EnrollmentDetailResponse:
        """Create an enrollment record.

        Args:
            request: Enrollment creation data.

        Returns:
            The created enrollment with related data.

        Raises:
            AlreadyEnrolledError: If the pair already exists.
            EnrollmentInternalError: On unexpected failure.
        """
        with _translate_errors("Error creating student subject relationship"):
            existing = await self._find_pair(request.student_profile_id, request.subject_id)
            if existing is not None:
                raise AlreadyEnrolledError(DUPLICATE_ENROLLMENT_MESSAGE)

            enrollment = StudentSubject(
                student_profile_id=request.student_profile_id,
                subject_id=request.subject_id,
                status=request.status,
            )
            self.db.add(enrollment)
            await self._commit()

            logger.info(
                "Created enrollment: id=%s, student_profile=%s, subject=%s",
                enrollment.id,
                request.student_profile_id,
                request.subject_id,
            )

            return await self._get_detail(enrollment.id)

    async def list_enrollments(
        self,
        pagination: PaginationParams,
    ) -> PaginatedResponse[EnrollmentDetailResponse]:
        """List enrollments one page at a time.

        Args:
            pagination: Page and limit.

        Returns:
            Pagination envelope with enrollment details.
        """
        with _translate_errors("Error fetching student subject relationships"):
            count_query = select(func.count()).select_from(StudentSubject)
            total = (await self.db.execute(count_query)).scalar_one()

            query = (
                select(StudentSubject)
                .options(*_detail_options())
                .order_by(StudentSubject.id)
                .offset(pagination.offset)
                .limit(pagination.limit)
            )
            result = await self.db.execute(query)
            enrollments = result.scalars().all()

            return PaginatedResponse[EnrollmentDetailResponse](
                data=[EnrollmentDetailResponse.model_validate(e) for e in enrollments],
                total=total,
                page=pagination.page,
                limit=pagination.limit,
            )

    async def get_enrollment(self, enrollment_id: int) -> EnrollmentDetailResponse:
        """Get an enrollment with related data.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
        """
        with _translate_errors("Error fetching student subject relationship"):
            return await self._get_detail(enrollment_id)

    async def update_enrollment(
        self,
        enrollment_id: int,
        request: EnrollmentUpdateRequest,
    ) -> EnrollmentDetailResponse:
        """Update an enrollment record.

        When the (student profile, subject) pair changes, the resulting
        pair must not belong to another enrollment.

        Args:
            enrollment_id: Enrollment identifier.
            request: Fields to update.

        Returns:
            The updated enrollment with related data.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
            AlreadyEnrolledError: If the resulting pair is taken.
            EnrollmentInternalError: On unexpected failure.
        """
        with _translate_errors("Error updating student subject relationship"):
            enrollment = await self._get_enrollment(enrollment_id)
            updates = request.model_dump(exclude_unset=True, exclude_none=True)

            student_profile_id = updates.get("student_profile_id", enrollment.student_profile_id)
            subject_id = updates.get("subject_id", enrollment.subject_id)

            if (student_profile_id, subject_id) != (
                enrollment.student_profile_id,
                enrollment.subject_id,
            ):
                existing = await self._find_pair(student_profile_id, subject_id)
                if existing is not None and existing.id != enrollment.id:
                    raise AlreadyEnrolledError(DUPLICATE_ENROLLMENT_MESSAGE)

            for field, value in updates.items():
                setattr(enrollment, field, value)

            await self._commit()

            logger.info(
                "Updated enrollment: id=%s, fields=%s",
                enrollment_id,
                sorted(updates),
            )

            return await self._get_detail(enrollment_id)

    async def remove_enrollment(self, enrollment_id: int) -> MessageResponse:
        """Delete an enrollment record.

        Subject capacity is left unchanged.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
        """
        with _translate_errors("Error deleting student subject relationship"):
            enrollment = await self._get_enrollment(enrollment_id)

            await self.db.delete(enrollment)
            await self.db.commit()

            logger.info("Removed enrollment: id=%s", enrollment_id)

            return MessageResponse(
                message=(
                    f"Student Subject relationship with ID {enrollment_id} "
                    "has been successfully removed"
                )
            )

    async def list_enrollments_by_period(
        self,
        student_id: int,
        subject_id: int | None = None,
    ) -> list[EnrollmentDetailResponse]:
        """List the enrollments of a student.

        Args:
            student_id: User id of the student.
            subject_id: Optional subject filter.

        Returns:
            Enrollments whose student profile belongs to the user.
        """
        with _translate_errors("Error fetching enrollments by period"):
            query = (
                select(StudentSubject)
                .join(StudentProfile, StudentSubject.student_profile_id == StudentProfile.id)
                .options(*_detail_options())
                .where(StudentProfile.user_id == student_id)
            )

            if subject_id is not None:
                query = query.where(StudentSubject.subject_id == subject_id)

            query = query.order_by(StudentSubject.id)

            result = await self.db.execute(query)
            return [
                EnrollmentDetailResponse.model_validate(e)
                for e in result.scalars().all()
            ]

    async def _commit(self) -> None:
        """Commit, mapping unique violations to AlreadyEnrolledError."""
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                raise AlreadyEnrolledError(DUPLICATE_ENROLLMENT_MESSAGE, e) from e
            raise

    async def _find_pair(
        self,
        student_profile_id: int,
        subject_id: int,
    ) -> StudentSubject | None:
        """Find the enrollment holding a (student profile, subject) pair."""
        query = select(StudentSubject).where(
            StudentSubject.student_profile_id == student_profile_id,
            StudentSubject.subject_id == subject_id,
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def _get_enrollment(self, enrollment_id: int) -> StudentSubject:
        """Get an enrollment record.

        Raises:
            EnrollmentNotFoundError: If not found.
        """
        query = select(StudentSubject).where(StudentSubject.id == enrollment_id)
        result = await self.db.execute(query)
        enrollment = result.scalar_one_or_none()

        if enrollment is None:
            raise EnrollmentNotFoundError(
                f"Student Subject relationship with ID {enrollment_id} not found"
            )

        return enrollment

    async def _get_detail(self, enrollment_id: int) -> EnrollmentDetailResponse:
        """Load an enrollment with its relations and convert it."""
        query = (
            select(StudentSubject)
            .options(*_detail_options())
            .where(StudentSubject.id == enrollment_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        enrollment = result.scalar_one_or_none()

        if enrollment is None:
            raise EnrollmentNotFoundError(
                f"Student Subject relationship with ID {enrollment_id} not found"
            )

        return EnrollmentDetailResponse.model_validate(enrollment)
