# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher service for managing teacher user references.

Teachers are user references with role_id 2. Their profile carries the
speciality, the career and the subject assignments. Removing a teacher
deletes the user reference and the database cascades the profile and
its assignments.
"""

from __future__ import annotations

import logging
from functools import partial

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.errors import (
    ConflictError,
    InternalFailureError,
    NotFoundError,
    translate_errors,
)
from src.infrastructure.database.connection import is_unique_violation
from src.infrastructure.database.models import (
    USER_STATUS_ACTIVE,
    USER_STATUS_INACTIVE,
    Role,
    SubjectAssignment,
    TeacherProfile,
    UserReference,
)
from src.models.common import MessageResponse, PaginatedResponse, PaginationParams
from src.models.teacher import TeacherResponse, TeacherUpdateRequest

logger = logging.getLogger(__name__)


class TeacherNotFoundError(NotFoundError):
    """Raised when the user is missing or is not a teacher."""

    pass


class TeacherEmailExistsError(ConflictError):
    """Raised when the new email belongs to another user."""

    pass


class TeacherInternalError(InternalFailureError):
    """Raised when a teacher operation fails unexpectedly."""

    pass


_translate_errors = partial(translate_errors, error_class=TeacherInternalError, log=logger)


def _teacher_options() -> tuple:
    """Loader options for TeacherResponse."""
    return (
        selectinload(UserReference.teacher_profile).selectinload(TeacherProfile.speciality),
        selectinload(UserReference.teacher_profile).selectinload(TeacherProfile.career),
        selectinload(UserReference.teacher_profile)
        .selectinload(TeacherProfile.subjects)
        .selectinload(SubjectAssignment.subject),
    )


class TeacherService:
    """Service for reading, updating and removing teachers.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize teacher service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def list_teachers(
        self,
        pagination: PaginationParams,
    ) -> PaginatedResponse[TeacherResponse]:
        """List teachers one page at a time.

        Args:
            pagination: Page and limit.

        Returns:
            Pagination envelope with teachers and their profiles.
        """
        with _translate_errors("Error fetching teachers"):
            count_query = (
                select(func.count())
                .select_from(UserReference)
                .where(UserReference.role_id == Role.TEACHER)
            )
            total = (await self.db.execute(count_query)).scalar_one()

            query = (
                select(UserReference)
                .options(*_teacher_options())
                .where(UserReference.role_id == Role.TEACHER)
                .order_by(UserReference.id)
                .offset(pagination.offset)
                .limit(pagination.limit)
            )
            result = await self.db.execute(query)

            return PaginatedResponse[TeacherResponse](
                data=[TeacherResponse.model_validate(u) for u in result.scalars().all()],
                total=total,
                page=pagination.page,
                limit=pagination.limit,
            )

    async def get_teacher(self, teacher_id: int) -> TeacherResponse:
        """Get a teacher with profile.

        Raises:
            TeacherNotFoundError: If the user is missing or not a teacher.
        """
        with _translate_errors("Error fetching teacher"):
            user = await self._load_teacher(teacher_id)
            if user is None:
                raise TeacherNotFoundError("Teacher not found")
            return TeacherResponse.model_validate(user)

    async def update_teacher(
        self,
        teacher_id: int,
        request: TeacherUpdateRequest,
    ) -> TeacherResponse:
        """Update a teacher.

        name and email are written to the user reference. speciality_id
        and career_id are written to the teacher profile, which is
        created when the user has none yet.

        Args:
            teacher_id: User id of the teacher.
            request: Fields to update.

        Returns:
            The updated teacher.

        Raises:
            TeacherNotFoundError: If the user is missing or not a teacher.
            TeacherEmailExistsError: If another user owns the new email.
            TeacherInternalError: On unexpected failure.
        """
        with _translate_errors("Error updating teacher"):
            user = await self._load_teacher(teacher_id)
            if user is None:
                raise TeacherNotFoundError(f"Teacher with ID {teacher_id} not found")

            if request.email:
                await self._check_email_available(request.email, teacher_id)

            if request.name:
                user.name = request.name
            if request.email:
                user.email = request.email

            profile_updates = request.model_dump(
                include={"speciality_id", "career_id"},
                exclude_none=True,
            )
            if profile_updates:
                if user.teacher_profile is None:
                    user.teacher_profile = TeacherProfile(user_id=user.id)
                for field, value in profile_updates.items():
                    setattr(user.teacher_profile, field, value)

            try:
                await self.db.commit()
            except IntegrityError as e:
                await self.db.rollback()
                if request.email and is_unique_violation(e):
                    raise TeacherEmailExistsError(
                        f"User with email {request.email} already exists", e
                    ) from e
                raise

            logger.info(
                "Updated teacher: id=%s, fields=%s",
                teacher_id,
                sorted(request.model_dump(exclude_none=True)),
            )

            updated = await self._load_teacher(teacher_id, refresh=True)
            return TeacherResponse.model_validate(updated)

    async def remove_teacher(self, teacher_id: int) -> MessageResponse:
        """Delete a teacher and, through the database cascade, its profile.

        Raises:
            TeacherNotFoundError: If the user is missing or not a teacher.
        """
        with _translate_errors("Error removing teacher"):
            query = select(UserReference).where(UserReference.id == teacher_id)
            result = await self.db.execute(query)
            user = result.scalar_one_or_none()

            if user is None or not user.is_teacher:
                raise TeacherNotFoundError(f"Teacher with ID {teacher_id} not found")

            await self.db.delete(user)
            await self.db.commit()

            logger.info("Removed teacher: id=%s", teacher_id)

            return MessageResponse(
                message=f"Teacher with ID {teacher_id} has been successfully removed"
            )

    async def list_teachers_with_multiple_subjects(self) -> list[TeacherResponse]:
        """List teachers assigned to more than one subject."""
        with _translate_errors("Error fetching teachers with multiple subjects"):
            multi_subject_profiles = (
                select(SubjectAssignment.teacher_profile_id)
                .group_by(SubjectAssignment.teacher_profile_id)
                .having(func.count(SubjectAssignment.id) > 1)
            )

            query = (
                select(UserReference)
                .join(TeacherProfile, TeacherProfile.user_id == UserReference.id)
                .options(*_teacher_options())
                .where(
                    UserReference.role_id == Role.TEACHER,
                    TeacherProfile.id.in_(multi_subject_profiles),
                )
                .order_by(UserReference.id)
            )
            result = await self.db.execute(query)
            return [TeacherResponse.model_validate(u) for u in result.scalars().all()]

    async def filter_teachers_by_status_and_subjects(self) -> list[TeacherResponse]:
        """List teachers that are (active and teach a subject) or not inactive."""
        with _translate_errors("Error filtering teachers by status and subjects"):
            teaches_subjects = UserReference.teacher_profile.has(
                TeacherProfile.subjects.any()
            )

            query = (
                select(UserReference)
                .options(*_teacher_options())
                .where(
                    UserReference.role_id == Role.TEACHER,
                    or_(
                        and_(
                            UserReference.status == USER_STATUS_ACTIVE,
                            teaches_subjects,
                        ),
                        UserReference.status != USER_STATUS_INACTIVE,
                    ),
                )
                .order_by(UserReference.id)
            )
            result = await self.db.execute(query)
            return [TeacherResponse.model_validate(u) for u in result.scalars().all()]

    async def _check_email_available(self, email: str, teacher_id: int) -> None:
        """Raise if another user owns the email.

        Raises:
            TeacherEmailExistsError: If the email is taken.
        """
        query = select(UserReference.id).where(
            UserReference.email == email,
            UserReference.id != teacher_id,
        )
        result = await self.db.execute(query)
        if result.scalar_one_or_none() is not None:
            raise TeacherEmailExistsError(f"User with email {email} already exists")

    async def _load_teacher(
        self,
        teacher_id: int,
        refresh: bool = False,
    ) -> UserReference | None:
        """Load a teacher with profile relations.

        Returns:
            The user reference, or None if missing or not a teacher.
        """
        query = (
            select(UserReference)
            .options(*_teacher_options())
            .where(UserReference.id == teacher_id)
        )
        if refresh:
            query = query.execution_options(populate_existing=True)

        result = await self.db.execute(query)
        user = result.scalar_one_or_none()

        if user is None or not user.is_teacher:
            return None
        return user
