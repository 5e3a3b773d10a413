# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transactional store used by the enrollment coordinator.

TransactionalStore defines the unit-of-work boundary (begin, commit,
rollback and the transaction() context manager). EnrollmentStore adds
the typed repository operations the coordinator needs, and
SqlEnrollmentStore implements them on a SQLAlchemy AsyncSession.

Capacity is protected with an atomic conditional decrement:

    UPDATE subjects SET capacity = capacity - 1
    WHERE id = :subject_id AND capacity > 0

Zero affected rows means the last seat was taken by a concurrent
enrollment. Duplicate enrollments racing past the read check are
stopped by the (student_profile_id, subject_id) unique constraint.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction
from sqlalchemy.orm import selectinload

from src.domains.enrollment.exceptions import AlreadyEnrolledError
from src.infrastructure.database.connection import is_unique_violation
from src.infrastructure.database.models import (
    StudentSubject,
    SubjectReference,
    UserReference,
)

logger = logging.getLogger(__name__)


class TransactionalStore(ABC):
    """Atomic unit of work with explicit begin/commit/rollback."""

    @abstractmethod
    async def begin(self) -> None:
        """Open a transaction."""

    @abstractmethod
    async def commit(self) -> None:
        """Commit the open transaction."""

    @abstractmethod
    async def rollback(self) -> None:
        """Roll back the open transaction, discarding every write."""

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["TransactionalStore"]:
        """Run a block inside one transaction.

        Commits when the block completes and rolls back when it raises.
        The exception is always re-raised.

        Example:
            async with store.transaction():
                await store.add_enrollment(...)
        """
        await self.begin()
        try:
            yield self
            await self.commit()
        except Exception:
            await self.rollback()
            raise


class EnrollmentStore(TransactionalStore):
    """Repository operations for transactional enrollment."""

    @abstractmethod
    async def get_student(self, user_id: int) -> Optional[UserReference]:
        """Get a user reference with its student profile loaded."""

    @abstractmethod
    async def get_subject(self, subject_id: int) -> Optional[SubjectReference]:
        """Get a subject by id."""

    @abstractmethod
    async def find_enrollment(
        self,
        student_profile_id: int,
        subject_id: int,
    ) -> Optional[StudentSubject]:
        """Find the enrollment for a (student profile, subject) pair."""

    @abstractmethod
    async def add_enrollment(
        self,
        student_profile_id: int,
        subject_id: int,
        status: str,
    ) -> StudentSubject:
        """Insert an enrollment record.

        Raises:
            AlreadyEnrolledError: If the pair already exists.
        """

    @abstractmethod
    async def decrement_capacity(self, subject_id: int) -> bool:
        """Take one seat from a subject.

        Returns:
            True if a seat was taken, False if capacity was already zero.
        """


class SqlEnrollmentStore(EnrollmentStore):
    """EnrollmentStore backed by a SQLAlchemy AsyncSession.

    When the session already has a transaction open (for example the
    request-scoped session from get_db), begin() opens a SAVEPOINT so
    the enrollment can be rolled back on its own.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the store.

        Args:
            db: Async database session.
        """
        self.db = db
        self._transaction: AsyncSessionTransaction | None = None

    async def begin(self) -> None:
        if self.db.in_transaction():
            self._transaction = await self.db.begin_nested()
        else:
            self._transaction = await self.db.begin()

    async def commit(self) -> None:
        if self._transaction is None:
            raise RuntimeError("No transaction in progress")
        try:
            await self._transaction.commit()
        finally:
            self._transaction = None

    async def rollback(self) -> None:
        # A failed flush leaves the transaction deactivated but still
        # pending; rollback() is what returns the session to a usable state.
        transaction, self._transaction = self._transaction, None
        if transaction is not None:
            await transaction.rollback()

    async def get_student(self, user_id: int) -> Optional[UserReference]:
        query = (
            select(UserReference)
            .options(selectinload(UserReference.student_profile))
            .where(UserReference.id == user_id)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_subject(self, subject_id: int) -> Optional[SubjectReference]:
        query = select(SubjectReference).where(SubjectReference.id == subject_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_enrollment(
        self,
        student_profile_id: int,
        subject_id: int,
    ) -> Optional[StudentSubject]:
        query = select(StudentSubject).where(
            StudentSubject.student_profile_id == student_profile_id,
            StudentSubject.subject_id == subject_id,
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def add_enrollment(
        self,
        student_profile_id: int,
        subject_id: int,
        status: str,
    ) -> StudentSubject:
        enrollment = StudentSubject(
            student_profile_id=student_profile_id,
            subject_id=subject_id,
            status=status,
        )
        self.db.add(enrollment)

        try:
            await self.db.flush()
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            logger.info(
                "Concurrent duplicate enrollment: student_profile=%s, subject=%s",
                student_profile_id,
                subject_id,
            )
            raise AlreadyEnrolledError(
                "Student is already enrolled in this subject", e
            ) from e

        return enrollment

    async def decrement_capacity(self, subject_id: int) -> bool:
        stmt = (
            update(SubjectReference)
            .where(
                SubjectReference.id == subject_id,
                SubjectReference.capacity > 0,
            )
            .values(capacity=SubjectReference.capacity - 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1
