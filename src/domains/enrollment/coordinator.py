# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transactional enrollment of a student in a subject.

EnrollmentCoordinator runs the whole enrollment inside a single store
transaction:

1. Resolve the user and its student profile (active, student role).
2. Resolve the subject.
3. Reject if the student profile is already enrolled.
4. Reject if the subject has no capacity left.
5. Insert the enrollment with status "enrolled".
6. Atomically take one seat from the subject.
7. Commit.

Checks 1-4 run before any write. A failure at 5 or 6 rolls back both
writes, so an enrollment never exists without its seat being taken and
a seat is never taken without an enrollment.
"""

import logging

from src.domains.enrollment.exceptions import (
    AlreadyEnrolledError,
    CapacityExhaustedError,
    EnrollmentInternalError,
    StudentNotEligibleError,
    SubjectNotFoundError,
)
from src.domains.enrollment.store import EnrollmentStore
from src.domains.errors import ServiceError
from src.infrastructure.database.models import ENROLLMENT_STATUS_ENROLLED
from src.models.enrollment import EnrollmentResponse

logger = logging.getLogger(__name__)


class EnrollmentCoordinator:
    """Stateless coordinator for transactional enrollment.

    Attributes:
        store: Transactional store the enrollment runs against.
    """

    def __init__(self, store: EnrollmentStore) -> None:
        """Initialize the coordinator.

        Args:
            store: Enrollment store bound to the current request.
        """
        self.store = store

    async def enroll(self, student_id: int, subject_id: int) -> EnrollmentResponse:
        """Enroll a student in a subject.

        Args:
            student_id: User id of the student.
            subject_id: Subject identifier.

        Returns:
            The created enrollment.

        Raises:
            StudentNotEligibleError: If the student is missing, inactive
                or not a student.
            SubjectNotFoundError: If the subject does not exist.
            CapacityExhaustedError: If the subject has no seats left.
            AlreadyEnrolledError: If the student is already enrolled.
            EnrollmentInternalError: On any unexpected store failure.
        """
        try:
            async with self.store.transaction():
                enrollment = await self._enroll(student_id, subject_id)
        except ServiceError as e:
            logger.info(
                "Enrollment rejected: student=%s, subject=%s, reason=%s",
                student_id,
                subject_id,
                e.message,
            )
            raise
        except Exception as e:
            logger.exception(
                "Transactional enrollment failed: student=%s, subject=%s",
                student_id,
                subject_id,
            )
            raise EnrollmentInternalError(
                "Error during transactional enrollment", e
            ) from e

        logger.info(
            "Enrolled student: student=%s, student_profile=%s, subject=%s, enrollment=%s",
            student_id,
            enrollment.student_profile_id,
            subject_id,
            enrollment.id,
        )
        return enrollment

    async def _enroll(self, student_id: int, subject_id: int) -> EnrollmentResponse:
        """Run the enrollment steps inside an open transaction."""
        student = await self.store.get_student(student_id)
        if (
            student is None
            or not student.is_active
            or not student.is_student
            or student.student_profile is None
        ):
            raise StudentNotEligibleError("Student is not active or not found")

        student_profile_id = student.student_profile.id

        subject = await self.store.get_subject(subject_id)
        if subject is None:
            raise SubjectNotFoundError("Subject not found")

        existing = await self.store.find_enrollment(student_profile_id, subject_id)
        if existing is not None:
            raise AlreadyEnrolledError("Student is already enrolled in this subject")

        if subject.capacity <= 0:
            raise CapacityExhaustedError("No available capacity for this subject")

        enrollment = await self.store.add_enrollment(
            student_profile_id,
            subject_id,
            ENROLLMENT_STATUS_ENROLLED,
        )

        # Another transaction may have taken the last seat since the read above
        if not await self.store.decrement_capacity(subject_id):
            raise CapacityExhaustedError("No available capacity for this subject")

        return EnrollmentResponse.model_validate(enrollment)
