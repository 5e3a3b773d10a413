# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment errors, one per failure, grouped by category."""

from src.domains.errors import (
    ConflictError,
    InternalFailureError,
    NotFoundError,
    PreconditionFailedError,
)


class SubjectNotFoundError(NotFoundError):
    """Raised when the subject does not exist."""

    pass


class EnrollmentNotFoundError(NotFoundError):
    """Raised when the enrollment record does not exist."""

    pass


class AlreadyEnrolledError(ConflictError):
    """Raised when the student profile is already enrolled in the subject."""

    pass


class StudentNotEligibleError(PreconditionFailedError):
    """Raised when the user is missing, inactive or not a student."""

    pass


class CapacityExhaustedError(PreconditionFailedError):
    """Raised when the subject has no open seats left."""

    pass


class EnrollmentInternalError(InternalFailureError):
    """Raised when an enrollment operation fails unexpectedly."""

    pass
