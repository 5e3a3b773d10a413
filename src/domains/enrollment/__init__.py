# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides student enrollment functionality including:
- Transactional enrollment with seat accounting (EnrollmentCoordinator)
- The transactional store abstraction and its SQLAlchemy implementation
- Administrative CRUD over enrollment records (EnrollmentService)
"""

from src.domains.enrollment.coordinator import EnrollmentCoordinator
from src.domains.enrollment.exceptions import (
    AlreadyEnrolledError,
    CapacityExhaustedError,
    EnrollmentInternalError,
    EnrollmentNotFoundError,
    StudentNotEligibleError,
    SubjectNotFoundError,
)
from src.domains.enrollment.service import EnrollmentService
from src.domains.enrollment.store import (
    EnrollmentStore,
    SqlEnrollmentStore,
    TransactionalStore,
)

__all__ = [
    "EnrollmentCoordinator",
    "EnrollmentService",
    "EnrollmentStore",
    "SqlEnrollmentStore",
    "TransactionalStore",
    "SubjectNotFoundError",
    "EnrollmentNotFoundError",
    "AlreadyEnrolledError",
    "StudentNotEligibleError",
    "CapacityExhaustedError",
    "EnrollmentInternalError",
]
