# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for the academic records database."""

from src.infrastructure.database.models.base import Base, TimestampMixin
from src.infrastructure.database.models.users import (
    USER_STATUS_ACTIVE,
    USER_STATUS_INACTIVE,
    Career,
    Role,
    Speciality,
    StudentProfile,
    TeacherProfile,
    UserReference,
)
from src.infrastructure.database.models.academic import (
    ENROLLMENT_STATUS_ENROLLED,
    StudentSubject,
    SubjectAssignment,
    SubjectReference,
)

__all__ = [
    "Base",
    "TimestampMixin",
    # Users
    "Role",
    "USER_STATUS_ACTIVE",
    "USER_STATUS_INACTIVE",
    "UserReference",
    "Career",
    "Speciality",
    "StudentProfile",
    "TeacherProfile",
    # Academic
    "ENROLLMENT_STATUS_ENROLLED",
    "SubjectReference",
    "SubjectAssignment",
    "StudentSubject",
]
