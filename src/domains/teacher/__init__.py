# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher domain package.

This package provides teacher management services:
- TeacherService: list, read, update and remove teachers
- Queries for teachers by subject load and status
"""

from src.domains.teacher.service import (
    TeacherEmailExistsError,
    TeacherInternalError,
    TeacherNotFoundError,
    TeacherService,
)

__all__ = [
    "TeacherService",
    "TeacherNotFoundError",
    "TeacherEmailExistsError",
    "TeacherInternalError",
]
