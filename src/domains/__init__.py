# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for the academic records service.

This package contains domain services that encapsulate business logic.

Domains:
    auth: Access token validation.
    enrollment: Transactional enrollment and enrollment records.
    teacher: Teacher management and queries.
"""
