"""Academic Records Backend.

Student and teacher enrollment management service: careers, subjects,
teacher assignments and capacity-aware student enrollment.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
