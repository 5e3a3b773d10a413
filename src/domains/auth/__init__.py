# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain services.

Access tokens are issued by the users service. This package validates
them and can mint equivalent tokens for tooling and tests.

Exports:
    JWTManager: JWT token creation and validation.
    TokenPayload: Decoded token claims.
    TokenExpiredError: Raised for expired tokens.
    InvalidTokenError: Raised for malformed or badly signed tokens.
"""

from src.domains.auth.jwt import (
    InvalidTokenError,
    JWTError,
    JWTManager,
    TokenExpiredError,
    TokenPayload,
)

__all__ = [
    "JWTManager",
    "TokenPayload",
    "JWTError",
    "TokenExpiredError",
    "InvalidTokenError",
]
