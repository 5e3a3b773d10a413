# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JWT token management utilities.

This module provides JWT access token validation using python-jose.
Tokens are issued by the users service; create_access_token exists for
tooling and tests and produces tokens with the same claims.

The user id is read from the "sub" claim. Tokens carrying the user id
in an "id" claim are accepted as well.

Example:
    >>> from src.core.config import get_settings
    >>> jwt_manager = JWTManager(get_settings().jwt)
    >>> token = jwt_manager.create_access_token(user_id=7, role_id=3)
    >>> claims = jwt_manager.decode_token(token)
    >>> claims.user_id
    7
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel, ValidationError

from src.core.config.settings import JWTSettings

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """JWT token payload structure.

    Attributes:
        sub: Subject (user ID as string).
        role_id: Role of the user, if the issuer included it.
        exp: Expiration timestamp.
        iat: Issued at timestamp.
        jti: JWT ID for token tracking.
    """

    sub: str
    role_id: int | None = None
    exp: int
    iat: int | None = None
    jti: str | None = None

    @property
    def user_id(self) -> int:
        """Subject as an integer user id."""
        return int(self.sub)


class JWTError(Exception):
    """Base exception for JWT operations."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTManager:
    """JWT token creation and validation manager.

    Attributes:
        _settings: JWT configuration settings.
    """

    def __init__(self, settings: JWTSettings) -> None:
        """Initialize the JWT manager.

        Args:
            settings: JWT configuration settings.
        """
        self._settings = settings

    def create_access_token(
        self,
        user_id: int,
        role_id: int | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: User identifier.
            role_id: Optional role identifier.
            expires_delta: Lifetime override. Negative values produce an
                already expired token.

        Returns:
            JWT access token string.
        """
        now = datetime.now(timezone.utc)
        if expires_delta is None:
            expires_delta = timedelta(minutes=self._settings.access_token_expire_minutes)
        exp = now + expires_delta

        payload = {
            "sub": str(user_id),
            "role_id": role_id,
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }

        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def decode_token(self, token: str) -> TokenPayload:
        """Decode and validate a JWT token.

        Args:
            token: JWT token string.

        Returns:
            TokenPayload with decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or has no usable subject.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except JoseJWTError as e:
            logger.warning("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}")

        subject = payload.get("sub", payload.get("id"))
        if subject is None:
            raise InvalidTokenError("Invalid token: missing subject")

        try:
            claims = TokenPayload(
                sub=str(subject),
                role_id=payload.get("role_id"),
                exp=payload["exp"],
                iat=payload.get("iat"),
                jti=payload.get("jti"),
            )
            claims.user_id
        except (KeyError, ValueError, ValidationError) as e:
            raise InvalidTokenError(f"Invalid token: {str(e)}")

        return claims

    def verify_token(self, token: str) -> bool:
        """Verify if a token is valid.

        Args:
            token: JWT token string.

        Returns:
            True if token is valid, False otherwise.
        """
        try:
            self.decode_token(token)
            return True
        except (TokenExpiredError, InvalidTokenError):
            return False
