# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Error taxonomy shared by the domain services.

Every failure surfaced to callers falls into one of four categories:

- NotFoundError: a referenced entity does not exist.
- ConflictError: a uniqueness rule would be violated.
- PreconditionFailedError: a business rule rejects the request.
- InternalFailureError: anything unexpected; the cause is kept in
  original_error for diagnostics and never shown to the caller.

Each domain subclasses these categories with its own concrete errors.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional


class ServiceError(Exception):
    """Base exception for domain service errors.

    Attributes:
        message: Human-readable, caller-facing description.
        original_error: Underlying exception, if any.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class NotFoundError(ServiceError):
    """Raised when a referenced entity does not exist."""

    pass


class ConflictError(ServiceError):
    """Raised when an operation would break a uniqueness rule."""

    pass


class PreconditionFailedError(ServiceError):
    """Raised when a business rule rejects the operation."""

    pass


class InternalFailureError(ServiceError):
    """Raised when an unexpected store or infrastructure error occurs."""

    pass


@contextmanager
def translate_errors(
    message: str,
    error_class: type[InternalFailureError],
    log: logging.Logger,
) -> Iterator[None]:
    """Wrap unexpected errors into the domain's internal failure.

    Categorized errors pass through unchanged. Anything else is logged
    with its traceback on the caller's logger and re-raised as
    error_class(message, cause).

    Args:
        message: Caller-facing description of the failed operation.
        error_class: InternalFailureError subclass to raise.
        log: Logger of the calling module.
    """
    try:
        yield
    except ServiceError:
        raise
    except Exception as e:
        log.exception(message)
        raise error_class(message, e) from e
