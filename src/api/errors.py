# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Translation of domain errors into HTTP responses.

Routers call to_http_exception() for the errors they expect. The
application also registers domain_error_handler so any categorized
error that escapes a router still gets the right status code.

Internal failures are reported with a generic message. The cause stays
in the logs.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from src.domains.errors import (
    ConflictError,
    InternalFailureError,
    NotFoundError,
    PreconditionFailedError,
    ServiceError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_code_for(error: ServiceError) -> int:
    """Map an error category to an HTTP status code."""
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(error, PreconditionFailedError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: ServiceError) -> HTTPException:
    """Build the HTTPException for a domain error.

    Args:
        error: Categorized domain error.

    Returns:
        HTTPException with the mapped status and a caller-facing detail.
    """
    status_code = status_code_for(error)
    if isinstance(error, InternalFailureError) or status_code >= 500:
        return HTTPException(status_code=status_code, detail=INTERNAL_ERROR_MESSAGE)
    return HTTPException(status_code=status_code, detail=error.message)


async def domain_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Exception handler for domain errors not handled by a router."""
    http_exc = to_http_exception(exc)
    if http_exc.status_code >= 500:
        logger.error(
            "Unhandled domain error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})
