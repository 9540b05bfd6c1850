"""Standardized error handling for the API.

This module provides:
1. Custom exception classes for domain-specific errors
2. Exception handlers for FastAPI
3. Standard error response models

Usage:
    from rsvp_api.errors import NotFoundError, DuplicateRsvpError

    # In controllers and services:
    if not event:
        raise NotFoundError(detail="Event not found", event_id=event_id)

    # Register handlers in main.py:
    from rsvp_api.errors import register_exception_handlers
    register_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException

from rsvp_api.middleware import cors_headers

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing fields. Email is required to prevent duplicate RSVPs."
DUPLICATE_RSVP_CODE = "DUPLICATE_RSVP"


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    message: str | None = None
    code: str | None = None
    context: dict[str, Any] | None = None


class APIError(Exception):
    """Base class for API errors."""

    status_code: int = 500
    error: str = "internal_error"
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: str | None = None,
        error_code: str | None = None,
        **context: Any,
    ) -> None:
        self.detail = detail or self.__class__.detail
        self.error_code = error_code
        self.context = context if context else None
        super().__init__(self.detail)

    def to_response(self) -> ErrorResponse:
        """Convert exception to error response model."""
        return ErrorResponse(
            error=self.error,
            message=self.detail,
            code=self.error_code,
            context=self.context,
        )


class NotFoundError(APIError):
    """Resource not found error (404)."""

    status_code = 404
    error = "not_found"
    detail = "Resource not found"


class BadRequestError(APIError):
    """Bad request error (400)."""

    status_code = 400
    error = "bad_request"
    detail = "Invalid request"


class RsvpValidationError(BadRequestError):
    """Malformed or missing RSVP input. Raised before any store access."""

    detail = MISSING_FIELDS_MESSAGE


class ConflictError(APIError):
    """Conflict error (409)."""

    status_code = 409
    error = "conflict"
    detail = "Resource already exists"


class DuplicateRsvpError(ConflictError):
    """The respondent already has an RSVP recorded for this event."""

    detail = "You have already RSVP'd for this event with this email!"

    def __init__(self, detail: str | None = None, **context: Any) -> None:
        super().__init__(detail, error_code=DUPLICATE_RSVP_CODE, **context)


class ServiceUnavailableError(APIError):
    """Service unavailable error (503)."""

    status_code = 503
    error = "service_unavailable"
    detail = "Service temporarily unavailable"


class DatabaseError(APIError):
    """Event catalog database error (500)."""

    status_code = 500
    error = "database_error"
    detail = "Database operation failed"


class StoreError(APIError):
    """Keyed store failure (500): timeout, capacity, connectivity.

    The underlying exception is chained as ``__cause__`` for logging and is
    never part of the response body.
    """

    status_code = 500
    error = "store_error"
    detail = "RSVP store operation failed"


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors."""
    if exc.status_code >= 500:
        logger.error(
            "API error: %s (status=%d, path=%s, cause=%r)",
            exc.detail,
            exc.status_code,
            request.url.path,
            exc.__cause__,
            exc_info=exc,
        )
    elif isinstance(exc, ConflictError):
        logger.info(
            "Conflict: %s (path=%s)",
            exc.detail,
            request.url.path,
        )
    else:
        logger.warning(
            "API error: %s (status=%d, path=%s)",
            exc.detail,
            exc.status_code,
            request.url.path,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request schema violations as 400 instead of FastAPI's 422."""
    fields = sorted({
        str(err["loc"][-1])
        for err in exc.errors()
        if err.get("loc") and err["loc"][0] in ("body", "query", "path")
    })
    logger.warning("Invalid request (path=%s, fields=%s)", request.url.path, fields)
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="bad_request",
            message=MISSING_FIELDS_MESSAGE if request.method == "POST" else "Invalid request",
            context={"fields": fields} if fields else None,
        ).model_dump(exclude_none=True),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle Starlette HTTPExceptions (unknown routes, bad methods) with standard format."""
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=_status_to_error_type(exc.status_code),
            message=message,
        ).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions.

    Runs outside the user middleware stack, so CORS headers are attached here.
    """
    logger.exception("Unhandled exception: %s (path=%s)", exc, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="internal_error",
            message="An unexpected error occurred",
        ).model_dump(exclude_none=True),
        headers=cors_headers(),
    )


def _status_to_error_type(status_code: int) -> str:
    """Map HTTP status code to error type string."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        422: "validation_error",
        429: "rate_limited",
        500: "internal_error",
        502: "bad_gateway",
        503: "service_unavailable",
        504: "gateway_timeout",
    }
    return mapping.get(status_code, "error")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
