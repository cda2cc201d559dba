"""API error taxonomy and the JSON error envelope.

Every failure leaves the API as {"message": ...}, plus any extra fields
the endpoint needs (save-course adds "success": false).
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class ApiError(Exception):
    """Base class for errors rendered as JSON responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, **extra: Any):
        self.message = message
        self.extra = extra
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        return {**self.extra, "message": self.message}


class InvalidInputError(ApiError):
    """Client omitted required fields."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ApiError):
    """Credentials did not match."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ApiError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    """A unique field is already taken."""

    status_code = status.HTTP_409_CONFLICT


class InternalError(ApiError):
    """Store failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(ApiError):
    """Third-party API failed or answered with an unusable body."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ApiError with its status code."""
    if exc.status_code >= 500:
        logger.warning(
            "api_error",
            path=request.url.path,
            status=exc.status_code,
            error=exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or non-object JSON bodies become a plain 400."""
    logger.debug("request_validation_failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request body"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the JSON error envelope to an app."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
