"""
Domain exceptions and their HTTP rendering.

Services raise these; a single handler registered in ``bingekaro.main``
turns them into JSON responses, so routers never translate errors by hand.
"""
from __future__ import annotations

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def to_body(self) -> dict[str, Any]:
        return {"detail": self.detail}

    def headers(self) -> dict[str, str] | None:
        return None


class ValidationError(AppError):
    """Input is well-formed but breaks a domain rule."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        return {
            "detail": self.message,
            "errors": [{"field": self.field, "message": self.message}],
        }


class InvalidInput(ValidationError):
    """Raised by the credential store for empty secrets or malformed hashes."""


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"

    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not allowed"


class RequireSecret(AppError):
    """
    Private list read without a matching password.

    Missing and wrong passwords produce the same signal so a caller cannot
    tell which one happened.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Password required for private list"

    def to_body(self) -> dict[str, Any]:
        return {"detail": self.detail, "requires_password": True}


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Already exists"


class UpstreamUnavailable(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Media search is temporarily unavailable, please try again"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as JSON with its status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(),
        headers=exc.headers(),
    )
