# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error body carries a human-readable "message" and a machine-readable
# "code". Stack traces are only included outside production.
# =============================================================================

import traceback
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings


class UserAPIException(Exception):
    """
    Base exception for the User API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "USER_API_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# User Exceptions
# =============================================================================

class UserNotFoundError(UserAPIException):
    """Raised when a user ID doesn't match a stored user."""

    def __init__(self, user_id: str):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"user_id": user_id}
        )


class DuplicateEmailError(UserAPIException):
    """Raised when an email is already used by another user."""

    def __init__(self, email: str):
        super().__init__(
            message=f"A user with email '{email}' already exists",
            code="DUPLICATE_EMAIL",
            status_code=400,
            details={"email": email}
        )


# =============================================================================
# Database Exceptions
# =============================================================================

class DatabaseOperationError(UserAPIException):
    """Raised when MongoDB fails for a reason the caller cannot fix."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=error,
            code="DATABASE_ERROR",
            status_code=500,
            details={"operation": operation}
        )


# =============================================================================
# Helpers
# =============================================================================

def error_field(error: dict[str, Any]) -> str:
    """
    Dotted field path of a pydantic error, "body" for body-level errors.

    Example:
        {"loc": ("body", "password")} -> "password"
        {"loc": ("body",)}            -> "body"
    """
    location = [str(part) for part in error.get("loc", ()) if part != "body"]
    return ".".join(location) or "body"


def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    """
    Flatten pydantic error entries into one readable message.

    Example:
        [{"loc": ("body", "password"), "msg": "String should have at least 6 characters"}]
        -> "password: String should have at least 6 characters"
    """
    parts = [f"{error_field(error)}: {error.get('msg', 'Invalid value')}" for error in errors]
    return "; ".join(parts) or "Invalid request"


# =============================================================================
# Exception Handlers
# =============================================================================

async def user_api_exception_handler(
    request: Request,
    exc: UserAPIException
) -> JSONResponse:
    """
    Convert UserAPIException to JSON response.

    Returns structured error with:
    - message: Human-readable message
    - code: Machine-readable error code
    - details: Additional context
    - stack: Traceback for server errors outside production
    """
    content = exc.to_dict()
    if exc.status_code >= 500 and not settings.is_production:
        content["stack"] = "".join(traceback.format_exception(exc))
    return JSONResponse(
        status_code=exc.status_code,
        content=content
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Schema violations are the caller's fault, so they answer 400
    rather than FastAPI's default 422.
    """
    errors = [
        {
            "field": error_field(error),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "message": format_validation_errors(exc.errors()),
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
