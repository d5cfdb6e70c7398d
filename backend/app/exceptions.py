"""
Structured exceptions and error responses for the Smart Task Manager API.

Every error leaves the API as a JSON object carrying either a single
``error`` message or an ``errors`` array of field-level validation issues:
- Custom exception classes
- Error response schemas (for OpenAPI)
- FastAPI exception handlers
"""

from typing import Dict, List, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Error Response Schema
# =============================================================================

class ErrorDetail(BaseModel):
    """Detail of a single field error."""
    loc: Optional[List[str]] = None  # Location of error (e.g., ["body", "title"])
    msg: str
    type: str


class ErrorResponse(BaseModel):
    """Single-message error response."""
    error: str


class ValidationErrorResponse(BaseModel):
    """Field-level validation error response."""
    errors: List[ErrorDetail]


# =============================================================================
# Custom Exceptions
# =============================================================================

class TaskManagerException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.headers = headers
        super().__init__(message)


class NotFoundError(TaskManagerException):
    """
    Resource not found.

    Also raised when the resource exists but belongs to another user, so the
    two cases are indistinguishable to the caller.
    """

    def __init__(self, resource: str):
        super().__init__(
            message=f"{resource} not found",
            status_code=status.HTTP_404_NOT_FOUND,
        )
        self.resource = resource


class ConflictError(TaskManagerException):
    """Resource already exists (reported as a 400, matching the public contract)."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class AuthenticationError(TaskManagerException):
    """Missing, malformed, invalid or expired bearer token."""

    def __init__(self, message: str, status_code: int = status.HTTP_401_UNAUTHORIZED):
        super().__init__(
            message=message,
            status_code=status_code,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsError(TaskManagerException):
    """Login with an unknown email or a wrong password."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def task_manager_exception_handler(request: Request, exc: TaskManagerException) -> JSONResponse:
    """Handle TaskManagerException and return a structured response."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=exc.headers,
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI body/query/path validation failures as a 400 ``errors`` array."""
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        }
        for error in exc.errors()
    ]
    logger.debug(f"Validation failed on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the ``error`` shape."""
    message = "Route not found" if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred"},
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(TaskManagerException, task_manager_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)


# Documented on every authenticated router
AUTHENTICATED_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse, "description": "Invalid request"},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse, "description": "Missing bearer token"},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse, "description": "Invalid or expired token"},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Not found or not owned by caller"},
}
