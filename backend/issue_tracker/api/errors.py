"""
Exception handlers for FastAPI.

Every failure leaves the API as ``{"success": false, "message": ...}``, with
itemized ``errors`` for validation failures. The text of unexpected exceptions
is only included in development mode.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from issue_tracker.core.config import Settings
from issue_tracker.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    DuplicateError,
    InfrastructureError,
    NotFoundError,
    TrackerError,
    ValidationError,
)
from issue_tracker.core.logger import setup_logger
from issue_tracker.utils.validation import format_validation_errors

logger = setup_logger(__name__)

_STATUS_BY_ERROR: list[tuple[type[TrackerError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (BadRequestError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (InfrastructureError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: TrackerError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_payload(
    message: str,
    errors: Optional[list[str]] = None,
    error: Optional[str] = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": False, "message": message}
    if errors:
        payload["errors"] = errors
    if error:
        payload["error"] = error
    return payload


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc
            )
            return JSONResponse(
                status_code=status_code,
                content=error_payload(
                    "Internal server error",
                    error=exc.message if settings.is_development else None,
                ),
            )
        errors = exc.errors if isinstance(exc, ValidationError) else None
        return JSONResponse(status_code=status_code, content=error_payload(exc.message, errors))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_payload("Validation failed", format_validation_errors(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = f"Route {request.url.path} not found"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload(
                "Internal server error",
                error=str(exc) if settings.is_development else None,
            ),
        )
