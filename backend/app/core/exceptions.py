"""
Application exceptions and the global FastAPI exception handlers.
Every error response has the shape {"error": {"message", "details"?, "path"}}.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.integrations.observability import record_exception

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception carrying its HTTP status."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundError(AppException):
    """Requested entity does not exist."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND, details=details)


class DomainValidationError(AppException, ValueError):
    """Input is well-formed but violates a business rule."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


def _error_response(request: Request, status_code: int, message: Any, details: Optional[Any] = None) -> JSONResponse:
    error = {"message": message, "path": request.url.path}
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Domain errors raised by services."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.message}",
        extra={"status_code": exc.status_code, "path": request.url.path, "details": exc.details},
    )
    if exc.status_code >= 500:
        record_exception(exc, request)
    return _error_response(request, exc.status_code, exc.message, exc.details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    return _error_response(request, exc.status_code, exc.detail)


def _jsonable_errors(errors: list) -> list:
    """pydantic puts the raised exception object into ctx; render it as text."""
    cleaned = []
    for error in errors:
        error = dict(error)
        ctx = error.get("ctx")
        if isinstance(ctx, dict):
            error["ctx"] = {k: str(v) if isinstance(v, Exception) else v for k, v in ctx.items()}
        cleaned.append(error)
    return cleaned


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _jsonable_errors(exc.errors())
    logger.warning("Request validation failed", extra={"path": request.url.path, "errors": errors})
    return _error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation error", errors)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected: logged with traceback, answered with a generic 500."""
    logger.exception(
        f"Unhandled exception: {exc}",
        extra={"path": request.url.path, "exception_type": type(exc).__name__},
    )
    record_exception(exc, request)
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
