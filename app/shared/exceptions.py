"""Custom exception hierarchy and handlers."""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.enums import OrderRejectionReason

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""

    status_code = 400
    code = "app_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundException(AppException):
    """Raised when entity is not found."""

    status_code = 404
    code = "not_found"


class OrderRejectedException(AppException):
    """Base for orders refused because of client input or availability."""

    status_code = 400

    def __init__(self, reason: OrderRejectionReason, message: str) -> None:
        self.reason = reason
        self.code = str(reason)
        super().__init__(message)


class OrderValidationException(OrderRejectedException):
    """Raised when an order payload is malformed."""


class AvailabilityException(OrderRejectedException):
    """Raised when an ordered lesson is missing or has too few seats."""


class LessonUpdateException(AppException):
    """Raised when an update names fields or values a lesson cannot hold."""

    status_code = 400
    code = "invalid_lesson_update"


class StoreException(AppException):
    """Raised when the data store is unreachable or an operation failed."""

    status_code = 500
    code = "store_error"


async def app_exception_handler(_: Request, exc: AppException) -> JSONResponse:
    """Handle custom domain exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
    )


async def http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTP exceptions in unified shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "code": "http_error"},
    )


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed request bodies and parameters in unified shape."""
    logger.info("Rejected malformed request: %s", exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request payload.", "code": "invalid_request"},
    )


async def unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "code": "internal_error"},
    )


def register_exception_handlers(app) -> None:
    """Register global exception handlers."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
