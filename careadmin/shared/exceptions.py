"""
Exceptions Module

This module defines the error taxonomy of the admin API and the FastAPI
handlers that render every error as an explicit JSON response.

Features:
- Typed API errors
- Status mapping
- Validation errors
- Uniform error bodies

Data Model:
- Error body: {"error": message}

Dependencies:
- FastAPI for handlers
- logging for tracking

Author: Care Admin Development Team
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized. Please log in to access this resource."
STORAGE_FAILURE_MESSAGE = "Failed to upload file"


class AdminAPIError(Exception):
    """
    Base class for errors surfaced to API clients.

    Attributes:
        status_code (int): HTTP status returned to the caller
        message (str): Client-facing error message
    """

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(AdminAPIError):
    """Raised when a request lacks a valid session."""

    status_code = 401
    default_message = UNAUTHORIZED_MESSAGE


class NoFileProvidedError(AdminAPIError):
    """Raised when an upload request carries no file field."""

    status_code = 400
    default_message = "No file uploaded"


class InvalidFileTypeError(AdminAPIError):
    """Raised at the upload boundary when the MIME type is not allowed."""

    status_code = 400
    default_message = "Invalid file type"

    def __init__(self, message: Optional[str] = None, content_type: Optional[str] = None):
        self.content_type = content_type
        super().__init__(message)


class FileTooLargeError(AdminAPIError):
    """Raised at the upload boundary when the file exceeds its size limit."""

    status_code = 413
    default_message = "File too large"

    def __init__(self, max_bytes: int, size: int):
        self.max_bytes = max_bytes
        self.size = size
        super().__init__(f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)}MB")


class StorageFailureError(AdminAPIError):
    """Raised when persisting an accepted upload fails."""

    status_code = 500
    default_message = STORAGE_FAILURE_MESSAGE

    def __init__(self, message: Optional[str] = None, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


class InvalidIdError(AdminAPIError):
    """Raised when a path id is not a valid ObjectId."""

    status_code = 400
    default_message = "Invalid ID"


class NotFoundError(AdminAPIError):
    """Raised when the requested record does not exist."""

    status_code = 404
    default_message = "Not found"


class ConflictError(AdminAPIError):
    """Raised when a write would duplicate a unique value."""

    status_code = 409
    default_message = "Resource already exists"


class BadRequestError(AdminAPIError):
    """Raised when a request is missing values a handler needs."""

    status_code = 400
    default_message = "Bad request"


async def admin_api_error_handler(request: Request, exc: AdminAPIError) -> JSONResponse:
    """
    Render an AdminAPIError as {"error": message}.

    Args:
        request: HTTP request
        exc: Raised API error

    Returns:
        JSONResponse: Error body with the error's status
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Validation failed for {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the API error handlers to an application."""
    app.add_exception_handler(AdminAPIError, admin_api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
