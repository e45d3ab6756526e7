"""
Translate domain and infrastructure errors into the JSON error envelope.

Every error response has the shape
{"success": false, "error": <code>, "message": <text>, "details": {...}}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.exceptions import (AdminException, DuplicateResourceException,
                                   RateLimitExceededException,
                                   ResourceNotFoundException,
                                   StateConflictException, ValidationException)
from src.infrastructure.exceptions import DocumentStoreUnavailableException

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins
STATUS_BY_EXCEPTION: tuple[tuple[type[AdminException], int], ...] = (
    (ValidationException, status.HTTP_400_BAD_REQUEST),
    (ResourceNotFoundException, status.HTTP_404_NOT_FOUND),
    (StateConflictException, status.HTTP_409_CONFLICT),
    (DuplicateResourceException, status.HTTP_409_CONFLICT),
    (RateLimitExceededException, status.HTTP_429_TOO_MANY_REQUESTS),
    (DocumentStoreUnavailableException, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: AdminException) -> int:
    for exception_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exception_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(error: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"success": False, "error": error, "message": message, "details": details or {}}


def admin_exception_response(exc: AdminException) -> JSONResponse:
    status_code = status_for(exc)
    headers = None
    if isinstance(exc, RateLimitExceededException):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(
        status_code=status_code,
        content={"success": False, **exc.to_dict()},
        headers=headers,
    )


async def admin_exception_handler(request: Request, exc: AdminException) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return admin_exception_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("VALIDATION_ERROR", "Request validation failed", {"errors": errors}),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AdminException, admin_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
