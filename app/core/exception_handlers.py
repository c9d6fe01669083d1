"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and
infrastructure exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import PortalException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "SPACE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "VALIDATION_ERROR": 400,
    "INVALID_TRANSITION": 409,
    "ENCRYPTION_INTEGRITY_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
    "SLACK_API_ERROR": 502,
    "STORAGE_SIGNING_ERROR": 502,
    "STORAGE_NOT_SUPPORTED": 503,
}

# Codes whose details must not reach the client.
_OPAQUE_CODES = frozenset({"ENCRYPTION_INTEGRITY_ERROR"})


def status_for_error_code(error_code: str) -> int:
    return _ERROR_CODE_STATUS.get(error_code, 400)


def _portal_exception_handler(request: Request, exc: PortalException) -> JSONResponse:
    """Return JSON from PortalException.to_dict() with appropriate status code."""
    status = status_for_error_code(exc.error_code)
    if exc.error_code in _OPAQUE_CODES:
        logger.error("Integrity failure on %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status,
            content={"error": exc.error_code, "message": "Stored credential is unreadable"},
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: PortalException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(PortalException, _portal_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
