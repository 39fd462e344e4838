"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. Every body uses the same envelope:
{"error": <human message>, "error_code": <code>, "details": {...}}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sikap.core.config import get_settings
from sikap.domain.exceptions import SikapException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "FILE_REJECTED": 400,
    "MALICIOUS_CONTENT": 400,
    "RESOURCE_NOT_FOUND": 404,
    "ACCESS_DENIED": 403,
    "DUPLICATE_DOCUMENT": 409,
    "SCAN_UNAVAILABLE": 503,
    "SERVICE_UNAVAILABLE": 503,
    "SYSTEM_USER_NOT_FOUND": 500,
    "UPLOAD_FAILED": 500,
    "CORRUPT_RECORD": 500,
}

# Storage failures are infrastructure errors; internals stay in the logs.
_STORAGE_PREFIX = "STORAGE_"


def _status_for(error_code: str) -> int:
    if error_code.startswith(_STORAGE_PREFIX):
        return 500
    return _ERROR_CODE_STATUS.get(error_code, 400)


def _sikap_exception_handler(request: Request, exc: SikapException) -> JSONResponse:
    """Return JSON from SikapException.to_dict() with appropriate status code."""
    status = _status_for(exc.error_code)
    if status >= 500:
        logger.error(
            "%s on %s %s: %s",
            exc.error_code,
            request.method,
            request.url.path,
            exc.message,
        )
        if exc.error_code.startswith(_STORAGE_PREFIX):
            return JSONResponse(
                status_code=status,
                content={
                    "error": "Storage operation failed due to server error",
                    "error_code": exc.error_code,
                    "details": {},
                },
            )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "Request validation failed",
            "error_code": "VALIDATION_ERROR",
            "details": {"errors": jsonable_encoder(exc.errors())},
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "error_code": "HTTP_ERROR", "details": {}},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": detail, "error_code": "INTERNAL_ERROR", "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: SikapException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(SikapException, _sikap_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
