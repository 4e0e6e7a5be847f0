"""Centralized exception handlers for the FastAPI app.

Every error body has the same shape: {"error": CODE, "message": str, "details": ...}.
Register with register_exception_handlers(app).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from docshare.core.config import get_settings
from docshare.domain.exceptions import DocShareException

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status. Unlisted codes are 400.
_ERROR_CODE_STATUS: dict[str, int] = {
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "SHARE_ACCESS_DENIED": 404,
    "TAG_NOT_FOUND": 400,
    "VALIDATION_ERROR": 400,
    "SERVICE_UNAVAILABLE": 503,
}

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _error_body(error: str, message: Any, details: Any = None) -> dict[str, Any]:
    return {"error": error, "message": message, "details": details or {}}


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors to {field, message, type}; request input is not echoed back."""
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]


def _docshare_exception_handler(
    request: Request, exc: DocShareException
) -> JSONResponse:
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    elif exc.error_code in ("PERMISSION_DENIED", "SHARE_ACCESS_DENIED"):
        logger.info("%s on %s %s", exc.error_code, request.method, request.url.path)
    headers = _BEARER_CHALLENGE if status == 401 else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_error_body(
            "VALIDATION_ERROR", "Request validation failed", _field_errors(exc)
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    error = "AUTHENTICATION_ERROR" if exc.status_code == 401 else "HTTP_ERROR"
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(error, exc.detail),
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 for the write limit on document mutations."""
    logger.warning("Write rate limit hit on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=429,
        content=_error_body(
            "RATE_LIMITED", "Too many document changes", {"limit": str(exc.detail)}
        ),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", detail))


def register_exception_handlers(app: FastAPI) -> None:
    """Register DocShareException, validation, HTTP, rate-limit and catch-all handlers."""
    app.add_exception_handler(DocShareException, _docshare_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
