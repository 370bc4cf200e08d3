"""
Error Handler for the FastAPI services.

Turns every exception that leaves a route into the error envelope:
    {"code": ..., "message": ..., "details": {...}, "trace_id": ..., "timestamp": ...}

The HTTP status is chosen from the exception's ErrorKind in ERROR_KIND_STATUS,
the only place that mapping exists.

Usage:
    app = FastAPI()
    register_exception_handlers(app)
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from enums.error_kind import ErrorKind
from exceptions import ShopServiceException

logger = logging.getLogger(__name__)

ERROR_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Any = None
    trace_id: str | None = None
    timestamp: datetime


def status_for(kind: ErrorKind) -> int:
    return ERROR_KIND_STATUS.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(request: Request, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(
        code=code,
        message=message,
        details=details or None,
        trace_id=getattr(request.state, "trace_id", None),
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))


async def handle_service_exception(request: Request, exc: ShopServiceException) -> JSONResponse:
    status_code = status_for(exc.kind)
    if exc.kind == ErrorKind.INTERNAL:
        # Driver text stays in the log
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}", exc_info=exc)
        return error_response(request, status_code, exc.code, INTERNAL_ERROR_MESSAGE)

    log_level = logging.ERROR if status_code >= 500 else logging.WARNING
    logger.log(log_level, f"{request.method} {request.url.path} -> {status_code} {exc.code}: {exc.message}")
    return error_response(request, status_code, exc.code, exc.message, exc.details)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    logger.warning(f"{request.method} {request.url.path} -> 400 validation failed: {details}")
    return error_response(request, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR",
                          "One or more validation errors occurred.", details)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    return error_response(request, exc.status_code, f"HTTP_{exc.status_code}", message)


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}", exc_info=exc)
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShopServiceException, handle_service_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
