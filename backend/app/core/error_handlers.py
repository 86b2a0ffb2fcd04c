"""
Exception handlers — render every failure in the JSON envelope.

Error handler registration.

Maps the exception hierarchy onto HTTP responses:
- RequestValidationFailed / RequestValidationError -> 400 validationError
- EngineBusinessError -> 400 with the engine's message
- PermissionDeniedError -> 403 forbidden
- HTTPException (auth) -> its status, code from the detail
- EngineError and anything unhandled -> opaque 500
Version: 1.0.0
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import (
    EngineBusinessError,
    EngineError,
    PermissionDeniedError,
    RequestValidationFailed,
)
from app.schemas.common import ErrorResponse, validation_details

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, error: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


async def request_validation_failed_handler(request: Request, exc: RequestValidationFailed):
    logger.info(f"Validation failed on {request.url.path}: {exc}")
    return error_response(400, "validationError", exc.details)


async def body_validation_error_handler(request: Request, exc: RequestValidationError):
    details = validation_details(exc.errors())
    logger.info(f"Validation failed on {request.url.path}: {len(details)} field(s)")
    return error_response(400, "validationError", details)


async def engine_business_error_handler(request: Request, exc: EngineBusinessError):
    logger.info(f"Engine rejected request on {request.url.path}: {exc.message}")
    return error_response(400, exc.message)


async def permission_denied_handler(request: Request, exc: PermissionDeniedError):
    return error_response(403, "forbidden")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if isinstance(detail, dict):
        response = error_response(exc.status_code, detail.get("code", "error"), detail.get("message"))
    else:
        response = error_response(exc.status_code, str(detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def engine_error_handler(request: Request, exc: EngineError):
    logger.error(f"Engine failure on {request.url.path}: {exc}")
    return error_response(500, INTERNAL_ERROR_MESSAGE)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to the application."""
    app.add_exception_handler(RequestValidationFailed, request_validation_failed_handler)
    app.add_exception_handler(RequestValidationError, body_validation_error_handler)
    app.add_exception_handler(EngineBusinessError, engine_business_error_handler)
    app.add_exception_handler(PermissionDeniedError, permission_denied_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(EngineError, engine_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
