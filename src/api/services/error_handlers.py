"""Per-request error boundary for the API sub-app.

Every failure leaves the service as a JSON ``{"message": ...}`` body; a
failing request never takes the process down.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.exceptions import DuplicateTaskError, TaskValidationError
from integration.repositories.motor_task_store import duplicate_key_field

log = logging.getLogger(__name__)


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation Error", "errors": [_format_validation_error(e) for e in exc.errors()]},
    )


async def task_validation_exception_handler(request: Request, exc: TaskValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation Error", "errors": list(exc.errors)},
    )


async def duplicate_task_exception_handler(request: Request, exc: DuplicateTaskError) -> JSONResponse:
    log.info(f"Duplicate value for field '{exc.field}' on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"message": exc.message, "field": exc.field},
    )


async def duplicate_key_exception_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    return await duplicate_task_exception_handler(request, DuplicateTaskError(field=duplicate_key_field(exc)))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error"},
    )


def configure_error_handlers(app: FastAPI) -> None:
    """Register the JSON error boundary on ``app``."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(TaskValidationError, task_validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DuplicateTaskError, duplicate_task_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DuplicateKeyError, duplicate_key_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
