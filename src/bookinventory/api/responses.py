"""
Response envelope `{success, data?, message?, errors?}` and the exception
handlers that render every error in it.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError

from bookinventory.core.errors import BookInventoryError, TransientStoreError

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def envelope(data: Any = None, message: Optional[str] = None, **extra: Any) -> dict:
    body: dict = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    body.update(extra)
    return body


def error_response(status_code: int, message: str, errors: Optional[list] = None) -> JSONResponse:
    body: dict = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


async def handle_app_error(request: Request, exc: BookInventoryError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.errors)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOCATION_PREFIXES]
        errors.append({"field": ".".join(loc), "msg": err.get("msg", "Invalid value")})
    return error_response(400, "Validation failed", errors)


async def handle_store_unavailable(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Store unavailable during {request.method} {request.url.path}: {exc}")
    return error_response(TransientStoreError.status_code, TransientStoreError.default_message)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error during {request.method} {request.url.path}: {exc}")
    return error_response(500, "Server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookInventoryError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(OperationalError, handle_store_unavailable)
    app.add_exception_handler(PoolTimeoutError, handle_store_unavailable)
    app.add_exception_handler(Exception, handle_unexpected)
