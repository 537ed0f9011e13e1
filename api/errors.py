"""
API Exception Handlers.

Every error leaves the API as ``{"status": <code>, "message": <text>}``.

- BrokerageException: its own status_code (400 / 404 / 500)
- Request validation (body, path): 400
- Repository failures and anything unexpected: 500
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas import ErrorResponse
from core.exceptions import BrokerageException
from storage.repositories.exceptions import RepositoryException


logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(status=status_code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "invalid request"


async def handle_brokerage_exception(request: Request, exc: BrokerageException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(exc.to_log_format())
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.to_log_format()}")
    return error_response(exc.status_code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_error(exc)
    logger.info(f"{request.method} {request.url.path} -> 400 {message}")
    return error_response(400, message)


async def handle_repository_exception(request: Request, exc: RepositoryException) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return error_response(500, INTERNAL_ERROR_MESSAGE)


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on an application."""
    app.add_exception_handler(BrokerageException, handle_brokerage_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(RepositoryException, handle_repository_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
