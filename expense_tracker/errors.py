# expense_tracker/errors.py
"""
API error types and the handlers that render them as {"error": message}.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class ApiError(Exception):
    """Base exception for errors reported to the client."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(ApiError):
    """Request data could not be turned into an entry."""

    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class ServerError(ApiError):
    """A storage operation failed; the message stays generic."""

    status_code = 500


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("request_failed", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error."})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
