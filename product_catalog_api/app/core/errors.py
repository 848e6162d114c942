"""
Error taxonomy and the central error-to-response mapper.

Every failure that reaches the HTTP boundary is rendered here as a
``{"message": ...}`` body.  Application code raises :class:`AppError`,
a single exception type tagged with an :class:`ErrorKind`; the mapper
dispatches on the resulting status code rather than on subclasses.
Anything else is treated as an unexpected server error and never
leaks internal detail to the client.
"""

import enum
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server Error"
NOT_FOUND_MESSAGE = "Not Found"
MISSING_FIELDS_MESSAGE = "All fields are required"
INVALID_PAYLOAD_MESSAGE = "Invalid request payload"


class ErrorKind(str, enum.Enum):
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    """An error with a kind, an HTTP status code and a client-safe message."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @classmethod
    def bad_request(cls, message: str = "Bad Request") -> "AppError":
        return cls(ErrorKind.BAD_REQUEST, message)

    @classmethod
    def not_found(cls, message: str = NOT_FOUND_MESSAGE) -> "AppError":
        return cls(ErrorKind.NOT_FOUND, message)

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.value!r}, message={self.message!r})"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the JSON error body.  5xx responses never carry detail."""
    if status_code >= 500:
        message = SERVER_ERROR_MESSAGE
    return JSONResponse(status_code=status_code, content={"message": message})


def validation_message(errors: List[Dict[str, Any]]) -> str:
    """Summarise FastAPI validation errors as a single client message.

    A field that is absent or ``null`` in the body counts as missing;
    anything else is an invalid value.
    """
    for err in errors:
        loc = tuple(err.get("loc", ()))
        if loc and loc[0] == "body":
            if err.get("type") == "missing" or ("input" in err and err["input"] is None):
                return MISSING_FIELDS_MESSAGE
    for err in errors:
        loc = tuple(err.get("loc", ()))
        if len(loc) > 1 and loc[0] in {"query", "path"}:
            return f"Invalid value for {loc[0]} parameter '{loc[1]}'"
    return INVALID_PAYLOAD_MESSAGE


def _is_development(request: Request) -> bool:
    app_settings = getattr(request.app.state, "settings", None)
    return bool(app_settings is not None and app_settings.is_development)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the central error mapper on ``app``."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        elif _is_development(request):
            logger.warning(
                "%s %s -> %s %r", request.method, request.url.path, exc.status_code, exc, exc_info=exc
            )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = list(exc.errors())
        logger.debug("Validation failed for %s %s: %s", request.method, request.url.path, errors)
        return error_response(status.HTTP_400_BAD_REQUEST, validation_message(errors))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods both look like a missing route.
        if exc.status_code in {status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED}:
            return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)
