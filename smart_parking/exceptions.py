"""Application errors and their mapping onto the response envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class ParkingAPIError(Exception):
    """Base class for errors that are reported to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ParkingAPIError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ParkingAPIError):
    """Duplicate spot label within a lot."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ParkingAPIError):
    """No identity, or an identity that cannot be verified."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(ParkingAPIError):
    """Valid identity without the required role."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ParkingAPIError):
    """Referenced lot or spot does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the leading "body"/"path"/"query" marker
        location = ".".join(str(item) for item in error.get("loc", ())[1:])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts) or "Invalid request"


async def parking_error_handler(request: Request, exc: ParkingAPIError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return error_response(exc.status_code, exc.message, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await parking_error_handler(request, ValidationError(_format_validation_errors(exc)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


async def catch_unexpected_errors(request: Request, call_next):
    """Turn unhandled errors into the envelope inside the CORS layer.

    Exception handlers for plain ``Exception`` run in the outermost server
    error middleware, where CORS headers are never added.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return await unexpected_error_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope-producing handlers to the application."""
    app.add_exception_handler(ParkingAPIError, parking_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
    # Registered before CORSMiddleware so CORS wraps it
    app.add_middleware(BaseHTTPMiddleware, dispatch=catch_unexpected_errors)
