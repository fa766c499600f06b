# File: app/core/errors.py

"""
Application error types and the exception handlers that render them.

Every error leaves the API as ``{"success": false, "message": ...}`` with the
matching HTTP status, so clients only ever have to read one envelope.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.headers import apply_cors_headers, apply_security_headers

logger = logging.getLogger(__name__)

# Error type raised by request models whose fields carry their own client message
FIELD_ERROR = "field_invalid"


class AppError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    content = {"success": False, "message": message}
    content.update(extra)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == FIELD_ERROR:
        return first["msg"]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if first.get("type") == "json_invalid":
        return "Request body must be valid JSON"
    if loc:
        return f"Invalid value for {'.'.join(loc)}: {first.get('msg', 'invalid')}"
    return first.get("msg", "Invalid request")


def register_exception_handlers(app: FastAPI) -> None:
    settings = app.state.settings

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return error_response(exc.status_code, "Endpoint not found")
        return error_response(exc.status_code, str(exc.detail))

    # Sent from the outermost server-error layer, so the middleware headers
    # are added here.
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        extra = {} if settings.is_production else {"error": str(exc)}
        response = error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", **extra)
        apply_security_headers(response)
        return apply_cors_headers(response, request, settings.cors_origins)
