"""Custom exception handlers for FastAPI application.

This module registers global exception handlers that convert domain exceptions
and validation errors into proper HTTP responses with appropriate status codes.

Every domain exception carries an ErrorKind; ERROR_STATUS_CODES maps each kind
to exactly one status code, so adding a kind without a status is caught by the
unit tests instead of leaking as a 500.
"""

import json
import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from songlib.domain.exceptions import DomainException, ErrorKind
from songlib.infrastructure.observability import get_correlation_id
from songlib.infrastructure.observability.middleware import CORRELATION_HEADER

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_code_for(kind: ErrorKind) -> int:
    """Get the HTTP status code for an error kind."""
    return ERROR_STATUS_CODES[kind]


# Hey future me - Pydantic's exc.errors() can include the raw request body as bytes in 'input',
# and JSONResponse chokes on bytes. Walk the structure and decode them before responding.
def _sanitize_validation_errors(
    errors: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Sanitize validation errors by converting bytes to strings.

    Args:
        errors: List of validation error dictionaries from Pydantic

    Returns:
        Sanitized list where bytes are converted to strings
    """

    def _sanitize_value(value: Any) -> Any:
        """Recursively sanitize a value, converting bytes to strings."""
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError:
                return value.decode("latin-1")
        elif isinstance(value, dict):
            return {k: _sanitize_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_sanitize_value(item) for item in value]
        elif isinstance(value, tuple):
            return tuple(_sanitize_value(item) for item in value)
        elif isinstance(value, Exception):
            return str(value)
        return value

    return [_sanitize_value(error) for error in errors]


def _internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_MESSAGE},
    )


# Hey future me, the handlers MUST be registered during app setup (create_app does it) - adding
# them after the app started serving does nothing.
def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers for domain and validation exceptions.

    This function registers handlers for:
    - Domain exceptions (mapped by ErrorKind)
    - Pydantic request validation errors (400)
    - JSON decode errors (400)
    - HTTP exceptions with proper logging
    - SQLAlchemy OperationalError (503 when the database is busy, else 500)
    - Anything else (500 with a generic message)

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request, exc: DomainException
    ) -> JSONResponse:
        """Handle domain exceptions by their error kind."""
        status_code = status_code_for(exc.kind)
        log_extra = {
            "path": request.url.path,
            "error_kind": exc.kind.value,
            "error": exc.message,
        }

        if exc.kind is ErrorKind.INTERNAL:
            logger.error(
                "Internal error at %s: %s",
                request.url.path,
                exc.message,
                exc_info=exc,
                extra=log_extra,
            )
            return _internal_error_response()

        if exc.kind is ErrorKind.NOT_FOUND:
            logger.info(
                "Not found at %s: %s", request.url.path, exc.message, extra=log_extra
            )
        else:
            logger.warning(
                "%s at %s: %s",
                exc.__class__.__name__,
                request.url.path,
                exc.message,
                extra=log_extra,
            )
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle unparseable query, path or body parameters with 400 Bad Request."""
        sanitized_errors = _sanitize_validation_errors(list(exc.errors()))

        logger.warning(
            "Request validation error at %s: %s",
            request.url.path,
            sanitized_errors,
            extra={"path": request.url.path, "errors": sanitized_errors},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": sanitized_errors},
        )

    @app.exception_handler(json.JSONDecodeError)
    async def json_decode_error_handler(
        request: Request, exc: json.JSONDecodeError
    ) -> JSONResponse:
        """Handle malformed JSON with 400 Bad Request."""
        logger.warning(
            "Malformed JSON at %s: %s",
            request.url.path,
            str(exc),
            extra={"path": request.url.path, "error": str(exc)},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": f"Malformed JSON: {exc.msg}"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions with proper logging."""
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "HTTP error %d at %s: %s",
            exc.status_code,
            request.url.path,
            exc.detail,
            extra={
                "path": request.url.path,
                "status_code": exc.status_code,
                "detail": exc.detail,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # Hey future me - a locked SQLite database is temporary, so tell the client to come back
    # (503 + Retry-After) instead of pretending the server is broken.
    @app.exception_handler(OperationalError)
    async def database_operational_error_handler(
        request: Request, exc: OperationalError
    ) -> JSONResponse:
        """Handle SQLAlchemy OperationalError with special handling for DB busy/locked."""
        error_msg = str(exc).lower()

        if "locked" in error_msg or "busy" in error_msg:
            logger.warning(
                "Database busy at %s",
                request.url.path,
                extra={"path": request.url.path, "error": str(exc)[:200]},
            )
            retry_after = 3
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"detail": "Database is busy, please retry"},
                headers={"Retry-After": str(retry_after)},
            )

        logger.error(
            "Database error at %s: %s",
            request.url.path,
            str(exc)[:500],
            extra={"path": request.url.path, "error": str(exc)[:500]},
        )
        return _internal_error_response()

    # Starlette runs this one from ServerErrorMiddleware, OUTSIDE RequestLoggingMiddleware, so the
    # correlation header has to be added here or unexpected 500s would go out without it.
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle anything unexpected with a generic 500."""
        logger.error(
            "Unhandled error at %s: %s",
            request.url.path,
            str(exc),
            exc_info=exc,
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        response = _internal_error_response()
        correlation_id = get_correlation_id()
        if correlation_id:
            response.headers[CORRELATION_HEADER] = correlation_id
        return response
