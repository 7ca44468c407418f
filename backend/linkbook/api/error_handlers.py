"""Error Handlers — global exception handlers for the Linkbook API.

Invariants:
    - LinkbookError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level details and the validator's
      user-facing sentence
    - Exception (catch-all) → never leaks internal details
    - 4xx errors log at WARNING, 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from linkbook.core.errors import LinkbookError, ErrorSeverity

logger = logging.getLogger(__name__)

_PYDANTIC_VALUE_ERROR_PREFIX = "Value error, "


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_linkbook_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_linkbook_error_handler(app: FastAPI) -> None:
    """Register Linkbook domain/infrastructure error handler."""

    @app.exception_handler(LinkbookError)
    async def linkbook_error_handler(request: Request, exc: LinkbookError):
        """Handle all Linkbook domain/infrastructure errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"LinkbookError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "actor_id": exc.context.actor_id,
                "link_id": exc.context.link_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _user_message(raw: str) -> str:
    """Strip pydantic's prefix so custom validator sentences reach the user as written."""
    return raw.removeprefix(_PYDANTIC_VALUE_ERROR_PREFIX)


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": _user_message(e["msg"]),
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
