"""Error Handlers — global exception handlers for the festival API.

Invariants:
    - MatsuriError → structured JSON with error code, message, severity
    - RequestValidationError → field-level error details, HTTP 400
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (MatsuriError), validation (Pydantic), catch-all (Exception)
    - Partial writes log at CRITICAL with the orphaned artifacts for manual cleanup
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from matsuri.core.errors import (
    ErrorSeverity, MatsuriError, PartialWriteInconsistency,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_matsuri_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_matsuri_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MatsuriError)
    async def matsuri_error_handler(request: Request, exc: MatsuriError):
        """Handle all domain/infrastructure errors."""
        if isinstance(exc, PartialWriteInconsistency):
            logger.critical(
                f"Partial write at step '{exc.failed_step}': orphaned {exc.orphaned}",
                extra={"error_code": exc.code, "path": request.url.path},
            )
        else:
            logger.error(
                f"MatsuriError: {exc.message}",
                extra={"error_code": exc.code, "path": request.url.path},
            )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

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


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
