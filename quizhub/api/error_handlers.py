"""Error Handlers — global exception handlers for the QuizHub API.

Invariants:
    - QuizHubError 4xx → structured JSON with error code, message, severity
    - QuizHubError 5xx and any other Exception → 500/5xx with an empty {} body,
      never leaking internal details
    - RequestValidationError → 400 with field-level error details

Design Decisions:
    - Three-layer handler: domain (QuizHubError), validation (Pydantic), catch-all (Exception)
    - Kept out of main.py so the app module only wires things together
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from quizhub.core.errors import QuizHubError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_quizhub_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_quizhub_error_handler(app: FastAPI) -> None:
    """Register QuizHub domain/store error handler."""

    @app.exception_handler(QuizHubError)
    async def quizhub_error_handler(request: Request, exc: QuizHubError):
        logger.error(
            f"QuizHubError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        if exc.http_status >= 500:
            return JSONResponse(status_code=exc.http_status, content={})
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
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
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={},
        )


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
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
