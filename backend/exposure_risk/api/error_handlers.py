"""Error Handlers — global exception handlers for the risk state API.

Invariants:
    - RiskCoreError → structured JSON with error code, message, severity
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Two-layer handler: domain (RiskCoreError), catch-all (Exception)
    - No request-validation handler: the API exposes parameterless GETs only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from exposure_risk.core.errors import ErrorCategory, ErrorSeverity, RiskCoreError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_risk_core_error_handler(app)
    _register_generic_error_handler(app)


def _register_risk_core_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RiskCoreError)
    async def risk_core_error_handler(request: Request, exc: RiskCoreError):
        logger.error(
            f"Risk state request failed: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
