"""
Centralized error handlers for FastAPI.

Dashboard use cases degrade instead of raising, so these handlers are the
last line for anything that still escapes a route.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.dashboard.errors import DashboardDomainError, RecordSourceError

logger = logging.getLogger(__name__)

HTTP_500 = 500
HTTP_503 = 503


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(RecordSourceError)
    async def handle_record_source(
        _request: Request, exc: RecordSourceError
    ) -> JSONResponse:
        """Handle an unreadable record source."""
        logger.error("Record source unavailable: %s (%s)", exc.source, exc.reason)
        return _error_response(HTTP_503, "Record source unavailable", exc.source)

    @app.exception_handler(DashboardDomainError)
    async def handle_dashboard_domain(
        _request: Request, exc: DashboardDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled dashboard domain errors."""
        logger.error("Unhandled dashboard domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
