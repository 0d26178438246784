"""Error Handlers — global exception handlers for the Invoice Desk API.

Invariants:
    - InvoiceDeskError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with per-field details
    - Exception (catch-all) → 500, never leaks internal details
    - Invoice form failures never reach these handlers: they are results, not exceptions

Design Decisions:
    - Handlers are plain module functions registered with add_exception_handler,
      so tests can call them without building an app
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from invoice_desk.core.errors import ErrorCategory, ErrorSeverity, InvoiceDeskError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(InvoiceDeskError, invoice_desk_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def invoice_desk_error_handler(request: Request, exc: InvoiceDeskError):
    logger.error(
        f"InvoiceDeskError: {exc.message}",
        extra={
            "error_code": exc.code, "path": request.url.path,
            "mutation": exc.context.mutation, "invoice_id": exc.context.invoice_id,
        },
    )
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
):
    """Malformed request envelope (path/query), not invoice field rules."""
    logger.warning(
        f"Validation error on {request.url.path}: {exc.errors()}",
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_validation_error_response(exc),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
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
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
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
