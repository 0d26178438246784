"""Health & Readiness — liveness, plus readiness of the invoice store.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 naming every failed check: database
      unreachable, or invoices table missing (migrations not applied)

Design Decisions:
    - db_manager read at call time: it is assigned by the lifespan after import
    - The list path is reported so an operator can see which view mutations invalidate
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import invoice_desk.infrastructure.database as db_module
from invoice_desk.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "invoice-desk-api",
        "version": "1.0.0",
        "invoices_list_path": get_settings().invoices_list_path,
    }


@router.get("/ready")
async def readiness_check():
    manager = db_module.db_manager
    checks = (
        await manager.readiness() if manager
        else {"database": False, "invoices_table": False}
    )
    failed = [name for name, ok in checks.items() if not ok]
    if failed:
        logger.warning(f"Not ready: {', '.join(failed)}", extra={"path": "/api/v1/health/ready"})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "failed": failed},
        )
    return {
        "status": "ready",
        "checks": {name: "healthy" for name in checks},
    }
