"""Invoice List View — the cached view every invoice mutation invalidates.

Invariants:
    - Served from view_cache when present; rebuilt from the database otherwise
    - Cache key is the logical list path from settings (same one mutations invalidate)
    - Newest invoices first
    - A rebuild that raced a mutation is served once but never cached
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_desk.config import get_settings
from invoice_desk.infrastructure.database import get_db
from invoice_desk.infrastructure.view_cache import view_cache
from invoice_desk.models.invoice import Invoice
from invoice_desk.schemas.invoice import InvoiceListResponse, InvoiceResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/invoices", response_model=InvoiceListResponse)
async def list_invoices(db: AsyncSession = Depends(get_db)):
    """Invoice list, cached until the next mutation."""
    path = get_settings().invoices_list_path
    cached = view_cache.get(path)
    if cached is not None:
        return cached

    generation = view_cache.generation(path)
    result = await db.execute(
        select(Invoice).order_by(Invoice.date.desc(), Invoice.id),
    )
    payload = InvoiceListResponse(
        invoices=[
            InvoiceResponse.model_validate(row) for row in result.scalars().all()
        ],
    )
    view_cache.put(path, payload, generation)
    logger.info(f"Invoice list rebuilt: {len(payload.invoices)} rows", extra={"path": path})
    return payload
