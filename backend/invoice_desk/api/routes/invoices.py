"""Invoice Mutations — form endpoints for creating, updating and deleting invoices.

Invariants:
    - Form bodies read as raw strings; absent fields become "" before validation
    - Redirect -> 303 See Other to the list path
    - ValidationFailed -> 400 with the form state (errors, message, formValues)
    - PersistenceFailed -> 503 with the message only
    - Delete success -> 204, no navigation

Design Decisions:
    - No pydantic body model for the form: coercion rules live in core/validate_invoice.py
    - invoice_id taken as str from the path: a malformed id is a field error,
      not a FastAPI 422
    - get_invoice_actions reads db_manager at call time so tests can swap it
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from invoice_desk.config import get_settings
from invoice_desk.core.domain_types import FORM_FIELDS
from invoice_desk.core.mutation_result import (
    ActionOutcome, InvoiceDraft, PersistenceFailed, Redirect, ValidationFailed,
)
from invoice_desk.infrastructure.statement_executor import ManagedStatementExecutor
from invoice_desk.infrastructure.view_cache import ListViewEffects, view_cache
from invoice_desk.schemas.invoice import InvoiceFormState
from invoice_desk.services.invoice_actions import InvoiceActions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


def get_invoice_actions() -> InvoiceActions:
    """FastAPI dependency — one pipeline per request over the shared pool."""
    from invoice_desk.infrastructure.database import db_manager

    if not db_manager:
        raise RuntimeError("Database not initialized")
    settings = get_settings()
    return InvoiceActions(
        ManagedStatementExecutor(db_manager),
        ListViewEffects(view_cache),
        list_path=settings.invoices_list_path,
        strict_persistence_errors=settings.strict_persistence_errors,
    )


async def read_draft(request: Request) -> InvoiceDraft:
    """Form submission -> InvoiceDraft. Non-string parts (uploads) count as absent."""
    form = await request.form()
    draft = {}
    for name in FORM_FIELDS:
        value = form.get(name)
        draft[name] = value if isinstance(value, str) else ""
    return draft


def to_response(outcome: ActionOutcome) -> Response:
    if isinstance(outcome, Redirect):
        return RedirectResponse(
            outcome.location, status_code=status.HTTP_303_SEE_OTHER,
        )
    if isinstance(outcome, ValidationFailed):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=InvoiceFormState.model_validate(
                outcome.to_form_state(),
            ).to_json(),
        )
    if isinstance(outcome, PersistenceFailed):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=InvoiceFormState.model_validate(
                outcome.to_form_state(),
            ).to_json(),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("")
async def create_invoice(
    request: Request, actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Create an invoice from the form; redirects to the list on success."""
    draft = await read_draft(request)
    return to_response(await actions.create(draft))


@router.put("/{invoice_id}")
async def update_invoice(
    invoice_id: str,
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Update an invoice from the form; redirects to the list on success."""
    draft = await read_draft(request)
    return to_response(await actions.update(invoice_id, draft))


@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: str, actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Delete an invoice. The caller stays on the list view."""
    return to_response(await actions.delete(invoice_id))
