"""Mutation Results — the tagged outcomes of one invoice pipeline invocation.

Invariants:
    - ValidatedInvoice / InvoiceRef are produced only by core/validate_invoice.py
    - Exactly one variant is returned per invocation:
        ValidationFailed | PersistenceFailed | Redirect | Succeeded
    - Redirect is terminal: the caller must stop and navigate to `location`
    - to_form_state() yields the literal shape the form layer redisplays
    - Delete has no form to refill, so its failure state carries no formValues

Design Decisions:
    - Frozen dataclasses over exceptions: failure path has the same shape as
      success path, no non-local exits (ADR: navigation as a result variant)
    - echoed_input kept verbatim (invalid values included) so the form can be refilled
"""

from dataclasses import dataclass, field
from typing import Mapping, Union

from invoice_desk.core.domain_types import (
    Cents, FORM_FIELDS, InvoiceId, InvoiceStatus, MutationKind,
)

InvoiceDraft = Mapping[str, str]
FieldErrors = dict[str, list[str]]


@dataclass(frozen=True)
class ValidatedInvoice:
    """A draft that passed every field rule, normalized to cents."""
    customer_id: str
    amount_cents: Cents
    status: InvoiceStatus
    invoice_id: InvoiceId | None = None


@dataclass(frozen=True)
class InvoiceRef:
    """Validated target of a delete — the id is all it needs."""
    invoice_id: InvoiceId


@dataclass(frozen=True)
class ValidationFailed:
    errors: FieldErrors
    message: str
    echoed_input: InvoiceDraft = field(default_factory=dict)
    kind: MutationKind = MutationKind.CREATE

    def to_form_state(self) -> dict:
        state = {
            "errors": {name: list(msgs) for name, msgs in self.errors.items()},
            "message": self.message,
        }
        if self.kind != MutationKind.DELETE:
            state["formValues"] = {
                name: self.echoed_input.get(name, "") for name in FORM_FIELDS
            }
        return state


@dataclass(frozen=True)
class PersistenceFailed:
    message: str

    def to_form_state(self) -> dict:
        return {"message": self.message}


@dataclass(frozen=True)
class Succeeded:
    """Persisted and effects dispatched, caller stays where it is."""
    kind: MutationKind


@dataclass(frozen=True)
class Redirect:
    """Terminal navigation — nothing after this runs in the caller."""
    location: str


MutationResult = Union[ValidationFailed, PersistenceFailed, Succeeded]
ActionOutcome = Union[ValidationFailed, PersistenceFailed, Redirect, Succeeded]
