"""Invoice Actions — the validate -> persist -> dispatch pipeline behind the invoice form.

Invariants:
    - Stages run strictly in order; each consumes the previous stage's output
    - ValidationFailed / PersistenceFailed return before any effect runs
    - Create/Update success ends in a Redirect, Delete success in Succeeded
    - No exception escapes: validation never raises, the executor classifies faults
    - No state shared between invocations (collaborators are injected)

Design Decisions:
    - Route layer builds one InvoiceActions per request from injected
      executor + effects (ADR: test doubles without patching globals)
    - Update/Delete take the id separately (it comes from the URL) and merge it
      into the draft so the validator sees one mapping
"""

import logging

from invoice_desk.core.domain_types import ID_FIELD, MutationKind
from invoice_desk.core.mutation_result import (
    ActionOutcome, InvoiceDraft, PersistenceFailed, ValidationFailed,
)
from invoice_desk.core.repository_protocols import StatementExecutor, ViewEffects
from invoice_desk.core.validate_invoice import validate_invoice
from invoice_desk.services.effect_dispatcher import EffectDispatcher
from invoice_desk.services.mutation_executor import MutationExecutor

logger = logging.getLogger(__name__)


class InvoiceActions:
    """Create, update and delete invoices from raw form drafts."""

    def __init__(
        self,
        executor: StatementExecutor,
        effects: ViewEffects,
        list_path: str = "/dashboard/invoices",
        strict_persistence_errors: bool = False,
    ):
        self._mutations = MutationExecutor(
            executor, strict=strict_persistence_errors,
        )
        self._effects = EffectDispatcher(effects, list_path)

    async def create(self, draft: InvoiceDraft) -> ActionOutcome:
        return await self._run(MutationKind.CREATE, draft)

    async def update(self, invoice_id: str, draft: InvoiceDraft) -> ActionOutcome:
        return await self._run(MutationKind.UPDATE, {**draft, ID_FIELD: invoice_id})

    async def delete(self, invoice_id: str) -> ActionOutcome:
        return await self._run(MutationKind.DELETE, {ID_FIELD: invoice_id})

    async def _run(self, kind: MutationKind, draft: InvoiceDraft) -> ActionOutcome:
        validated = validate_invoice(draft, kind)
        if isinstance(validated, ValidationFailed):
            logger.info(
                f"Invoice {kind.value} rejected: {sorted(validated.errors)}",
                extra={"mutation": kind.value},
            )
            return validated

        result = await self._mutations.execute(kind, validated)
        if isinstance(result, PersistenceFailed):
            return result

        return self._effects.on_success(kind)
