"""Mutation Executor — turns a validated invoice into one SQL statement and classifies the outcome.

Invariants:
    - Exactly one statement per invocation: INSERT, UPDATE by id, or DELETE by id
    - Create date is the UTC calendar date, read once per invocation
    - No existence check before update/delete: zero affected rows is success
    - Never raises: every execute() call site catches and classifies
    - Create faults -> PersistenceFailed; update/delete faults are absorbed
      (logged at WARNING) unless strict mode is on

Design Decisions:
    - SQLAlchemy Core statements over ORM unit-of-work: single-row writes by key,
      no read-back of the stored row
    - FAULT_POLICY table keeps the create vs update/delete asymmetry explicit
      (ADR: known inconsistency preserved, not silently unified)
"""

import logging
from datetime import date, datetime, timezone
from enum import Enum
from typing import Callable

from sqlalchemy import delete, insert, update
from sqlalchemy.sql import Executable

from invoice_desk.core.domain_types import MutationKind
from invoice_desk.core.errors import ErrorContext, InvoiceDeskError
from invoice_desk.core.mutation_result import (
    InvoiceRef, PersistenceFailed, Succeeded, ValidatedInvoice,
)
from invoice_desk.core.repository_protocols import StatementExecutor
from invoice_desk.models.invoice import Invoice

logger = logging.getLogger(__name__)


class FaultPolicy(str, Enum):
    REPORT = "report"
    ABSORB = "absorb"


FAULT_POLICY: dict[MutationKind, FaultPolicy] = {
    MutationKind.CREATE: FaultPolicy.REPORT,
    MutationKind.UPDATE: FaultPolicy.ABSORB,
    MutationKind.DELETE: FaultPolicy.ABSORB,
}


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def persistence_message(kind: MutationKind) -> str:
    return f"Database Error: Failed to {kind.verb} Invoice."


# ─── Statement Builders ─────────────────────────────────────────

def build_insert(invoice: ValidatedInvoice, on: date) -> Executable:
    return insert(Invoice).values(
        customer_id=invoice.customer_id,
        amount=invoice.amount_cents,
        status=invoice.status.value,
        date=on,
    )


def build_update(invoice: ValidatedInvoice) -> Executable:
    return (
        update(Invoice)
        .where(Invoice.id == invoice.invoice_id)
        .values(
            customer_id=invoice.customer_id,
            amount=invoice.amount_cents,
            status=invoice.status.value,
        )
    )


def build_delete(ref: InvoiceRef) -> Executable:
    return delete(Invoice).where(Invoice.id == ref.invoice_id)


class MutationExecutor:
    """Issues the persistence call for one mutation. Single attempt, no retry."""

    def __init__(
        self,
        executor: StatementExecutor,
        strict: bool = False,
        today: Callable[[], date] = utc_today,
    ):
        self._executor = executor
        self._strict = strict
        self._today = today

    def _statement_for(
        self, kind: MutationKind, target: ValidatedInvoice | InvoiceRef,
    ) -> Executable:
        if kind == MutationKind.CREATE:
            return build_insert(target, self._today())
        if kind == MutationKind.UPDATE:
            return build_update(target)
        return build_delete(target)

    async def execute(
        self, kind: MutationKind, target: ValidatedInvoice | InvoiceRef,
    ) -> Succeeded | PersistenceFailed:
        """Run the statement for `kind` and classify the outcome."""
        statement = self._statement_for(kind, target)
        invoice_id = str(target.invoice_id) if target.invoice_id else None
        context = ErrorContext(invoice_id=invoice_id, mutation=kind.value)
        try:
            await self._executor.execute(statement, context)
        except Exception as e:
            error_code = e.code if isinstance(e, InvoiceDeskError) else None
            if self._strict or FAULT_POLICY[kind] == FaultPolicy.REPORT:
                logger.error(
                    f"Invoice {kind.value} failed: {e}",
                    extra={
                        "mutation": kind.value, "invoice_id": invoice_id,
                        "error_code": error_code,
                    },
                    exc_info=True,
                )
                return PersistenceFailed(message=persistence_message(kind))
            logger.warning(
                f"Invoice {kind.value} failed, continuing: {e}",
                extra={
                    "mutation": kind.value, "invoice_id": invoice_id,
                    "error_code": error_code,
                },
            )
            return Succeeded(kind=kind)

        logger.info(
            f"Invoice {kind.value} persisted",
            extra={"mutation": kind.value, "invoice_id": invoice_id},
        )
        return Succeeded(kind=kind)
