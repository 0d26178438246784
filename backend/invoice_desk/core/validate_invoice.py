"""Invoice Validation — pure field rules that turn a raw form draft into a record.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Field checks return an error message on violation, None on success
    - Every field is checked, errors accumulate (no short-circuit across fields)
    - amount is parsed with Decimal and rounded half-up to whole cents:
      "12.345" -> 1235, never the binary-float 1234
    - Malformed input never raises, it becomes a field error

Design Decisions:
    - Explicit ordered tuple of (field, check) over a schema library: every
      coercion (str -> Decimal, str -> InvoiceStatus) is visible here
    - Decimal over float: cents boundary must round on the decimal value the user typed
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Callable
from uuid import UUID

from invoice_desk.core.domain_types import (
    AMOUNT_FIELD, CUSTOMER_ID_FIELD, ID_FIELD, STATUS_FIELD,
    Cents, InvoiceId, InvoiceStatus, MutationKind,
)
from invoice_desk.core.mutation_result import (
    FieldErrors, InvoiceDraft, InvoiceRef, ValidatedInvoice, ValidationFailed,
)

CUSTOMER_REQUIRED = "Please select a customer"
AMOUNT_INVALID = "Please enter an amount greater than $0."
STATUS_INVALID = "Please select a valid invoice status."
ID_MISSING = "Missing invoice id."
ID_INVALID = "Invalid invoice id."

_VALID_STATUSES = frozenset(s.value for s in InvoiceStatus)

# ASCII digits only: no "1_000", no non-Latin digits, no NaN/Infinity
_AMOUNT_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def summary_message(kind: MutationKind) -> str:
    """Form-level message shown above the field errors."""
    return f"Missing Fields. Failed to {kind.verb} Invoice."


# ─── Coercions ───────────────────────────────────────────────────

def parse_amount(raw: str) -> Decimal | None:
    """Parse a dollar amount. None when empty, unparsable or not finite."""
    if not raw:
        return None
    raw = raw.strip()
    if not _AMOUNT_PATTERN.fullmatch(raw):
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def to_cents(amount: Decimal) -> Cents | None:
    """Dollars -> whole cents, half-up. None when the value overflows Decimal."""
    try:
        cents = (amount * 100).to_integral_value(rounding=ROUND_HALF_UP)
    except ArithmeticError:
        return None
    return Cents(int(cents))


def parse_invoice_id(raw: str) -> InvoiceId | None:
    try:
        return InvoiceId(UUID(raw))
    except ValueError:
        return None


# ─── Field Checks ────────────────────────────────────────────────

def check_customer_id(draft: InvoiceDraft) -> str | None:
    if not draft.get(CUSTOMER_ID_FIELD):
        return CUSTOMER_REQUIRED
    return None


def check_amount(draft: InvoiceDraft) -> str | None:
    """Positive amount that is still at least one cent after rounding."""
    amount = parse_amount(draft.get(AMOUNT_FIELD, ""))
    if amount is None or amount <= 0:
        return AMOUNT_INVALID
    cents = to_cents(amount)
    if cents is None or cents <= 0:
        return AMOUNT_INVALID
    return None


def check_status(draft: InvoiceDraft) -> str | None:
    # exact, case-sensitive
    if draft.get(STATUS_FIELD) not in _VALID_STATUSES:
        return STATUS_INVALID
    return None


def check_invoice_id(draft: InvoiceDraft) -> str | None:
    raw = draft.get(ID_FIELD)
    if not raw:
        return ID_MISSING
    if parse_invoice_id(raw) is None:
        return ID_INVALID
    return None


FieldCheck = Callable[[InvoiceDraft], str | None]

_FORM_CHECKS: tuple[tuple[str, FieldCheck], ...] = (
    (CUSTOMER_ID_FIELD, check_customer_id),
    (AMOUNT_FIELD, check_amount),
    (STATUS_FIELD, check_status),
)
_ID_CHECK: tuple[tuple[str, FieldCheck], ...] = (
    (ID_FIELD, check_invoice_id),
)

FIELD_CHECKS: dict[MutationKind, tuple[tuple[str, FieldCheck], ...]] = {
    MutationKind.CREATE: _FORM_CHECKS,
    MutationKind.UPDATE: _FORM_CHECKS + _ID_CHECK,
    MutationKind.DELETE: _ID_CHECK,
}


def collect_field_errors(
    draft: InvoiceDraft, kind: MutationKind,
) -> FieldErrors:
    """Run every check for `kind` in order. Only failing fields get a key."""
    errors: FieldErrors = {}
    for name, check in FIELD_CHECKS[kind]:
        message = check(draft)
        if message is not None:
            errors.setdefault(name, []).append(message)
    return errors


def validate_invoice(
    draft: InvoiceDraft, kind: MutationKind,
) -> ValidatedInvoice | InvoiceRef | ValidationFailed:
    """Validate a draft for `kind`.

    Returns ValidatedInvoice for create/update, InvoiceRef for delete, or
    ValidationFailed carrying the field errors and the untouched draft.
    """
    errors = collect_field_errors(draft, kind)
    if errors:
        return ValidationFailed(
            errors=errors,
            message=summary_message(kind),
            echoed_input=dict(draft),
            kind=kind,
        )

    invoice_id = (
        parse_invoice_id(draft[ID_FIELD]) if kind != MutationKind.CREATE else None
    )
    if kind == MutationKind.DELETE:
        return InvoiceRef(invoice_id=invoice_id)

    return ValidatedInvoice(
        customer_id=draft[CUSTOMER_ID_FIELD],
        amount_cents=to_cents(parse_amount(draft[AMOUNT_FIELD])),
        status=InvoiceStatus(draft[STATUS_FIELD]),
        invoice_id=invoice_id,
    )
