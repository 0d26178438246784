"""Invoice Validation — tests for the pure field rules and draft normalization.

Tests cover:
    - Each field rule in isolation (customerId, amount, status, id)
    - Errors accumulate across fields, no short-circuit
    - Half-up cents rounding on the decimal value ("12.345" -> 1235)
    - Malformed amounts become field errors, never exceptions
    - Update/Delete require a UUID id; Create ignores it
    - Echoed input is the untouched draft
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from invoice_desk.core.domain_types import InvoiceStatus, MutationKind
from invoice_desk.core.mutation_result import (
    InvoiceRef, ValidatedInvoice, ValidationFailed,
)
from invoice_desk.core.validate_invoice import (
    AMOUNT_INVALID, CUSTOMER_REQUIRED, ID_INVALID, ID_MISSING, STATUS_INVALID,
    check_amount, collect_field_errors, parse_amount, to_cents, validate_invoice,
)


def _draft(**overrides) -> dict:
    draft = {"customerId": "c1", "amount": "20.00", "status": "pending"}
    draft.update(overrides)
    return draft


# ─── customerId ──────────────────────────────────────────────────

@pytest.mark.parametrize("amount,status", [
    ("20.00", "pending"), ("abc", "bad"), ("0", "paid"), ("", ""),
])
def test_missing_customer_always_reported(amount, status):
    draft = {"amount": amount, "status": status}
    errors = collect_field_errors(draft, MutationKind.CREATE)
    assert errors["customerId"] == [CUSTOMER_REQUIRED]


def test_empty_customer_reported():
    result = validate_invoice(_draft(customerId=""), MutationKind.CREATE)
    assert isinstance(result, ValidationFailed)
    assert set(result.errors) == {"customerId"}


# ─── amount ──────────────────────────────────────────────────────

@pytest.mark.parametrize("raw", [
    "", "0", "-5", "0.00", "abc", "12abc", "NaN", "Infinity", "-Infinity",
    "1e999999999", "0.004", "1_000", "\u0661\u0662", "\uff11\uff12", "0x10", "1.2.3",
])
def test_bad_amounts_rejected(raw):
    assert check_amount({"amount": raw}) == AMOUNT_INVALID


def test_missing_amount_rejected():
    assert check_amount({}) == AMOUNT_INVALID


@pytest.mark.parametrize("raw,cents", [
    ("20.00", 2000),
    ("25.50", 2550),
    ("12.345", 1235),
    ("0.005", 1),
    ("1", 100),
    ("1e2", 10000),
    ("99.994", 9999),
])
def test_amount_converted_to_cents_half_up(raw, cents):
    result = validate_invoice(_draft(amount=raw), MutationKind.CREATE)
    assert isinstance(result, ValidatedInvoice)
    assert result.amount_cents == cents


def test_parse_amount_accepts_only_ascii_decimal_syntax():
    assert parse_amount(" 20.5 ") == Decimal("20.5")
    assert parse_amount(".5") == Decimal("0.5")
    assert parse_amount("5.") == Decimal("5")
    assert parse_amount("1_000") is None
    assert parse_amount("\u0661\u0662") is None


def test_parse_amount_never_raises_on_garbage():
    assert parse_amount("$20") is None
    assert parse_amount("twenty") is None
    assert parse_amount("") is None


def test_to_cents_is_not_binary_float_rounding():
    # float(12.345) * 100 == 1234.4999..., the decimal value is 1234.5
    assert to_cents(parse_amount("12.345")) == 1235


# ─── status ──────────────────────────────────────────────────────

@pytest.mark.parametrize("raw", ["", "bad", "Paid", "PENDING", " paid", "overdue"])
def test_status_outside_allowed_set_rejected(raw):
    result = validate_invoice(_draft(status=raw), MutationKind.CREATE)
    assert isinstance(result, ValidationFailed)
    assert result.errors == {"status": [STATUS_INVALID]}


@pytest.mark.parametrize("raw", ["pending", "paid"])
def test_allowed_status_becomes_enum(raw):
    result = validate_invoice(_draft(status=raw), MutationKind.CREATE)
    assert result.status == InvoiceStatus(raw)


# ─── aggregation ─────────────────────────────────────────────────

def test_all_three_errors_reported_together():
    result = validate_invoice(
        {"customerId": "", "amount": "abc", "status": "bad"},
        MutationKind.CREATE,
    )
    assert isinstance(result, ValidationFailed)
    assert result.errors == {
        "customerId": [CUSTOMER_REQUIRED],
        "amount": [AMOUNT_INVALID],
        "status": [STATUS_INVALID],
    }


def test_zero_amount_only_amount_error():
    result = validate_invoice(
        {"customerId": "c1", "amount": "0", "status": "paid"},
        MutationKind.CREATE,
    )
    assert isinstance(result, ValidationFailed)
    assert result.errors == {"amount": [AMOUNT_INVALID]}


def test_create_failure_message_and_echo():
    draft = {"customerId": "", "amount": "-5", "status": "paid"}
    result = validate_invoice(draft, MutationKind.CREATE)
    assert result.message == "Missing Fields. Failed to Create Invoice."
    assert result.echoed_input == draft
    assert result.echoed_input is not draft


# ─── success ─────────────────────────────────────────────────────

def test_create_success_has_no_id():
    result = validate_invoice(_draft(), MutationKind.CREATE)
    assert result == ValidatedInvoice(
        customer_id="c1", amount_cents=2000, status=InvoiceStatus.PENDING,
    )


def test_create_ignores_bogus_id():
    result = validate_invoice(_draft(id="not-a-uuid"), MutationKind.CREATE)
    assert isinstance(result, ValidatedInvoice)
    assert result.invoice_id is None


# ─── id (update/delete) ──────────────────────────────────────────

def test_update_requires_id():
    result = validate_invoice(_draft(), MutationKind.UPDATE)
    assert isinstance(result, ValidationFailed)
    assert result.errors == {"id": [ID_MISSING]}
    assert result.message == "Missing Fields. Failed to Update Invoice."


def test_update_rejects_non_uuid_id():
    result = validate_invoice(_draft(id="42"), MutationKind.UPDATE)
    assert result.errors == {"id": [ID_INVALID]}


def test_update_success_carries_parsed_id():
    invoice_id = uuid4()
    result = validate_invoice(
        _draft(id=str(invoice_id), amount="25.50", status="paid"),
        MutationKind.UPDATE,
    )
    assert result == ValidatedInvoice(
        customer_id="c1", amount_cents=2550,
        status=InvoiceStatus.PAID, invoice_id=invoice_id,
    )


def test_delete_checks_only_id():
    invoice_id = uuid4()
    result = validate_invoice({"id": str(invoice_id)}, MutationKind.DELETE)
    assert result == InvoiceRef(invoice_id=invoice_id)


def test_delete_without_id_fails():
    result = validate_invoice({}, MutationKind.DELETE)
    assert isinstance(result, ValidationFailed)
    assert result.errors == {"id": [ID_MISSING]}
    assert result.message == "Missing Fields. Failed to Delete Invoice."
    assert "formValues" not in result.to_form_state()
