"""Invoice Schemas — Pydantic response models for the invoice form and list view.

Invariants:
    - InvoiceFormState mirrors the form contract: errors?, message?, formValues?
    - JSON keys are camelCase (customerId, formValues) — the form's field names
    - Schemas describe responses only; drafts are validated by core/validate_invoice.py

Design Decisions:
    - Aliases over camelCase attribute names: Python side stays snake_case
    - exclude_none on dump: absent keys, not nulls, mean "no error for that field"
"""

import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class InvoiceFieldErrors(BaseModel):
    """Per-field messages. Only failing fields are present."""
    model_config = ConfigDict(populate_by_name=True)

    customer_id: list[str] | None = Field(None, alias="customerId")
    amount: list[str] | None = None
    status: list[str] | None = None
    id: list[str] | None = None


class InvoiceFormValues(BaseModel):
    """User-entered values echoed back verbatim, invalid ones included."""
    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field("", alias="customerId")
    amount: str = ""
    status: str = ""


class InvoiceFormState(BaseModel):
    """What the form redisplays after a non-navigating outcome."""
    model_config = ConfigDict(populate_by_name=True)

    errors: InvoiceFieldErrors | None = None
    message: str | None = None
    form_values: InvoiceFormValues | None = Field(None, alias="formValues")

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class InvoiceResponse(BaseModel):
    """One row of the invoice list view."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: str
    amount: int
    status: str
    date: datetime.date


class InvoiceListResponse(BaseModel):
    invoices: list[InvoiceResponse]
