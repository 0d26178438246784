"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId wraps UUID — never use bare UUID in domain logic
    - Cents is a positive integer amount of money (dollars * 100)
    - All valid states encoded as Enums — no raw string matching outside the validator

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and bind to String columns without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Cents = NewType("Cents", int)       # > 0


# ─── Form Fields ─────────────────────────────────────────────────

# Keys of an InvoiceDraft as posted by the invoice form
CUSTOMER_ID_FIELD = "customerId"
AMOUNT_FIELD = "amount"
STATUS_FIELD = "status"
ID_FIELD = "id"

FORM_FIELDS = (CUSTOMER_ID_FIELD, AMOUNT_FIELD, STATUS_FIELD)


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice payment states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class MutationKind(str, Enum):
    """The three invoice mutations. Drives validation mode and effects."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def verb(self) -> str:
        """Capitalized verb used in user-facing messages ("Create")."""
        return self.value.capitalize()
