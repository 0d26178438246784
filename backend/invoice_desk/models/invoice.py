"""Invoice ORM — the row behind every create/update/delete mutation.

Invariants:
    - id is UUID primary key (client-side default, the mutation never supplies it)
    - amount is an integer number of cents, never dollars
    - status is "pending" or "paid" (enforced by the validator, not the DB)
    - date is the UTC calendar date the invoice was created

Design Decisions:
    - customer_id as plain string: the pipeline only requires a non-empty identifier
    - Date column over text: 'YYYY-MM-DD' is the ISO rendering of the same value
"""

import uuid
import datetime

from sqlalchemy import String, Integer, Date
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from invoice_desk.db.base import Base


class Invoice(Base):
    """Invoice entity — one billed amount for one customer."""
    __tablename__ = "invoices"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    customer_id: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    date: Mapped[datetime.date] = mapped_column(
        Date, nullable=False, index=True,
    )
