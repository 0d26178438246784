"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - StatementExecutor takes one statement and commits it: every invoice
      mutation is a single-row statement, no multi-statement transaction
    - navigate() returns Redirect instead of diverging: the caller returns it
"""

from typing import Protocol

from sqlalchemy.sql import Executable

from invoice_desk.core.errors import ErrorContext
from invoice_desk.core.mutation_result import Redirect


class StatementExecutor(Protocol):
    """Contract for running one parameterized statement — implemented by shell.

    Any raised exception means "failed"; no richer error taxonomy is consumed.
    `context` names the mutation so a raised DatabaseError can carry it.
    """
    async def execute(
        self, statement: Executable, context: ErrorContext | None = None,
    ) -> None: ...


class ViewEffects(Protocol):
    """Contract for post-persistence effects — implemented by shell."""
    def invalidate(self, logical_path: str) -> None: ...
    def navigate(self, logical_path: str) -> Redirect: ...
