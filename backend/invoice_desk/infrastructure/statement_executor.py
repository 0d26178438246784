"""Statement Executor — runs one invoice mutation statement in its own session.

Invariants:
    - One statement, one session, one commit: nothing else shares the transaction
    - SQLAlchemy failures surface as DatabaseError (mapped by DatabaseSessionManager)
      stamped with the caller's ErrorContext
    - Zero affected rows is not an error

Design Decisions:
    - Session opened per statement instead of reusing the request session:
      a failed mutation never poisons a session the route still holds
"""

from sqlalchemy.sql import Executable

from invoice_desk.core.errors import ErrorContext
from invoice_desk.infrastructure.database import DatabaseSessionManager


class ManagedStatementExecutor:
    """StatementExecutor backed by the process-wide DatabaseSessionManager."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def execute(
        self, statement: Executable, context: ErrorContext | None = None,
    ) -> None:
        async with self._manager.session(context) as db:
            await db.execute(statement)
            await db.commit()
