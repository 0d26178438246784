"""Database Session Manager — async invoice store sessions with rollback and readiness checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py), carrying
      the ErrorContext of the mutation that opened the session
    - Readiness means the server answers AND the invoices table exists

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - ssl="require" passed straight to asyncpg when the hosted Postgres demands it
    - SQLALCHEMY_FAULTS is ordered most specific first; the first isinstance match wins
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import select, text

from invoice_desk.core.errors import DatabaseError, ErrorContext
from invoice_desk.models.invoice import Invoice

logger = logging.getLogger(__name__)

# (exception type, user-safe message, failed operation)
SQLALCHEMY_FAULTS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Invoice constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def to_database_error(
    exc: SQLAlchemyError, context: ErrorContext | None = None,
) -> DatabaseError:
    """Map a SQLAlchemy failure onto the DatabaseError the pipeline classifies."""
    for exc_type, message, operation in SQLALCHEMY_FAULTS:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation, context)
    return DatabaseError("Database operation failed", "unknown", context)


class DatabaseSessionManager:
    """Owns the invoice store engine and hands out rollback-safe sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
        ssl_require: bool = False,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
            connect_args={"ssl": "require"} if ssl_require else {},
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, context: ErrorContext | None = None,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback; failures raise DatabaseError(context)."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_database_error(e, context)
            logger.error(
                f"DB {error.operation} error: {e}",
                extra={
                    "error_code": error.code,
                    "mutation": error.context.mutation,
                    "invoice_id": error.context.invoice_id,
                },
            )
            raise error from e
        finally:
            await session.close()

    async def readiness(self) -> dict[str, bool]:
        """Per-check readiness: server reachable, invoices table migrated."""
        checks = {"database": False, "invoices_table": False}
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
                checks["database"] = True
                await db.execute(select(Invoice.id).limit(1))
                checks["invoices_table"] = True
        except Exception as e:
            # connect-time failures (refused, DNS) can surface unwrapped
            logger.error(f"DB readiness check failed: {e}", extra={"path": "readiness"})
        return checks


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
