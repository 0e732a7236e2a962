"""Single-statement units of work over the shared connection pool.

Every store operation is exactly one statement in its own session and
transaction. Results are fully consumed before the connection goes back to
the pool.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import Executable, RowMapping
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class StatementExecutor:
    """Executes statements against sessions from a shared sessionmaker."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize executor with a session factory.

        Args:
            session_factory: Sessionmaker bound to the store's engine
        """
        self._session_factory = session_factory

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            async with session.begin():
                yield session

    async def execute(self, stmt: Executable) -> None:
        """Execute a statement and commit."""
        async with self._unit_of_work() as session:
            await session.execute(stmt)

    async def execute_rowcount(self, stmt: Executable) -> int:
        """Execute a mutating statement and return the affected-row count."""
        async with self._unit_of_work() as session:
            result: Any = await session.execute(stmt)
            return result.rowcount

    async def fetch_all(self, stmt: Executable) -> list[RowMapping]:
        """Execute a query and return every row keyed by column name."""
        async with self._unit_of_work() as session:
            result = await session.execute(stmt)
            return list(result.mappings().all())
