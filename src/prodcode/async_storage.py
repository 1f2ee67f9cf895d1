"""
Async storage backends for the product code table.
"""

import asyncio
import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Sequence

import aiosqlite

from .exceptions import StorageError
from .storage import SCHEMA

logger = logging.getLogger(__name__)


class AsyncStorageBackend(ABC):
    """Abstract base class for async storage backends."""

    @abstractmethod
    async def initialize(self) -> None:
        """Open the connection and create the product_code table."""
        pass

    @abstractmethod
    async def query(self, sql: str, params: Sequence[Any] = ()) -> List[Mapping[str, Any]]:
        """Run a SELECT and return every row as a column mapping."""
        pass

    @abstractmethod
    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a data-modifying statement and return the affected row count."""
        pass

    @abstractmethod
    def transaction(self):
        """Async context manager grouping statements into one unit of work."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the storage backend."""
        pass

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


class AsyncSQLiteStorage(AsyncStorageBackend):
    """Async SQLite-based storage backend."""

    def __init__(self, db_path: str = "prodcode_async.db"):
        self.db_path = db_path
        self.connection: Optional[aiosqlite.Connection] = None
        self._lock = asyncio.Lock()
        # Task currently holding the lock through transaction()
        self._owner: Optional[asyncio.Task] = None

    async def initialize(self) -> None:
        """Initialize SQLite database with the product_code table."""
        async with self._lock:
            if self.connection is not None:
                return

            try:
                self.connection = await aiosqlite.connect(self.db_path, isolation_level=None)
                self.connection.row_factory = aiosqlite.Row
                await self.connection.execute(SCHEMA)
            except sqlite3.Error as e:
                if self.connection is not None:
                    await self.connection.close()
                    self.connection = None
                raise StorageError(f"Failed to open database {self.db_path}: {e}") from e

            logger.debug("Opened async SQLite database %s", self.db_path)

    @asynccontextmanager
    async def _guard(self) -> AsyncIterator[None]:
        if self._owner is not None and self._owner is asyncio.current_task():
            yield
            return
        async with self._lock:
            yield

    async def query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a SELECT against the database."""
        if not self.connection:
            await self.initialize()

        async with self._guard():
            logger.debug("query: %s %r", sql, tuple(params))
            try:
                cursor = await self.connection.execute(sql, tuple(params))
                rows = await cursor.fetchall()
                await cursor.close()
            except sqlite3.Error as e:
                raise StorageError(f"Query failed: {e}") from e
            return [dict(row) for row in rows]

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT/UPDATE against the database."""
        if not self.connection:
            await self.initialize()

        async with self._guard():
            logger.debug("execute: %s %r", sql, tuple(params))
            try:
                cursor = await self.connection.execute(sql, tuple(params))
                count = cursor.rowcount
                await cursor.close()
            except sqlite3.Error as e:
                raise StorageError(f"Statement failed: {e}") from e
            return count

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["AsyncSQLiteStorage"]:
        """
        Run the enclosed statements in a single write transaction.

        The lock is held for the whole block, so other tasks sharing this
        storage wait until it commits or rolls back.
        """
        if not self.connection:
            await self.initialize()

        if self._owner is not None and self._owner is asyncio.current_task():
            yield self
            return

        async with self._lock:
            self._owner = asyncio.current_task()
            try:
                await self._run_control("BEGIN IMMEDIATE")
                try:
                    yield self
                except BaseException:
                    await self._run_control("ROLLBACK")
                    raise
                await self._run_control("COMMIT")
            finally:
                self._owner = None

    async def _run_control(self, statement: str) -> None:
        try:
            await self.connection.execute(statement)
        except sqlite3.Error as e:
            raise StorageError(f"{statement} failed: {e}") from e

    async def close(self) -> None:
        """Close the database connection."""
        async with self._lock:
            if self.connection:
                await self.connection.close()
                self.connection = None
                logger.debug("Closed async SQLite database %s", self.db_path)


class AsyncInMemoryStorage(AsyncSQLiteStorage):
    """Async in-memory SQLite storage backend for testing."""

    def __init__(self):
        super().__init__(":memory:")
