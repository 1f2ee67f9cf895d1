"""
Storage backends for the product code table.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from .exceptions import StorageError

logger = logging.getLogger(__name__)

SCHEMA = """
    CREATE TABLE IF NOT EXISTS product_code (
        prod_code TEXT PRIMARY KEY,
        discount_code CHAR(1) NOT NULL,
        description TEXT NOT NULL
    )
"""


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    @abstractmethod
    def initialize(self) -> None:
        """Open the connection and create the product_code table."""
        pass

    @abstractmethod
    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Mapping[str, Any]]:
        """Run a SELECT and return every row as a column mapping."""
        pass

    @abstractmethod
    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a data-modifying statement and return the affected row count."""
        pass

    @abstractmethod
    def transaction(self):
        """Context manager grouping statements into one unit of work."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the storage backend."""
        pass

    def __enter__(self):
        """Context manager entry."""
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


class SQLiteStorage(StorageBackend):
    """SQLite-based storage backend."""

    def __init__(self, db_path: str = "prodcode.db"):
        self.db_path = db_path
        self.connection: Optional[sqlite3.Connection] = None
        self._in_transaction = False

    def initialize(self) -> None:
        """Initialize SQLite database with the product_code table."""
        if self.connection is not None:
            return

        try:
            # Autocommit mode; transaction() issues BEGIN/COMMIT itself
            self.connection = sqlite3.connect(self.db_path, isolation_level=None)
            self.connection.row_factory = sqlite3.Row
            self.connection.execute(SCHEMA)
        except sqlite3.Error as e:
            self.close()
            raise StorageError(f"Failed to open database {self.db_path}: {e}") from e

        logger.debug("Opened SQLite database %s", self.db_path)

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a SELECT against the database."""
        if not self.connection:
            self.initialize()

        logger.debug("query: %s %r", sql, tuple(params))
        try:
            cursor = self.connection.execute(sql, tuple(params))
            return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StorageError(f"Query failed: {e}") from e

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT/UPDATE against the database."""
        if not self.connection:
            self.initialize()

        logger.debug("execute: %s %r", sql, tuple(params))
        try:
            cursor = self.connection.execute(sql, tuple(params))
            return cursor.rowcount
        except sqlite3.Error as e:
            raise StorageError(f"Statement failed: {e}") from e

    @contextmanager
    def transaction(self) -> Iterator["SQLiteStorage"]:
        """
        Run the enclosed statements in a single write transaction.

        BEGIN IMMEDIATE takes the write lock up front, so a read followed by
        a write inside the block cannot interleave with another writer.
        Nested calls join the outer transaction.
        """
        if not self.connection:
            self.initialize()

        if self._in_transaction:
            yield self
            return

        self._run_control("BEGIN IMMEDIATE")
        self._in_transaction = True
        try:
            yield self
        except BaseException:
            self._in_transaction = False
            self._run_control("ROLLBACK")
            raise
        self._in_transaction = False
        self._run_control("COMMIT")

    def _run_control(self, statement: str) -> None:
        try:
            self.connection.execute(statement)
        except sqlite3.Error as e:
            raise StorageError(f"{statement} failed: {e}") from e

    def close(self) -> None:
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None
            logger.debug("Closed SQLite database %s", self.db_path)


class InMemoryStorage(SQLiteStorage):
    """In-memory SQLite storage backend for testing."""

    def __init__(self):
        super().__init__(":memory:")
