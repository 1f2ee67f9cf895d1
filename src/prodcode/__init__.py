"""
Product code data access

Maps the product_code table onto a ProductCode entity that knows how to
insert or update itself, with sync (sqlite3) and async (aiosqlite) storage.
"""

from .product_code import ProductCode
from .storage import StorageBackend, SQLiteStorage, InMemoryStorage
from .async_storage import AsyncStorageBackend, AsyncSQLiteStorage, AsyncInMemoryStorage
from .config import DatabaseConfig, load_config, connect
from .exceptions import StorageError, ConfigurationError

__version__ = "0.1.0"
__all__ = [
    "ProductCode",
    "StorageBackend",
    "SQLiteStorage",
    "InMemoryStorage",
    "AsyncStorageBackend",
    "AsyncSQLiteStorage",
    "AsyncInMemoryStorage",
    "DatabaseConfig",
    "load_config",
    "connect",
    "StorageError",
    "ConfigurationError",
]
