"""
Connection settings for the product code database.

Settings live in a properties-style key-value file:

    url=sqlite:///sample.db
    user=app
    password=app

PRODCODE_URL, PRODCODE_USER and PRODCODE_PASSWORD in the environment take
precedence over the file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values

from .exceptions import ConfigurationError
from .storage import SQLiteStorage

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "db.properties"
SQLITE_PREFIX = "sqlite:///"


@dataclass(frozen=True)
class DatabaseConfig:
    url: str
    user: Optional[str] = None
    password: Optional[str] = None

    def __repr__(self) -> str:
        return f"DatabaseConfig(url={self.url!r}, user={self.user!r}, password='***')"


def _getenv(name: str) -> Optional[str]:
    v = os.getenv(name)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def load_config(path: Optional[Union[str, Path]] = None) -> DatabaseConfig:
    """
    Load connection settings.

    Args:
        path: Properties file to read. Defaults to $PRODCODE_CONFIG, then
              db.properties in the working directory.

    Raises:
        ConfigurationError: If the file does not exist or no url is set
    """
    path = Path(path or _getenv("PRODCODE_CONFIG") or DEFAULT_CONFIG_PATH)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    values = dotenv_values(path)
    url = _getenv("PRODCODE_URL") or values.get("url")
    if not url:
        raise ConfigurationError(f"No 'url' set in {path}")

    config = DatabaseConfig(
        url=url,
        user=_getenv("PRODCODE_USER") or values.get("user"),
        password=_getenv("PRODCODE_PASSWORD") or values.get("password"),
    )
    logger.debug("Loaded %r from %s", config, path)
    return config


def database_path(url: str) -> str:
    """
    Resolve a connection URL to an SQLite database path.

    sqlite:///sample.db is relative, sqlite:////var/db/sample.db absolute,
    and sqlite:///:memory: in-memory. A URL without a scheme is taken as
    a plain file path.
    """
    if url.startswith(SQLITE_PREFIX):
        db_path = url[len(SQLITE_PREFIX):]
        if not db_path:
            raise ConfigurationError(f"No database path in url: {url}")
        return db_path
    if "://" in url or url.startswith("jdbc:"):
        raise ConfigurationError(f"Unsupported database url: {url}")
    return url


def connect(config: DatabaseConfig) -> SQLiteStorage:
    """
    Create a storage backend for the configured database.

    The connection itself opens lazily, or on entering the returned
    storage as a context manager.
    """
    if config.user or config.password:
        logger.debug("SQLite ignores credentials for user %s", config.user)
    return SQLiteStorage(database_path(config.url))
