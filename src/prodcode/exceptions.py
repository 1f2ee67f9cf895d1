"""
Custom exceptions for the product code data-access layer.
"""


class StorageError(Exception):
    """Base exception for all storage-related errors."""
    pass


class ConfigurationError(StorageError):
    """Exception raised when connection settings cannot be loaded."""
    pass
