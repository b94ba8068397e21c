"""
Storage error hierarchy shared by the persistence and object storage gateways.
"""


class StorageError(Exception):
    """Base exception for storage failures (database or object store)."""


class PersistenceError(StorageError):
    """Raised when the database is unreachable or rejects an operation."""


class ObjectStorageError(StorageError):
    """Raised when an object store upload or lookup fails."""
