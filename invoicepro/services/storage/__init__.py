"""
Storage Services Package

Provides the key-value storage interface, its file and in-memory
implementations, and the DocumentStore built on top of them.
"""

from invoicepro.services.storage.interface import (
    KeyValueStorageInterface,
    QuotaExceededError,
    StorageError,
    StorageReadError,
)
from invoicepro.services.storage.memory import InMemoryStorage
from invoicepro.services.storage.file_storage import JsonFileStorage
from invoicepro.services.storage.document_store import (
    DEFAULT_DOCUMENT_KEY,
    DocumentState,
    DocumentStore,
)

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "QuotaExceededError",
    "StorageError",
    "StorageReadError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
    # Document store
    "DEFAULT_DOCUMENT_KEY",
    "DocumentState",
    "DocumentStore",
]
