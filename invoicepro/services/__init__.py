"""Services package."""

from invoicepro.services.storage import (
    DEFAULT_DOCUMENT_KEY,
    DocumentState,
    DocumentStore,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    QuotaExceededError,
    StorageError,
    StorageReadError,
)
from invoicepro.services.users import UserCreationResult, UserDirectory

__all__ = [
    # Storage services
    "DEFAULT_DOCUMENT_KEY",
    "DocumentState",
    "DocumentStore",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "QuotaExceededError",
    "StorageError",
    "StorageReadError",
    # Users
    "UserCreationResult",
    "UserDirectory",
]
