"""
Abstract Key-Value Storage Interface

DESIGN DECISION: The document lives in a single named slot of a plain
key-value store, the way a browser keeps it in localStorage. Backends
only move opaque strings; parsing and validation happen in
DocumentStore. This allows us to:
1. Keep the document on disk for real use
2. Use in-memory storage for testing
3. Simulate quota and write failures without touching a filesystem
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for the persisted slot.
    
    Any storage implementation must implement these methods.
    """
    
    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.
        
        Args:
            key: Slot name
            
        Returns:
            The stored string, or None if the slot is empty
            
        Raises:
            StorageReadError: If the slot exists but cannot be read
        """
        pass
    
    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Replace the value stored under a key.
        
        Args:
            key: Slot name
            value: Serialized document
            
        Raises:
            QuotaExceededError: If the value does not fit
            StorageError: If the write fails
        """
        pass
    
    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Clear a slot. Clearing an empty slot is not an error.
        
        Raises:
            StorageError: If the slot cannot be cleared
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """A stored value exists but could not be read back."""
    pass


class QuotaExceededError(StorageError):
    """The value is larger than the backend allows."""
    
    def __init__(self, size: int, quota: int):
        super().__init__(f"Value of {size} bytes exceeds quota of {quota} bytes")
        self.size = size
        self.quota = quota


def check_quota(value: str, quota: Optional[int]) -> None:
    """Raise QuotaExceededError if the UTF-8 encoded value exceeds quota."""
    if quota is None:
        return
    size = len(value.encode("utf-8"))
    if size > quota:
        raise QuotaExceededError(size, quota)
