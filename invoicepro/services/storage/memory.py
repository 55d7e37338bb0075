"""In-memory key-value storage, used by tests and the ``memory`` backend."""

from typing import Optional

from invoicepro.services.storage.interface import (
    KeyValueStorageInterface,
    check_quota,
)


class InMemoryStorage(KeyValueStorageInterface):
    """
    Dict-backed storage.
    
    Values are kept as strings, so every read hands out a fresh copy
    once it is deserialized.
    """
    
    def __init__(self, quota_bytes: Optional[int] = None):
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes
    
    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)
    
    def set_item(self, key: str, value: str) -> None:
        check_quota(value, self._quota_bytes)
        self._items[key] = value
    
    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
    
    def __contains__(self, key: str) -> bool:
        return key in self._items
