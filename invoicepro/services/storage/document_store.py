"""
Document Store

Loads and saves the single InvoicePro document from one key-value slot.

DESIGN DECISION: No caching. Every load() returns a fresh
deserialization; callers mutate their own copy and must call save()
explicitly. save() replaces the whole slot, so two callers that
load/mutate/save independently lose updates (last write wins). Code in
this package wraps each load-mutate-save sequence in locked(), which
serializes writers inside one process.

"No data yet" and "unreadable data" are different states:
- an empty slot is seeded with the default document
- unreadable data is reported (load() returns None, inspect() says
  CORRUPT) and left in place, never overwritten by a fresh seed
"""

import threading
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional

import structlog
from pydantic import ValidationError

from invoicepro.models.base import Clock, utc_now
from invoicepro.models.document import Document, default_document
from invoicepro.services.storage.interface import (
    KeyValueStorageInterface,
    QuotaExceededError,
    StorageError,
)


DEFAULT_DOCUMENT_KEY = "InvoiceProDB"


class DocumentState(str, Enum):
    """What the persisted slot currently holds."""
    MISSING = "missing"   # Nothing stored yet; load() will seed it
    READY = "ready"       # A valid document
    CORRUPT = "corrupt"   # Something is stored but cannot be read as a document


class DocumentStore:
    """
    Durable load/save of the InvoicePro document.
    
    Usage:
        store = DocumentStore(JsonFileStorage(".invoicepro"))
        with store.locked():
            document = store.load()
            document.clients.append(...)
            store.save(document)
    """
    
    def __init__(
        self,
        storage: KeyValueStorageInterface,
        document_key: str = DEFAULT_DOCUMENT_KEY,
        clock: Optional[Clock] = None,
        seed_demo_user: bool = True,
    ):
        """
        Args:
            storage: Backend holding the slot
            document_key: Name of the slot
            clock: Source of timestamps (defaults to UTC now)
            seed_demo_user: Include the demo user in a freshly seeded document
        """
        self._storage = storage
        self._key = document_key
        self._clock = clock or utc_now
        self._seed_demo_user = seed_demo_user
        self._lock = threading.RLock()
        self._logger = structlog.get_logger(__name__)
    
    @property
    def document_key(self) -> str:
        return self._key
    
    def now(self) -> datetime:
        """Current time from the store's clock."""
        return self._clock()
    
    @contextmanager
    def locked(self) -> Iterator["DocumentStore"]:
        """Hold the writer lock for a load-mutate-save sequence (re-entrant)."""
        with self._lock:
            yield self
    
    def inspect(self) -> DocumentState:
        """Report what the slot holds without seeding or repairing it."""
        try:
            raw = self._storage.get_item(self._key)
        except StorageError:
            return DocumentState.CORRUPT
        if raw is None:
            return DocumentState.MISSING
        try:
            Document.model_validate_json(raw)
        except ValidationError:
            return DocumentState.CORRUPT
        return DocumentState.READY
    
    def load(self) -> Optional[Document]:
        """
        Load the document.
        
        Returns:
            A fresh Document; the seed document if the slot was empty;
            None if the stored data cannot be read
        """
        with self._lock:
            try:
                raw = self._storage.get_item(self._key)
            except StorageError as e:
                self._logger.error(
                    "document_unreadable",
                    key=self._key,
                    error=str(e),
                )
                return None
            
            if raw is None:
                return self._initialize()
            
            try:
                return Document.model_validate_json(raw)
            except ValidationError as e:
                self._logger.error(
                    "document_unreadable",
                    key=self._key,
                    error_count=e.error_count(),
                    error=str(e),
                )
                return None
    
    def save(self, document: Optional[Document]) -> bool:
        """
        Stamp lastUpdated and replace the stored document.
        
        Returns:
            True on success, False on any serialization or storage failure
        """
        if document is None:
            return False
        
        with self._lock:
            document.last_updated = self.now()
            try:
                payload = document.model_dump_json(by_alias=True)
            except ValueError as e:
                self._logger.error(
                    "document_serialization_failed",
                    key=self._key,
                    error=str(e),
                )
                return False
            
            try:
                self._storage.set_item(self._key, payload)
            except StorageError as e:
                self._logger.error(
                    "document_save_failed",
                    key=self._key,
                    error=str(e),
                    quota_exceeded=isinstance(e, QuotaExceededError),
                )
                return False
            
            self._logger.debug("document_saved", key=self._key, size=len(payload))
            return True
    
    def reset(self) -> bool:
        """Clear the slot wholesale. The next load() seeds a fresh document."""
        with self._lock:
            try:
                self._storage.remove_item(self._key)
            except StorageError as e:
                self._logger.error("document_reset_failed", key=self._key, error=str(e))
                return False
            self._logger.info("document_reset", key=self._key)
            return True
    
    def _initialize(self) -> Document:
        document = default_document(self.now(), seed_demo_user=self._seed_demo_user)
        if self.save(document):
            self._logger.info("document_initialized", key=self._key)
        else:
            self._logger.warning("document_initialization_not_persisted", key=self._key)
        return document
