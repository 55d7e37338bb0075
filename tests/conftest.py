"""Shared fixtures: in-memory storage, a ticking clock and seeding helpers."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from invoicepro.audit import ActivityLog
from invoicepro.queries import CollectionAccessor
from invoicepro.services.storage import (
    DEFAULT_DOCUMENT_KEY,
    DocumentStore,
    InMemoryStorage,
    StorageError,
)
from invoicepro.trash import TrashManager


class TickingClock:
    """Returns a strictly increasing UTC time, one second per call."""
    
    def __init__(self, start: datetime = datetime(2026, 1, 1, tzinfo=timezone.utc)):
        self._current = start
    
    def __call__(self) -> datetime:
        value = self._current
        self._current += timedelta(seconds=1)
        return value


class FlakyStorage(InMemoryStorage):
    """In-memory storage that can be told to fail chosen writes."""
    
    def __init__(self, quota_bytes=None):
        super().__init__(quota_bytes=quota_bytes)
        self.write_count = 0
        self.fail_on_writes: set[int] = set()
    
    def set_item(self, key: str, value: str) -> None:
        self.write_count += 1
        if self.write_count in self.fail_on_writes:
            raise StorageError(f"simulated failure on write {self.write_count}")
        super().set_item(key, value)
    
    def fail_next_writes(self, *offsets: int) -> None:
        """Fail the n-th upcoming writes, e.g. fail_next_writes(2) fails the second one."""
        self.fail_on_writes = {self.write_count + offset for offset in offsets}


def make_document(**collections) -> dict:
    document = {
        "version": "3.1.0",
        "lastUpdated": "2026-01-01T00:00:00.000Z",
        "users": [],
        "clients": [],
        "invoices": [],
        "products": [],
        "categories": [],
        "activities": [],
        "settings": {"appName": "InvoicePro"},
    }
    document.update(collections)
    return document


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def storage():
    return FlakyStorage()


@pytest.fixture
def store(storage, clock):
    return DocumentStore(storage, clock=clock)


@pytest.fixture
def seed(storage):
    """Write a raw document straight into the slot."""
    def _seed(**collections) -> dict:
        document = make_document(**collections)
        storage.set_item(DEFAULT_DOCUMENT_KEY, json.dumps(document))
        return document
    return _seed


@pytest.fixture
def stored(storage):
    """Read back the raw stored document as a dict."""
    def _stored() -> dict:
        return json.loads(storage.get_item(DEFAULT_DOCUMENT_KEY))
    return _stored


@pytest.fixture
def accessor(store):
    return CollectionAccessor(store)


@pytest.fixture
def activity_log(store):
    return ActivityLog(store)


@pytest.fixture
def trash(store):
    return TrashManager(store)
