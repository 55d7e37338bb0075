"""Tests for the Document Store and the storage backends."""

import json

import pytest

from invoicepro.models import ClientRecord
from invoicepro.services.storage import (
    DEFAULT_DOCUMENT_KEY,
    DocumentState,
    DocumentStore,
    InMemoryStorage,
    JsonFileStorage,
    QuotaExceededError,
)


class TestLoad:
    """Tests for DocumentStore.load()."""

    def test_first_load_seeds_and_persists(self, store, storage, stored):
        """Test that an empty slot is initialized with the seed document."""
        assert store.inspect() == DocumentState.MISSING

        document = store.load()

        assert document is not None
        assert document.users[0].email == "demo@invoice.com"
        assert store.inspect() == DocumentState.READY
        assert stored()["users"][0]["id"] == "USR-1001"
        assert storage.write_count == 1

    def test_second_load_does_not_reseed(self, store, storage):
        """Test that an existing document is read, not re-initialized."""
        store.load()
        store.load()
        assert storage.write_count == 1

    def test_each_load_returns_a_fresh_copy(self, store, seed):
        """Test there is no shared mutable cache between loads."""
        seed(clients=[{"id": "C1", "userId": "U1"}])

        first = store.load()
        first.clients.clear()

        assert [c.id for c in store.load().clients] == ["C1"]

    def test_mutations_are_not_persisted_without_save(self, store, seed, stored):
        """Test there is no auto-persist."""
        seed(clients=[{"id": "C1", "userId": "U1"}])
        document = store.load()
        document.clients.append(ClientRecord(id="C2", user_id="U1"))

        assert [c["id"] for c in stored()["clients"]] == ["C1"]

    def test_invalid_json_returns_none_and_keeps_data(self, store, storage):
        """Test unreadable data is reported and never overwritten by a seed."""
        storage.set_item(DEFAULT_DOCUMENT_KEY, "{not json")

        assert store.load() is None
        assert store.inspect() == DocumentState.CORRUPT
        assert storage.get_item(DEFAULT_DOCUMENT_KEY) == "{not json"

    def test_schema_mismatch_is_corrupt(self, store, storage):
        """Test a collection that is not a list makes the document unreadable."""
        storage.set_item(DEFAULT_DOCUMENT_KEY, json.dumps({"clients": "C1"}))

        assert store.load() is None
        assert store.inspect() == DocumentState.CORRUPT

    def test_ownerless_record_loads(self, store, storage):
        """Test a legacy record without userId does not make the document unreadable."""
        storage.set_item(DEFAULT_DOCUMENT_KEY, json.dumps({
            "clients": [{"id": "CLI-1", "userId": "U1"}, {"id": "cli_2", "name": "Walk-in"}],
        }))

        document = store.load()

        assert document is not None
        assert [c.id for c in document.clients] == ["CLI-1", "cli_2"]
        assert store.inspect() == DocumentState.READY

    def test_seed_returned_even_if_it_cannot_be_persisted(self, clock):
        """Test load() on a full store still hands back a usable document."""
        storage = InMemoryStorage(quota_bytes=50)
        store = DocumentStore(storage, clock=clock)

        document = store.load()

        assert document is not None
        assert document.version == "3.1.0"
        assert store.inspect() == DocumentState.MISSING

    def test_seed_without_demo_user(self, storage, clock):
        """Test the seed_demo_user switch."""
        store = DocumentStore(storage, clock=clock, seed_demo_user=False)
        assert store.load().users == []


class TestSave:
    """Tests for DocumentStore.save()."""

    def test_save_stamps_last_updated(self, store, seed, stored, clock):
        """Test save() sets lastUpdated to the current time."""
        seed()
        document = store.load()

        assert store.save(document) is True
        assert stored()["lastUpdated"].startswith("2026-01-01T00:00:00")
        assert document.last_updated.year == 2026

    def test_save_replaces_whole_document(self, store, seed, stored):
        """Test last write wins at document granularity."""
        seed(clients=[{"id": "C1", "userId": "U1"}])
        first = store.load()
        second = store.load()

        first.clients.append(ClientRecord(id="C2", user_id="U1"))
        store.save(first)
        second.clients.append(ClientRecord(id="C3", user_id="U1"))
        store.save(second)

        assert [c["id"] for c in stored()["clients"]] == ["C1", "C3"]

    def test_save_none_returns_false(self, store):
        """Test saving a failed load is refused."""
        assert store.save(None) is False

    def test_quota_exceeded_returns_false(self, clock):
        """Test a document larger than the quota is not written."""
        storage = InMemoryStorage(quota_bytes=2048)
        store = DocumentStore(storage, clock=clock)
        document = store.load()
        document.clients.append(
            ClientRecord(id="C1", user_id="U1", logo="x" * 4096)
        )

        assert store.save(document) is False
        assert len(store.load().clients) == 0

    def test_save_preserves_unknown_top_level_keys(self, store, storage, stored):
        """Test that keys outside the model survive a load/save cycle."""
        storage.set_item(DEFAULT_DOCUMENT_KEY, json.dumps({
            "version": "3.1.0",
            "clients": [],
            "drafts": [{"id": "D1"}],
        }))

        store.save(store.load())

        assert stored()["drafts"] == [{"id": "D1"}]


class TestReset:
    """Tests for DocumentStore.reset()."""

    def test_reset_clears_and_next_load_reseeds(self, store, storage, seed):
        """Test reset wipes the slot and load() starts over."""
        seed(clients=[{"id": "C1", "userId": "U1"}])

        assert store.reset() is True
        assert DEFAULT_DOCUMENT_KEY not in storage
        assert store.load().clients == []


class TestLocking:
    """Tests for the writer lock."""

    def test_locked_is_reentrant(self, store):
        """Test nested locked() blocks do not deadlock."""
        with store.locked():
            with store.locked():
                document = store.load()
                assert store.save(document) is True


class TestStorageBackends:
    """Tests for the key-value backends."""

    def test_in_memory_quota(self):
        """Test InMemoryStorage enforces its quota in UTF-8 bytes."""
        storage = InMemoryStorage(quota_bytes=4)
        storage.set_item("k", "abcd")
        with pytest.raises(QuotaExceededError):
            storage.set_item("k", "৳৳")
        assert storage.get_item("k") == "abcd"

    def test_file_storage_round_trip(self, tmp_path):
        """Test JsonFileStorage stores one file per key."""
        storage = JsonFileStorage(tmp_path / "data")

        assert storage.get_item("InvoiceProDB") is None
        storage.set_item("InvoiceProDB", '{"a": "৳"}')

        assert storage.get_item("InvoiceProDB") == '{"a": "৳"}'
        assert (tmp_path / "data" / "InvoiceProDB.json").exists()
        assert list((tmp_path / "data").glob(".*.tmp")) == []

        storage.remove_item("InvoiceProDB")
        storage.remove_item("InvoiceProDB")
        assert storage.get_item("InvoiceProDB") is None

    def test_file_storage_quota(self, tmp_path):
        """Test an oversized write leaves the previous file intact."""
        storage = JsonFileStorage(tmp_path, quota_bytes=10)
        storage.set_item("db", "small")
        with pytest.raises(QuotaExceededError):
            storage.set_item("db", "x" * 11)
        assert storage.get_item("db") == "small"

    def test_document_persists_across_store_instances(self, tmp_path, clock):
        """Test the file backend survives a restart."""
        first = DocumentStore(JsonFileStorage(tmp_path), clock=clock)
        document = first.load()
        document.clients.append(ClientRecord(id="C1", user_id="U1", name="Acme"))
        assert first.save(document) is True

        second = DocumentStore(JsonFileStorage(tmp_path), clock=clock)
        clients = second.load().clients

        assert [(c.id, c.name) for c in clients] == [("C1", "Acme")]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
