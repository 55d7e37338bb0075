"""
Collection Accessor

User-scoped, trash-aware reads over the record collections.

GUARANTEES:
- Only records owned by the requested user are returned
- A record with isDeleted == True is never returned
- Records come back in stored (insertion) order

Anything that aggregates records (dashboard counts, exports) reads
through get_user_collection() so trashed records stay invisible without
each consumer re-implementing the filter.
"""

from typing import Any, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from invoicepro.models.base import generate_id
from invoicepro.models.document import UnknownCollectionError
from invoicepro.models.records import (
    ID_PREFIXES,
    RECORD_MODELS,
    CollectionName,
    TrashableRecord,
)
from invoicepro.services.storage import DocumentStore


# Keys a caller may not set on a new record.
_TRASH_KEYS = ("isDeleted", "is_deleted", "deletedAt", "deleted_at")
_OWNER_KEYS = ("userId", "user_id")


class CollectionAccessor:
    """Reads (and creates) user-owned records."""
    
    def __init__(self, store: DocumentStore):
        self._store = store
        self._logger = structlog.get_logger(__name__)
    
    def get_user_collection(
        self,
        collection_name: Union[str, CollectionName],
        user_id: str,
    ) -> list[TrashableRecord]:
        """
        Active records of a collection owned by a user.
        
        Returns an empty list for an unknown collection or an
        unreadable document.
        """
        document = self._store.load()
        if document is None:
            return []
        
        try:
            records = document.get_collection(collection_name)
        except UnknownCollectionError as e:
            self._logger.error("collection_not_found", collection=e.collection_name)
            return []
        
        return [
            record for record in records
            if record.owned_by(user_id) and not record.is_trashed
        ]
    
    def get_user_clients(self, user_id: str) -> list[TrashableRecord]:
        return self.get_user_collection(CollectionName.CLIENTS, user_id)
    
    def get_user_invoices(self, user_id: str) -> list[TrashableRecord]:
        return self.get_user_collection(CollectionName.INVOICES, user_id)
    
    def get_user_products(self, user_id: str) -> list[TrashableRecord]:
        return self.get_user_collection(CollectionName.PRODUCTS, user_id)
    
    def add_record(
        self,
        collection_name: Union[str, CollectionName],
        user_id: str,
        fields: Mapping[str, Any],
    ) -> Optional[TrashableRecord]:
        """
        Create an active record owned by user_id.
        
        An id is generated unless fields carries one; a caller-supplied
        id already present in the collection is refused. Trash and owner
        keys in fields are ignored.
        
        Returns:
            The stored record, or None if nothing was saved
        """
        try:
            collection = CollectionName(collection_name)
        except ValueError:
            self._logger.error("collection_not_found", collection=str(collection_name))
            return None
        
        data = {
            key: value for key, value in fields.items()
            if key not in _TRASH_KEYS and key not in _OWNER_KEYS
        }
        
        with self._store.locked():
            document = self._store.load()
            if document is None:
                return None
            
            records = document.get_collection(collection)
            record_id = data.pop("id", None) or generate_id(ID_PREFIXES[collection])
            if any(record.id == record_id for record in records):
                self._logger.warning(
                    "duplicate_record_id",
                    collection=collection.value,
                    record_id=record_id,
                )
                return None
            
            data.setdefault("createdAt", self._store.now().isoformat())
            try:
                record = RECORD_MODELS[collection].model_validate(
                    {**data, "id": record_id, "userId": user_id}
                )
            except ValidationError as e:
                self._logger.warning(
                    "record_rejected",
                    collection=collection.value,
                    error=str(e),
                )
                return None
            
            records.append(record)
            if not self._store.save(document):
                return None
        
        self._logger.info(
            "record_added",
            collection=collection.value,
            record_id=record_id,
            user_id=user_id,
        )
        return record
