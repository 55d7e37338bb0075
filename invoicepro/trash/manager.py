"""
Trash Lifecycle Manager

Moves records between the active set and the trash, and removes them
for good.

Per-record state machine:

    ACTIVE --move_to_trash--> TRASHED --restore_from_trash--> ACTIVE
                              TRASHED --permanent_delete----> PURGED (terminal)

DESIGN DECISION: Lookups by id are scoped to the collection, not to a
user. Callers check ownership before calling. Every mutation is one
load-mutate-save under the store lock and reports the save result;
"not found" is an ordinary False, not an exception.

permanent_delete() is irreversible. Confirmation is the caller's job.
"""

from typing import Optional, Union

import structlog
from pydantic import BaseModel, Field

from invoicepro.audit.activity_log import ActivityLog
from invoicepro.models.activity import Activity, ActivityBuilder
from invoicepro.models.document import Document, UnknownCollectionError
from invoicepro.models.records import (
    TRASH_VIEW_COLLECTIONS,
    CollectionName,
    TrashableRecord,
)
from invoicepro.services.storage import DocumentStore


class EmptyTrashResult(BaseModel):
    """
    Outcome of emptying one collection's trash.
    
    Emptying is a sequence of independent permanent deletes, not one
    transaction: ``deleted`` counts exactly the deletes that succeeded
    and ``failed_ids`` lists the records still in the trash.
    """
    
    collection: str
    requested: int = Field(..., ge=0)
    deleted: int = Field(..., ge=0)
    failed_ids: list[str] = Field(default_factory=list)
    
    @property
    def fully_emptied(self) -> bool:
        return self.deleted == self.requested


def _collection_label(collection_name: Union[str, CollectionName]) -> str:
    if isinstance(collection_name, CollectionName):
        return collection_name.value
    return str(collection_name)


class TrashManager:
    """Soft delete, restore and purge for the record collections."""
    
    def __init__(
        self,
        store: DocumentStore,
        activity_log: Optional[ActivityLog] = None,
    ):
        """
        Args:
            store: Document store holding the collections
            activity_log: If given, successful operations are recorded
                          in the activity feed of the record's owner
        """
        self._store = store
        self._activity_log = activity_log
        self._logger = structlog.get_logger(__name__)
    
    # =========================================================================
    # STATE TRANSITIONS
    # =========================================================================
    
    def move_to_trash(
        self,
        collection_name: Union[str, CollectionName],
        record_id: str,
    ) -> bool:
        """
        Soft-delete a record: set isDeleted and stamp deletedAt.
        
        Trashing an already-trashed record re-stamps deletedAt.
        
        Returns:
            The save result; False if the collection or record is missing
        """
        label = _collection_label(collection_name)
        with self._store.locked():
            document = self._load_document(label)
            records = self._get_records(document, collection_name)
            if records is None:
                return False
            
            record = self._find(records, record_id)
            if record is None:
                self._log_not_found("move_to_trash", label, record_id)
                return False
            
            record.mark_deleted(self._store.now())
            saved = self._store.save(document)
        
        if saved:
            self._logger.info("record_trashed", collection=label, record_id=record_id)
            self._record_activity(ActivityBuilder.item_trashed(record.user_id, label, record_id))
        return saved
    
    def restore_from_trash(
        self,
        collection_name: Union[str, CollectionName],
        record_id: str,
    ) -> bool:
        """
        Return a record to the active set.
        
        Both isDeleted and deletedAt are removed from the record, not
        just reset.
        
        Returns:
            The save result; False if the collection or record is missing
        """
        label = _collection_label(collection_name)
        with self._store.locked():
            document = self._load_document(label)
            records = self._get_records(document, collection_name)
            if records is None:
                return False
            
            record = self._find(records, record_id)
            if record is None:
                self._log_not_found("restore_from_trash", label, record_id)
                return False
            
            record.clear_deleted()
            saved = self._store.save(document)
        
        if saved:
            self._logger.info("record_restored", collection=label, record_id=record_id)
            self._record_activity(ActivityBuilder.item_restored(record.user_id, label, record_id))
        return saved
    
    def permanent_delete(
        self,
        collection_name: Union[str, CollectionName],
        record_id: str,
    ) -> bool:
        """
        Remove a record from its collection. Irreversible.
        
        The remaining records keep their relative order.
        
        Returns:
            The save result; False if the collection or record is missing
        """
        removed = self._purge(collection_name, record_id)
        if removed is None:
            return False
        
        self._record_activity(
            ActivityBuilder.item_purged(
                removed.user_id, _collection_label(collection_name), record_id
            )
        )
        return True
    
    def empty_trash(
        self,
        user_id: str,
        collection_name: Union[str, CollectionName],
    ) -> EmptyTrashResult:
        """
        Permanently delete every trashed record of a user in a collection.
        
        Each record is purged with its own load-mutate-save. A failure
        part way leaves the remaining records in the trash.
        """
        label = _collection_label(collection_name)
        items = self.get_trash_items(user_id, collection_name)
        
        deleted = 0
        failed_ids = []
        for item in items:
            if self._purge(collection_name, item.id) is not None:
                deleted += 1
            else:
                failed_ids.append(item.id)
        
        result = EmptyTrashResult(
            collection=label,
            requested=len(items),
            deleted=deleted,
            failed_ids=failed_ids,
        )
        
        if failed_ids:
            self._logger.warning(
                "trash_partially_emptied",
                collection=label,
                user_id=user_id,
                deleted=deleted,
                failed_ids=failed_ids,
            )
        if deleted:
            self._record_activity(ActivityBuilder.trash_emptied(user_id, label, deleted))
        return result
    
    # =========================================================================
    # TRASH QUERIES
    # =========================================================================
    
    def get_trash_items(
        self,
        user_id: str,
        collection_name: Union[str, CollectionName],
    ) -> list[TrashableRecord]:
        """Trashed records (isDeleted is exactly True) owned by a user."""
        label = _collection_label(collection_name)
        document = self._load_document(label)
        records = self._get_records(document, collection_name)
        if records is None:
            return []
        
        return [
            record for record in records
            if record.owned_by(user_id) and record.is_trashed
        ]
    
    def get_trash_counts(self, user_id: str) -> dict[str, int]:
        """Number of trashed records per trash-view collection."""
        counts = {collection.value: 0 for collection in TRASH_VIEW_COLLECTIONS}
        document = self._load_document("trash_view")
        if document is None:
            return counts
        
        for collection in TRASH_VIEW_COLLECTIONS:
            counts[collection.value] = sum(
                1 for record in document.get_collection(collection)
                if record.owned_by(user_id) and record.is_trashed
            )
        return counts
    
    # =========================================================================
    # HELPERS
    # =========================================================================
    
    def _purge(
        self,
        collection_name: Union[str, CollectionName],
        record_id: str,
    ) -> Optional[TrashableRecord]:
        label = _collection_label(collection_name)
        with self._store.locked():
            document = self._load_document(label)
            records = self._get_records(document, collection_name)
            if records is None:
                return None
            
            index = next(
                (i for i, record in enumerate(records) if record.id == record_id),
                None,
            )
            if index is None:
                self._log_not_found("permanent_delete", label, record_id)
                return None
            
            removed = records.pop(index)
            if not self._store.save(document):
                return None
        
        self._logger.info("record_purged", collection=label, record_id=record_id)
        return removed
    
    def _load_document(self, label: str) -> Optional[Document]:
        document = self._store.load()
        if document is None:
            self._logger.error("document_unavailable", collection=label)
        return document
    
    def _get_records(
        self,
        document: Optional[Document],
        collection_name: Union[str, CollectionName],
    ) -> Optional[list[TrashableRecord]]:
        if document is None:
            return None
        try:
            return document.get_collection(collection_name)
        except UnknownCollectionError as e:
            self._logger.error("collection_not_found", collection=e.collection_name)
            return None
    
    @staticmethod
    def _find(records: list[TrashableRecord], record_id: str) -> Optional[TrashableRecord]:
        for record in records:
            if record.id == record_id:
                return record
        return None
    
    def _log_not_found(self, operation: str, label: str, record_id: str) -> None:
        self._logger.info(
            "record_not_found",
            operation=operation,
            collection=label,
            record_id=record_id,
        )
    
    def _record_activity(self, activity: Activity) -> None:
        if self._activity_log is not None:
            self._activity_log.add_activity(activity)
