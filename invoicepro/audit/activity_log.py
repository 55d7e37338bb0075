"""
Activity Log

Appends entries to the document's ``activities`` list: newest first,
capped at a fixed number of entries.

DESIGN DECISION: Fire-and-forget. add_activity() never raises and
returns nothing; a failed append is logged locally and otherwise
ignored. The feed is advisory and callers must not branch on it.
"""

from typing import Any, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from invoicepro.models.activity import Activity
from invoicepro.models.base import generate_id
from invoicepro.services.storage import DocumentStore


DEFAULT_ACTIVITY_LIMIT = 100


class ActivityLog:
    """
    Bounded, reverse-chronological activity feed.
    
    Usage:
        log = ActivityLog(store)
        log.add_activity({"userId": "USR-1001", "type": "client_added",
                          "title": "New Client", "description": "Added: Acme"})
    """
    
    def __init__(
        self,
        store: DocumentStore,
        limit: int = DEFAULT_ACTIVITY_LIMIT,
    ):
        """
        Args:
            store: Document store holding the feed
            limit: Maximum number of entries kept
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._store = store
        self._limit = limit
        self._logger = structlog.get_logger(__name__)
    
    @property
    def limit(self) -> int:
        return self._limit
    
    def add_activity(self, entry: Union[Activity, Mapping[str, Any]]) -> None:
        """
        Append an entry to the feed.
        
        The entry gets a generated id and the current timestamp, replacing
        any id/timestamp the caller supplied.
        """
        try:
            if isinstance(entry, Activity):
                activity = entry.model_copy(deep=True)
            else:
                activity = Activity.model_validate(dict(entry))
        except ValidationError as e:
            self._logger.warning("activity_rejected", error=str(e))
            return
        
        if not activity.type:
            self._logger.warning("activity_rejected", error="type is required")
            return
        
        with self._store.locked():
            document = self._store.load()
            if document is None:
                self._logger.warning(
                    "activity_not_recorded",
                    type=activity.type,
                    reason="document_unreadable",
                )
                return
            
            activity.id = generate_id("ACT")
            activity.timestamp = self._store.now()
            
            document.activities.insert(0, activity)
            del document.activities[self._limit:]
            
            if not self._store.save(document):
                self._logger.warning(
                    "activity_not_recorded",
                    type=activity.type,
                    reason="save_failed",
                )
    
    def get_recent_activities(
        self,
        user_id: Optional[str] = None,
        limit: int = 20,
    ) -> list[Activity]:
        """
        Most recent entries, newest first.
        
        Args:
            user_id: Only entries for this user (all users if None)
            limit: Maximum number of entries returned
        """
        document = self._store.load()
        if document is None:
            return []
        
        activities = document.activities
        if user_id is not None:
            activities = [a for a in activities if a.user_id == user_id]
        return activities[:limit]
