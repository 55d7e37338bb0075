"""
Activity Models for InvoicePro

The activity feed is an advisory, bounded, newest-first trail of what
the user did (logins, records added, items trashed...). Dashboards read
it; nothing in the data layer depends on it for correctness.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from invoicepro.models.base import DocumentModel


class ActivityType(str, Enum):
    """Activity types written by InvoicePro itself."""
    # Session
    USER_LOGIN = "user_login"
    USER_LOGOUT = "user_logout"
    
    # Records
    CLIENT_ADDED = "client_added"
    CLIENT_UPDATED = "client_updated"
    PRODUCT_ADDED = "product_added"
    PRODUCT_UPDATED = "product_updated"
    INVOICE_CREATED = "invoice_created"
    
    # Trash
    PRODUCT_TRASHED = "product_trashed"
    ITEM_TRASHED = "item_trashed"
    ITEM_RESTORED = "item_restored"
    ITEM_PURGED = "item_purged"
    TRASH_EMPTIED = "trash_emptied"


class Activity(DocumentModel):
    """
    A single activity entry.
    
    ``type`` is a plain string so entries written by other front-ends
    (or older versions) still load; ActivityType lists the ones this
    package emits.
    """
    
    id: Optional[str] = Field(
        default=None,
        description="Generated when the entry is appended"
    )
    user_id: Optional[str] = Field(
        default=None,
        alias="userId",
    )
    type: Optional[str] = Field(
        default=None,
        description="Activity type, see ActivityType; required for new entries"
    )
    title: Optional[str] = None
    description: Optional[str] = None
    timestamp: Optional[datetime] = Field(
        default=None,
        description="Stamped when the entry is appended"
    )
    metadata: Optional[dict[str, Any]] = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Store ActivityType members as their plain string value."""
        if isinstance(v, ActivityType):
            return v.value
        return v


class ActivityBuilder:
    """
    Helper class to build activities with common patterns.
    
    Usage:
        activity = ActivityBuilder.user_login("USR-1001", "Demo User")
        activity = ActivityBuilder.item_restored("USR-1001", "clients", "CLT-1")
    """
    
    @staticmethod
    def user_login(user_id: str, user_name: str, login_method: str = "email") -> Activity:
        return Activity(
            user_id=user_id,
            type=ActivityType.USER_LOGIN.value,
            title="User Login",
            description=f"{user_name} logged in successfully",
            metadata={"loginMethod": login_method},
        )
    
    @staticmethod
    def user_logout(user_id: str, user_name: str) -> Activity:
        return Activity(
            user_id=user_id,
            type=ActivityType.USER_LOGOUT.value,
            title="User Logout",
            description=f"{user_name} logged out",
            metadata={},
        )
    
    @staticmethod
    def client_added(user_id: str, client_name: str) -> Activity:
        return Activity(
            user_id=user_id,
            type=ActivityType.CLIENT_ADDED.value,
            title="New Client",
            description=f"Added: {client_name}",
        )
    
    @staticmethod
    def product_trashed(user_id: str) -> Activity:
        return Activity(
            user_id=user_id,
            type=ActivityType.PRODUCT_TRASHED.value,
            title="Product Trashed",
            description="Moved product to trash",
        )
    
    @staticmethod
    def item_trashed(user_id: Optional[str], collection: str, record_id: str) -> Activity:
        return Activity(
            user_id=user_id,
            type=ActivityType.ITEM_TRASHED.value,
            title="Item Trashed",
            description=f"Moved item to trash from {collection}",
            metadata={"collection": collection, "recordId": record_id},
        )
    
    @staticmethod
    def item_restored(user_id: Optional[str], collection: str, record_id: str) -> Activity:
        return Activity(
            user_id=user_id,
            type=ActivityType.ITEM_RESTORED.value,
            title="Item Restored",
            description=f"Restored item from {collection}",
            metadata={"collection": collection, "recordId": record_id},
        )
    
    @staticmethod
    def item_purged(user_id: Optional[str], collection: str, record_id: str) -> Activity:
        return Activity(
            user_id=user_id,
            type=ActivityType.ITEM_PURGED.value,
            title="Item Deleted",
            description=f"Permanently deleted item from {collection}",
            metadata={"collection": collection, "recordId": record_id},
        )
    
    @staticmethod
    def trash_emptied(user_id: str, collection: str, deleted_count: int) -> Activity:
        return Activity(
            user_id=user_id,
            type=ActivityType.TRASH_EMPTIED.value,
            title="Trash Emptied",
            description=f"{deleted_count} items deleted permanently from {collection}",
            metadata={"collection": collection, "deletedCount": deleted_count},
        )
