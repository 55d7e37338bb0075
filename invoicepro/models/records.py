"""
Record Models for the user-scoped collections

Every record in ``clients``, ``invoices``, ``products`` and
``categories`` shares the same ownership and trash fields:

    id          unique within its collection, never reused
    userId      owning user, fixed at creation (absent on some legacy
                records, which then belong to nobody)
    isDeleted   absent = active, True = in the trash
    deletedAt   present exactly when isDeleted is True

DESIGN DECISION: The trash fields are only changed through
TrashableRecord.mark_deleted() and TrashableRecord.clear_deleted(),
which always move the pair together. A restored record carries neither
key, matching "absent = active".

Entity-specific fields (price, total, address...) are opaque to the
trash lifecycle and ride along as extras.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, StrictBool

from invoicepro.models.base import DocumentModel


# =============================================================================
# COLLECTION NAMES
# =============================================================================

class CollectionName(str, Enum):
    """
    Collections that hold user-owned, trashable records.
    
    The values are the top-level keys of the stored document.
    """
    CLIENTS = "clients"
    INVOICES = "invoices"
    PRODUCTS = "products"
    CATEGORIES = "categories"


# Collections that show up in the trash view.
TRASH_VIEW_COLLECTIONS = (
    CollectionName.CLIENTS,
    CollectionName.INVOICES,
    CollectionName.PRODUCTS,
)


# =============================================================================
# RECORD MODELS
# =============================================================================

class TrashableRecord(DocumentModel):
    """
    Common shape of a user-owned record.
    
    Subclasses add the handful of typed fields other components read;
    anything else stays an untyped extra.
    """
    
    id: str = Field(
        ...,
        min_length=1,
        description="Unique id within the collection"
    )
    user_id: Optional[str] = Field(
        default=None,
        alias="userId",
        description="Owning user's id; legacy records may have none and match no user"
    )
    
    # Trash state
    is_deleted: Optional[StrictBool] = Field(
        default=None,
        alias="isDeleted",
        description="True while the record sits in the trash"
    )
    deleted_at: Optional[datetime] = Field(
        default=None,
        alias="deletedAt",
        description="When the record was moved to the trash"
    )
    
    @property
    def is_trashed(self) -> bool:
        """Strict check: only an explicit True counts as trashed."""
        return self.is_deleted is True
    
    def owned_by(self, user_id: Optional[str]) -> bool:
        """True if user_id owns this record. Ownerless records match nobody."""
        return self.user_id is not None and self.user_id == user_id
    
    def mark_deleted(self, at: datetime) -> None:
        """Move to the trash. Re-stamps deleted_at if already trashed."""
        self.is_deleted = True
        self.deleted_at = at
    
    def clear_deleted(self) -> None:
        """Restore from the trash, removing both trash fields."""
        self.is_deleted = None
        self.deleted_at = None
        self.model_fields_set.discard("is_deleted")
        self.model_fields_set.discard("deleted_at")
    
    def _omit_when_none(self, name: str) -> bool:
        if name in ("is_deleted", "deleted_at"):
            return True
        return super()._omit_when_none(name)


class ClientRecord(TrashableRecord):
    """A customer the user invoices."""
    
    name: Optional[str] = None
    email: Optional[str] = None


class InvoiceRecord(TrashableRecord):
    """
    An invoice.
    
    ``total`` is kept opaque: older data stores it as a number or as a
    formatted string. Read it with ``record.get("total")``.
    """
    
    status: Optional[str] = Field(
        default=None,
        description="Lifecycle status, e.g. 'pending' or 'paid'"
    )


class ProductRecord(TrashableRecord):
    """A product or service line the user sells."""
    
    name: Optional[str] = None


class CategoryRecord(TrashableRecord):
    """A product category."""
    
    name: Optional[str] = None


RECORD_MODELS: dict[CollectionName, type[TrashableRecord]] = {
    CollectionName.CLIENTS: ClientRecord,
    CollectionName.INVOICES: InvoiceRecord,
    CollectionName.PRODUCTS: ProductRecord,
    CollectionName.CATEGORIES: CategoryRecord,
}

ID_PREFIXES: dict[CollectionName, str] = {
    CollectionName.CLIENTS: "CLT",
    CollectionName.INVOICES: "INV",
    CollectionName.PRODUCTS: "PRD",
    CollectionName.CATEGORIES: "CAT",
}
