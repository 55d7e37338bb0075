"""
Data Models Package

All data stored in the InvoicePro document is described by the
Pydantic models in this package.
"""

from invoicepro.models.activity import (
    Activity,
    ActivityBuilder,
    ActivityType,
)
from invoicepro.models.base import Clock, DocumentModel, generate_id, utc_now
from invoicepro.models.document import (
    DEMO_USER_ID,
    DOCUMENT_VERSION,
    Document,
    GlobalSettings,
    UnknownCollectionError,
    User,
    UserSettings,
    default_document,
)
from invoicepro.models.records import (
    ID_PREFIXES,
    RECORD_MODELS,
    TRASH_VIEW_COLLECTIONS,
    CategoryRecord,
    ClientRecord,
    CollectionName,
    InvoiceRecord,
    ProductRecord,
    TrashableRecord,
)

__all__ = [
    # Base
    "Clock",
    "DocumentModel",
    "generate_id",
    "utc_now",
    # Records
    "ID_PREFIXES",
    "RECORD_MODELS",
    "TRASH_VIEW_COLLECTIONS",
    "CategoryRecord",
    "ClientRecord",
    "CollectionName",
    "InvoiceRecord",
    "ProductRecord",
    "TrashableRecord",
    # Document
    "DEMO_USER_ID",
    "DOCUMENT_VERSION",
    "Document",
    "GlobalSettings",
    "UnknownCollectionError",
    "User",
    "UserSettings",
    "default_document",
    # Activity
    "Activity",
    "ActivityBuilder",
    "ActivityType",
]
