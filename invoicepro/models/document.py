"""
The InvoicePro Document

Exactly one document exists per installation. It holds every
collection plus global settings and is rewritten in full on each save.

Contractual top-level keys:
    version, lastUpdated, users, clients, invoices, products,
    categories, activities, settings
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from invoicepro.models.activity import Activity
from invoicepro.models.base import DocumentModel, generate_id
from invoicepro.models.records import (
    CategoryRecord,
    ClientRecord,
    CollectionName,
    InvoiceRecord,
    ProductRecord,
    TrashableRecord,
)


DOCUMENT_VERSION = "3.1.0"
DEMO_USER_ID = "USR-1001"


class UnknownCollectionError(LookupError):
    """The requested collection does not exist in the document."""
    
    def __init__(self, collection_name: str):
        super().__init__(f"Collection {collection_name} not found")
        self.collection_name = collection_name


# =============================================================================
# USERS & SETTINGS
# =============================================================================

class UserSettings(DocumentModel):
    """Per-user preferences."""
    
    currency: Optional[str] = None
    tax_rate: Optional[Union[int, float]] = Field(default=None, alias="taxRate")
    language: Optional[str] = None
    timezone: Optional[str] = None


class User(DocumentModel):
    """
    A user account.
    
    Credentials are owned by the authentication collaborator and are
    kept as opaque extras here.
    """
    
    id: str
    email: str
    name: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    last_login: Optional[datetime] = Field(default=None, alias="lastLogin")
    settings: Optional[UserSettings] = None


def default_user_settings(tax_rate: Union[int, float] = 0) -> UserSettings:
    return UserSettings(
        currency="৳",
        tax_rate=tax_rate,
        language="en",
        timezone="Asia/Dhaka",
    )


class GlobalSettings(DocumentModel):
    """Installation-wide settings."""
    
    app_name: Optional[str] = Field(default=None, alias="appName")
    default_currency: Optional[str] = Field(default=None, alias="defaultCurrency")
    default_tax_rate: Optional[Union[int, float]] = Field(default=None, alias="defaultTaxRate")
    date_format: Optional[str] = Field(default=None, alias="dateFormat")


# =============================================================================
# DOCUMENT
# =============================================================================

class Document(DocumentModel):
    """The whole database."""
    
    version: str = DOCUMENT_VERSION
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")
    
    users: list[User] = Field(default_factory=list)
    clients: list[ClientRecord] = Field(default_factory=list)
    invoices: list[InvoiceRecord] = Field(default_factory=list)
    products: list[ProductRecord] = Field(default_factory=list)
    categories: list[CategoryRecord] = Field(default_factory=list)
    activities: list[Activity] = Field(default_factory=list)
    
    settings: GlobalSettings = Field(default_factory=GlobalSettings)
    
    def get_collection(
        self,
        collection_name: Union[str, CollectionName],
    ) -> list[TrashableRecord]:
        """
        Return the live list backing a trashable collection.
        
        Mutating the returned list mutates this document.
        
        Raises:
            UnknownCollectionError: If the name is not a trashable collection
        """
        try:
            collection = CollectionName(collection_name)
        except ValueError:
            raise UnknownCollectionError(str(collection_name)) from None
        return getattr(self, collection.value)
    
    def find_record(
        self,
        collection_name: Union[str, CollectionName],
        record_id: str,
    ) -> Optional[TrashableRecord]:
        """First record with this id, whatever its owner or trash state."""
        for record in self.get_collection(collection_name):
            if record.id == record_id:
                return record
        return None


def default_document(now: datetime, seed_demo_user: bool = True) -> Document:
    """
    Build the document written on first access.
    
    Args:
        now: Creation time, used for lastUpdated and the demo user
        seed_demo_user: Include the demo account
    """
    users = []
    if seed_demo_user:
        users.append(
            User(
                id=DEMO_USER_ID,
                name="Demo User",
                email="demo@invoice.com",
                password="demo123",
                company="Demo Company",
                role="admin",
                created_at=now,
                last_login=now,
                is_active=True,
                settings=default_user_settings(tax_rate=5),
            )
        )
    
    return Document(
        version=DOCUMENT_VERSION,
        last_updated=now,
        users=users,
        clients=[],
        invoices=[],
        products=[],
        categories=[],
        activities=[],
        settings=GlobalSettings(
            app_name="InvoicePro",
            default_currency="৳",
            default_tax_rate=5,
            date_format="DD/MM/YYYY",
        ),
    )


def new_user_id() -> str:
    return generate_id("USR")
