"""
Component Wiring for InvoicePro

Builds the storage backend, document store and the services on top of
it from settings. Callers (UI, export, auth collaborators) receive the
components explicitly; there is no process-wide database instance.
"""

from pathlib import Path
from typing import NamedTuple, Optional

from invoicepro.audit import ActivityLog
from invoicepro.config import Settings, get_settings
from invoicepro.config.logging import configure_logging
from invoicepro.models.base import Clock
from invoicepro.queries import CollectionAccessor, DashboardQuery
from invoicepro.services.storage import (
    DocumentStore,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
)
from invoicepro.services.users import UserDirectory
from invoicepro.trash import TrashManager


class AppComponents(NamedTuple):
    """Everything a front-end needs, sharing one DocumentStore."""
    store: DocumentStore
    accessor: CollectionAccessor
    trash: TrashManager
    activity_log: ActivityLog
    dashboard: DashboardQuery
    users: UserDirectory


def create_storage(settings: Optional[Settings] = None) -> KeyValueStorageInterface:
    """Build the key-value backend selected by the storage settings."""
    storage_settings = (settings or get_settings()).storage
    
    if storage_settings.backend == "memory":
        return InMemoryStorage(quota_bytes=storage_settings.max_document_bytes)
    return JsonFileStorage(
        Path(storage_settings.data_dir).expanduser(),
        quota_bytes=storage_settings.max_document_bytes,
    )


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
    clock: Optional[Clock] = None,
) -> AppComponents:
    """
    Factory function to create all application components.
    
    Args:
        settings: Settings to use (defaults to get_settings())
        storage: Backend override, e.g. InMemoryStorage() in tests
        clock: Timestamp source override
        
    Returns:
        AppComponents sharing a single DocumentStore
    """
    settings = settings or get_settings()
    app_settings = settings.app
    
    if app_settings.debug_mode:
        configure_logging(debug=True)
    
    store = DocumentStore(
        storage if storage is not None else create_storage(settings),
        document_key=settings.storage.document_key,
        clock=clock,
        seed_demo_user=app_settings.seed_demo_user,
    )
    activity_log = ActivityLog(store, limit=app_settings.activity_log_limit)
    accessor = CollectionAccessor(store)
    
    return AppComponents(
        store=store,
        accessor=accessor,
        trash=TrashManager(store, activity_log=activity_log),
        activity_log=activity_log,
        dashboard=DashboardQuery(accessor),
        users=UserDirectory(store),
    )
