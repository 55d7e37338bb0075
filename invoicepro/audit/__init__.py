"""Activity logging package."""

from invoicepro.audit.activity_log import DEFAULT_ACTIVITY_LIMIT, ActivityLog

__all__ = ["DEFAULT_ACTIVITY_LIMIT", "ActivityLog"]
