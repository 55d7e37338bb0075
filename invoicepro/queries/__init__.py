"""Read-side queries: user-scoped collections and dashboard statistics."""

from invoicepro.queries.accessor import CollectionAccessor
from invoicepro.queries.dashboard import DashboardQuery, DashboardStats, parse_amount

__all__ = ["CollectionAccessor", "DashboardQuery", "DashboardStats", "parse_amount"]
