"""
Dashboard Statistics

Counts and totals for the dashboard cards. Built only on
CollectionAccessor, so trashed records never count.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from invoicepro.queries.accessor import CollectionAccessor


class DashboardStats(BaseModel):
    """Dashboard summary for one user."""
    model_config = ConfigDict(populate_by_name=True)
    
    total_clients: int = Field(..., ge=0, alias="totalClients")
    total_invoices: int = Field(..., ge=0, alias="totalInvoices")
    total_products: int = Field(..., ge=0, alias="totalProducts")
    total_outstanding: Decimal = Field(
        ...,
        alias="totalOutstanding",
        description="Sum of totals over pending invoices"
    )
    paid_invoices: int = Field(..., ge=0, alias="paidInvoices")
    pending_invoices: int = Field(..., ge=0, alias="pendingInvoices")


_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(value: Any) -> Decimal:
    """
    Best-effort conversion of a stored amount.
    
    Reads the leading number of a string, so ``"1050 BDT"`` is 1050 and
    ``"1,250.00"`` is 1. Missing, non-numeric or non-finite values count
    as zero.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, (int, float)):
        text = str(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if match is None:
            return Decimal("0")
        text = match.group(1)
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")


class DashboardQuery:
    """Computes DashboardStats from the active records of a user."""
    
    def __init__(self, accessor: CollectionAccessor):
        self._accessor = accessor
    
    def get_dashboard_stats(self, user_id: str) -> DashboardStats:
        invoices = self._accessor.get_user_invoices(user_id)
        clients = self._accessor.get_user_clients(user_id)
        products = self._accessor.get_user_products(user_id)
        
        pending = [inv for inv in invoices if inv.get("status") == "pending"]
        paid = [inv for inv in invoices if inv.get("status") == "paid"]
        
        return DashboardStats(
            total_clients=len(clients),
            total_invoices=len(invoices),
            total_products=len(products),
            total_outstanding=sum(
                (parse_amount(inv.get("total")) for inv in pending),
                Decimal("0"),
            ),
            paid_invoices=len(paid),
            pending_invoices=len(pending),
        )
