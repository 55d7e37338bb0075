"""
InvoicePro Local Store - Source Package

The data layer of a single-user invoicing/CRM tool. All state lives in
one JSON document held in a local key-value slot.

DESIGN PRINCIPLES:
1. One document, fully rewritten on every save
2. Every query is scoped to the owning user
3. Deleting goes through the trash first; purging is explicit
4. Failures degrade to False / empty results, never crash the caller
5. Storage backend is swappable
"""

from invoicepro.config.logging import configure_logging

configure_logging()

__version__ = "3.1.0"
__author__ = "InvoicePro Team"
