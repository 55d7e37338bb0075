"""Trash lifecycle package."""

from invoicepro.trash.manager import EmptyTrashResult, TrashManager

__all__ = ["EmptyTrashResult", "TrashManager"]
