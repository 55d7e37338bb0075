"""
Shared base for everything stored in the InvoicePro document.

Stored JSON uses camelCase keys; Python code uses snake_case attributes
mapped through field aliases. Unknown keys are kept as extras so a
record round-trips untouched even when this package only understands a
few of its fields.
"""

from datetime import datetime, timezone
from typing import Any, Callable
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def generate_id(prefix: str) -> str:
    """
    Generate a record id such as ``CLT-3f2a...``.

    uuid4 based, so an id freed by a permanent delete is never handed
    out again.
    """
    return f"{prefix}-{uuid4().hex}"


class DocumentModel(BaseModel):
    """
    Base model for document content.

    Optional fields that were never set are left out of the serialized
    output instead of being written as null, so a key absent in storage
    stays absent after a load/save cycle.
    """
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )

    @model_serializer(mode="wrap")
    def _omit_unset_optionals(
        self,
        handler: SerializerFunctionWrapHandler,
        info: SerializationInfo,
    ) -> dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if getattr(self, name) is None and self._omit_when_none(name):
                key = field.alias if info.by_alias and field.alias else name
                data.pop(key, None)
        return data

    def _omit_when_none(self, name: str) -> bool:
        return name not in self.model_fields_set

    def get(self, key: str, default: Any = None) -> Any:
        """
        Read a stored field by its JSON key, declared or extra.

        Handy for entity fields this package treats as opaque
        (``total``, ``price``...).
        """
        extra = self.model_extra or {}
        if key in extra:
            return extra[key]
        for name, field in type(self).model_fields.items():
            if key in (name, field.alias):
                return getattr(self, name)
        return default

    def to_record_dict(self) -> dict[str, Any]:
        """Serialize with the stored (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True)
