"""
Base Pydantic schemas with common fields.

These are templates that other schemas inherit from.
"""

from datetime import datetime
from typing import ClassVar, FrozenSet, Generic, List, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator


T = TypeVar("T")

# Ten-digit mobile numbers
PHONE_PATTERN = r"^\d{10}$"


class TenantScopedRead(BaseModel):
    """
    Base schema for reading tenant-scoped data.

    Includes all the auto-generated fields like id, timestamps, etc.
    """

    id: UUID
    tenant_id: UUID
    created_at: datetime
    updated_at: datetime

    # This tells Pydantic to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)


class Page(BaseModel, Generic[T]):
    """One page of a list endpoint; total counts every match."""

    items: List[T]
    total: int
    page: int
    page_size: int


class PartialUpdate(BaseModel):
    """
    Base schema for PATCH payloads.

    Omitted fields are left untouched. An explicit null is only accepted for
    fields listed in NULLABLE, which map to nullable columns.
    """

    NULLABLE: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_nulls(self):
        nulls = sorted(
            name
            for name in self.model_fields_set
            if getattr(self, name) is None and name not in self.NULLABLE
        )
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self
