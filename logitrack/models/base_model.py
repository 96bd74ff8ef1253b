"""
Base model with the common fields every tenant-scoped table carries.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from logitrack.db.base import Base


class TenantScopedModel(Base):
    """
    Abstract base class for all tenant-scoped models.

    This is not a real table - it's a template that other models inherit from.
    Every table that belongs to a tenant will have these fields automatically.
    """

    __abstract__ = True  # This means: don't create a table for this class

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Tenant ID - identifies which transport company owns this data
    # Indexed for fast lookups when filtering by tenant
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tenant.id"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
