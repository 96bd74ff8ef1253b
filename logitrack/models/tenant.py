"""
Tenant model.

A Tenant represents a transport company (a "transporter") using LogiTrack.
Each tenant's data is isolated from other tenants.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from logitrack.db.base import Base


class Tenant(Base):
    """
    Tenant table - represents a customer organization.

    Note: Tenant doesn't inherit from TenantScopedModel because
    the Tenant table itself doesn't belong to a tenant. Tenants are
    never deleted, only deactivated.
    """

    __tablename__ = "tenant"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # Routing key used by the X-Tenant-Slug header and subdomains
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)

    domain: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    gst_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

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
