"""
Tenant (transporter) Pydantic schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from logitrack.schemas.base import PartialUpdate


class TenantRead(BaseModel):
    id: UUID
    name: str
    slug: str
    domain: Optional[str] = None
    gst_number: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TenantPublic(BaseModel):
    """What an unauthenticated login page may learn about a tenant."""

    id: UUID
    name: str
    slug: str
    domain: Optional[str] = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class TransporterCreate(BaseModel):
    """Onboard a transporter together with its first ADMIN user."""

    name: str = Field(..., min_length=1, max_length=255)
    domain: Optional[str] = Field(None, max_length=255)
    gst_number: Optional[str] = Field(None, max_length=30)
    admin_name: str = Field(..., min_length=1, max_length=255)
    admin_email: EmailStr
    admin_password: str = Field(..., min_length=6)


class TransporterUpdate(PartialUpdate):
    NULLABLE = frozenset({"domain", "gst_number"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    domain: Optional[str] = Field(None, max_length=255)
    gst_number: Optional[str] = Field(None, max_length=30)
    is_active: Optional[bool] = None


class TransporterStatusUpdate(BaseModel):
    is_active: bool


class TransporterCounts(BaseModel):
    users: int = 0
    vehicles: int = 0
    drivers: int = 0
    shipments: int = 0


class TransporterAdmin(BaseModel):
    id: UUID
    name: str
    email: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class TransporterSummary(TenantRead):
    counts: TransporterCounts


class TransporterDetail(TransporterSummary):
    total_revenue: Decimal
    admins: List[TransporterAdmin]


class TransporterCreated(BaseModel):
    tenant: TenantRead
    admin: TransporterAdmin
