"""
Driver Pydantic schemas.

A driver's name, email and phone live on its backing user.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from logitrack.schemas.base import PHONE_PATTERN, PartialUpdate, TenantScopedRead
from logitrack.schemas.vehicle import VehicleSummary


class DriverCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN)
    license_number: str = Field(..., min_length=1, max_length=50)
    vehicle_id: Optional[UUID] = None


class DriverUpdate(PartialUpdate):
    """Partial update; an explicit null vehicle_id unassigns."""

    NULLABLE = frozenset({"phone", "vehicle_id"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    license_number: Optional[str] = Field(None, min_length=1, max_length=50)
    vehicle_id: Optional[UUID] = None


class DriverAssign(BaseModel):
    vehicle_id: UUID


class DriverRead(TenantScopedRead):
    user_id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    license_number: str
    vehicle_id: Optional[UUID] = None
    vehicle: Optional[VehicleSummary] = None


class DriverCreated(DriverRead):
    temporary_password: str
