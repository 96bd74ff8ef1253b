"""
Vehicle Pydantic schemas.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from logitrack.schemas.base import PartialUpdate, TenantScopedRead


class VehicleCreate(BaseModel):
    """is_available is derived from assignments and never accepted here."""

    number: str = Field(..., min_length=1, max_length=50)
    model: str = Field(..., min_length=1, max_length=100)
    capacity: int = Field(..., gt=0)


class VehicleUpdate(PartialUpdate):
    number: Optional[str] = Field(None, min_length=1, max_length=50)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    capacity: Optional[int] = Field(None, gt=0)


class VehicleSummary(BaseModel):
    id: UUID
    number: str
    model: str

    model_config = ConfigDict(from_attributes=True)


class AssignedDriver(BaseModel):
    id: UUID
    name: str
    license_number: str

    model_config = ConfigDict(from_attributes=True)


class VehicleRead(TenantScopedRead):
    number: str
    model: str
    capacity: int
    is_available: bool
    driver: Optional[AssignedDriver] = None
