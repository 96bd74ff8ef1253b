"""
Global settings and superadmin dashboard schemas.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from logitrack.schemas.shipment import ShipmentRead
from logitrack.schemas.user import UserRead


DEFAULT_GLOBAL_SETTINGS: Dict[str, Any] = {
    "platform_name": "LogiTrack",
    "support_email": "support@logitrack.example.com",
    "default_language": "en",
    "theme": "system",
    "enable_registration": True,
    "maintenance_mode": False,
}


class GlobalSettingsRead(BaseModel):
    data: Dict[str, Any]


class GlobalSettingsUpdate(BaseModel):
    data: Dict[str, Any]


class DashboardStats(BaseModel):
    total_transporters: int
    active_transporters: int
    inactive_transporters: int
    total_users: int
    total_vehicles: int
    total_drivers: int
    total_shipments: int


class TenantRef(BaseModel):
    id: UUID
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class PlatformUser(UserRead):
    tenant: Optional[TenantRef] = None


class PlatformShipment(ShipmentRead):
    tenant: Optional[TenantRef] = None


class MonthlyStat(BaseModel):
    year: int
    month: int
    shipments: int
    revenue: Decimal


class PlatformOverview(BaseModel):
    from_date: Optional[date_type] = None
    to_date: Optional[date_type] = None
    total_shipments: int
    total_revenue: Decimal
    active_transporters: int
    active_users: int
    monthly_stats: List[MonthlyStat]


class TransporterRank(BaseModel):
    id: UUID
    name: str
    count: Optional[int] = None
    revenue: Optional[Decimal] = None


class TopTransporters(BaseModel):
    by_shipments: List[TransporterRank]
    by_revenue: List[TransporterRank]


class TransporterStatusCounts(BaseModel):
    active: int
    inactive: int


class UserGrowthPoint(BaseModel):
    year: int
    month: int
    count: int
