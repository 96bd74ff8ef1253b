"""
Superadmin router - platform settings, transporter onboarding and
cross-tenant reporting.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.dependencies import require_superadmin
from logitrack.core.pagination import PageParams, build_page, page_params
from logitrack.db.session import get_db
from logitrack.errors import NotFound, ValidationFailed
from logitrack.models.enums import PaymentMethod, ShipmentStatus, UserRole
from logitrack.repositories.shipment_repository import ShipmentRepository
from logitrack.schemas.base import Page
from logitrack.schemas.settings import (
    DashboardStats,
    GlobalSettingsRead,
    GlobalSettingsUpdate,
    PlatformOverview,
    PlatformShipment,
    PlatformUser,
    TopTransporters,
    TransporterStatusCounts,
    UserGrowthPoint,
)
from logitrack.schemas.tenant import (
    TenantRead,
    TransporterAdmin,
    TransporterCreate,
    TransporterCreated,
    TransporterDetail,
    TransporterStatusUpdate,
    TransporterSummary,
    TransporterUpdate,
)
from logitrack.services.platform_analytics_service import PlatformAnalyticsService
from logitrack.services.settings_service import SettingsService
from logitrack.services.tenant_service import TenantService
from logitrack.services.user_service import UserService

router = APIRouter(
    prefix="/api/superadmin",
    tags=["Superadmin"],
    dependencies=[Depends(require_superadmin)],
)


def _status_filter(value: Optional[str]) -> Optional[bool]:
    if value is None or value == "":
        return None
    if value not in ("active", "inactive"):
        raise ValidationFailed("status must be 'active' or 'inactive'", details={"field": "status"})
    return value == "active"


@router.get("/settings", response_model=GlobalSettingsRead)
async def get_global_settings(db: AsyncSession = Depends(get_db)):
    """Global settings; the row is created with defaults on first read."""
    return GlobalSettingsRead(data=await SettingsService(db).get_settings())


@router.put("/settings", response_model=GlobalSettingsRead)
async def update_global_settings(data: GlobalSettingsUpdate, db: AsyncSession = Depends(get_db)):
    return GlobalSettingsRead(data=await SettingsService(db).update_settings(data.data))


@router.post("/transporters", response_model=TransporterCreated, status_code=status.HTTP_201_CREATED)
async def create_transporter(data: TransporterCreate, db: AsyncSession = Depends(get_db)):
    """Create a transporter together with its ADMIN user."""
    tenant, admin = await TenantService(db).create_transporter(data)
    return TransporterCreated(
        tenant=TenantRead.model_validate(tenant),
        admin=TransporterAdmin.model_validate(admin),
    )


@router.get("/transporters", response_model=Page[TransporterSummary])
async def list_transporters(
    db: AsyncSession = Depends(get_db),
    params: PageParams = Depends(page_params),
    transporter_status: Optional[str] = Query(None, alias="status"),
):
    """List transporters with per-tenant counts; status is active or inactive."""
    items, total = await TenantService(db).list_transporters(params, is_active=_status_filter(transporter_status))
    return Page[TransporterSummary](items=items, total=total, page=params.page, page_size=params.page_size)


@router.get("/transporters/{tenant_id}", response_model=TransporterDetail)
async def get_transporter(tenant_id: UUID, db: AsyncSession = Depends(get_db)):
    return await TenantService(db).get_transporter_details(tenant_id)


@router.patch("/transporters/{tenant_id}", response_model=TenantRead)
async def update_transporter(tenant_id: UUID, data: TransporterUpdate, db: AsyncSession = Depends(get_db)):
    return await TenantService(db).update_transporter(tenant_id, data.model_dump(exclude_unset=True))


@router.patch("/transporters/{tenant_id}/status", response_model=TenantRead)
async def update_transporter_status(
    tenant_id: UUID,
    data: TransporterStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Activate or deactivate a transporter. Transporters are never deleted."""
    return await TenantService(db).set_status(tenant_id, data.is_active)


@router.get("/dashboard-stats", response_model=DashboardStats)
async def dashboard_stats(db: AsyncSession = Depends(get_db)):
    return await PlatformAnalyticsService(db).dashboard_stats()


@router.get("/users", response_model=Page[PlatformUser])
async def list_platform_users(
    db: AsyncSession = Depends(get_db),
    params: PageParams = Depends(page_params),
    tenant_id: Optional[UUID] = None,
    role: Optional[UserRole] = None,
):
    """Users across every tenant."""
    items, total = await UserService(db).list_users(tenant_id, params, role=role)
    return build_page(PlatformUser, items, total, params)


@router.get("/shipments", response_model=Page[PlatformShipment])
async def list_platform_shipments(
    db: AsyncSession = Depends(get_db),
    params: PageParams = Depends(page_params),
    tenant_id: Optional[UUID] = None,
    shipment_status: Optional[ShipmentStatus] = Query(None, alias="status"),
    payment_method: Optional[PaymentMethod] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
):
    """Read-only shipment listing across tenants."""
    items, total = await ShipmentRepository(db).list(
        tenant_id=tenant_id,
        page=params.page,
        page_size=params.page_size,
        search=params.search,
        status=shipment_status,
        payment_method=payment_method,
        from_date=from_date,
        to_date=to_date,
    )
    return build_page(PlatformShipment, items, total, params)


@router.get("/shipments/{shipment_id}", response_model=PlatformShipment)
async def get_platform_shipment(shipment_id: UUID, db: AsyncSession = Depends(get_db)):
    shipment = await ShipmentRepository(db).get_by_id(None, shipment_id)
    if not shipment:
        raise NotFound(f"Shipment {shipment_id} not found")
    return PlatformShipment.model_validate(shipment)


@router.get("/analytics/overview", response_model=PlatformOverview)
async def platform_overview(
    db: AsyncSession = Depends(get_db),
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    tenant_id: Optional[UUID] = None,
):
    """Platform totals plus the last 12 months."""
    return await PlatformAnalyticsService(db).overview(from_date, to_date, tenant_id)


@router.get("/analytics/top-transporters", response_model=TopTransporters)
async def top_transporters(
    db: AsyncSession = Depends(get_db),
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
):
    return await PlatformAnalyticsService(db).top_transporters(from_date, to_date)


@router.get("/analytics/user-growth", response_model=List[UserGrowthPoint])
async def user_growth(db: AsyncSession = Depends(get_db), tenant_id: Optional[UUID] = None):
    """New users per month for the last 12 months, oldest first."""
    return await PlatformAnalyticsService(db).user_growth(tenant_id)


@router.get("/analytics/transporter-status", response_model=TransporterStatusCounts)
async def transporter_status(db: AsyncSession = Depends(get_db)):
    return await PlatformAnalyticsService(db).transporter_status()


@router.get("/analytics/recent-shipments", response_model=List[PlatformShipment])
async def recent_shipments(
    db: AsyncSession = Depends(get_db),
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    tenant_id: Optional[UUID] = None,
):
    """The ten newest shipments across tenants."""
    return await PlatformAnalyticsService(db).recent_shipments(from_date, to_date, tenant_id)
