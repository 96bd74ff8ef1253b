"""
Vehicle router - API endpoints for vehicles.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.dependencies import RequestContext, require_permission
from logitrack.core.pagination import PageParams, build_page, page_params
from logitrack.core.permissions import Action, Resource
from logitrack.db.session import get_db
from logitrack.schemas.base import Page
from logitrack.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from logitrack.services.vehicle_service import VehicleService

router = APIRouter(prefix="/api/vehicles", tags=["Vehicles"])


@router.get("", response_model=Page[VehicleRead])
async def list_vehicles(
    ctx: RequestContext = Depends(require_permission(Resource.VEHICLES, Action.LIST)),
    db: AsyncSession = Depends(get_db),
    params: PageParams = Depends(page_params),
    is_available: Optional[bool] = None,
):
    """List vehicles; search matches number and model."""
    items, total = await VehicleService(db).list_vehicles(ctx.tenant_id, params, is_available=is_available)
    return build_page(VehicleRead, items, total, params)


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(
    vehicle_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.VEHICLES, Action.READ)),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).get_vehicle(ctx.tenant_id, vehicle_id)


@router.post("", response_model=VehicleRead, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    data: VehicleCreate,
    ctx: RequestContext = Depends(require_permission(Resource.VEHICLES, Action.CREATE)),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).create_vehicle(ctx.tenant_id, data)


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def replace_vehicle(
    vehicle_id: UUID,
    data: VehicleCreate,
    ctx: RequestContext = Depends(require_permission(Resource.VEHICLES, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).update_vehicle(ctx.tenant_id, vehicle_id, data.model_dump())


@router.patch("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(
    vehicle_id: UUID,
    data: VehicleUpdate,
    ctx: RequestContext = Depends(require_permission(Resource.VEHICLES, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).update_vehicle(
        ctx.tenant_id, vehicle_id, data.model_dump(exclude_unset=True)
    )


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.VEHICLES, Action.DELETE)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a vehicle; its driver is unassigned first."""
    await VehicleService(db).delete_vehicle(ctx.tenant_id, vehicle_id)
