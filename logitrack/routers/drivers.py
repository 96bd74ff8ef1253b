"""
Driver router - API endpoints for drivers and vehicle assignment.
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
from logitrack.schemas.driver import DriverAssign, DriverCreate, DriverCreated, DriverRead, DriverUpdate
from logitrack.services.driver_service import DriverService

router = APIRouter(prefix="/api/drivers", tags=["Drivers"])


@router.get("", response_model=Page[DriverRead])
async def list_drivers(
    ctx: RequestContext = Depends(require_permission(Resource.DRIVERS, Action.LIST)),
    db: AsyncSession = Depends(get_db),
    params: PageParams = Depends(page_params),
    vehicle_id: Optional[UUID] = None,
    assigned: Optional[bool] = None,
):
    """List drivers; search matches license number, name, email and phone."""
    items, total = await DriverService(db).list_drivers(
        ctx.tenant_id, params, vehicle_id=vehicle_id, assigned=assigned
    )
    return build_page(DriverRead, items, total, params)


@router.get("/{driver_id}", response_model=DriverRead)
async def get_driver(
    driver_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.DRIVERS, Action.READ)),
    db: AsyncSession = Depends(get_db),
):
    return await DriverService(db).get_driver(ctx.tenant_id, driver_id)


@router.post("", response_model=DriverCreated, status_code=status.HTTP_201_CREATED)
async def create_driver(
    data: DriverCreate,
    ctx: RequestContext = Depends(require_permission(Resource.DRIVERS, Action.CREATE)),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a driver and its login.

    The generated temporary password is only returned in this response.
    """
    driver, temporary_password = await DriverService(db).create_driver(ctx.tenant_id, data)
    return DriverCreated(
        **DriverRead.model_validate(driver).model_dump(),
        temporary_password=temporary_password,
    )


@router.put("/{driver_id}", response_model=DriverRead)
async def replace_driver(
    driver_id: UUID,
    data: DriverCreate,
    ctx: RequestContext = Depends(require_permission(Resource.DRIVERS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await DriverService(db).update_driver(ctx.tenant_id, driver_id, data.model_dump())


@router.patch("/{driver_id}", response_model=DriverRead)
async def update_driver(
    driver_id: UUID,
    data: DriverUpdate,
    ctx: RequestContext = Depends(require_permission(Resource.DRIVERS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await DriverService(db).update_driver(
        ctx.tenant_id, driver_id, data.model_dump(exclude_unset=True)
    )


@router.post("/{driver_id}/assign", response_model=DriverRead)
async def assign_vehicle(
    driver_id: UUID,
    data: DriverAssign,
    ctx: RequestContext = Depends(require_permission(Resource.DRIVERS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    """Assign a vehicle; 409 when another driver holds it."""
    return await DriverService(db).assign_vehicle(ctx.tenant_id, driver_id, data.vehicle_id)


@router.post("/{driver_id}/unassign", response_model=DriverRead)
async def unassign_vehicle(
    driver_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.DRIVERS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await DriverService(db).unassign(ctx.tenant_id, driver_id)


@router.delete("/{driver_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_driver(
    driver_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.DRIVERS, Action.DELETE)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a driver and its login; its vehicle becomes available."""
    await DriverService(db).delete_driver(ctx.tenant_id, driver_id)
