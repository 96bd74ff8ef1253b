"""
Shipment router - API endpoints for shipments.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.dependencies import RequestContext, get_request_context, require_permission
from logitrack.core.pagination import PageParams, build_page, page_params
from logitrack.core.permissions import Action, Resource
from logitrack.db.session import get_db
from logitrack.models.enums import PaymentMethod, ShipmentStatus
from logitrack.schemas.base import Page
from logitrack.schemas.shipment import ShipmentCreate, ShipmentRead, ShipmentStatusUpdate, ShipmentUpdate
from logitrack.services.shipment_pdf import pdf_filename, render_shipment_pdf
from logitrack.services.shipment_service import ShipmentService

router = APIRouter(prefix="/api/shipments", tags=["Shipments"])


@router.get("", response_model=Page[ShipmentRead])
async def list_shipments(
    ctx: RequestContext = Depends(require_permission(Resource.SHIPMENTS, Action.LIST)),
    db: AsyncSession = Depends(get_db),
    params: PageParams = Depends(page_params),
    status: Optional[ShipmentStatus] = None,
    payment_method: Optional[PaymentMethod] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    driver_id: Optional[UUID] = None,
    vehicle_id: Optional[UUID] = None,
    source: Optional[str] = Query(None, max_length=255),
    destination: Optional[str] = Query(None, max_length=255),
):
    """
    List shipments with pagination and filters, newest first.

    Filters: status, payment_method, from_date, to_date (inclusive),
    driver_id, vehicle_id, source, destination.
    """
    service = ShipmentService(db)
    items, total = await service.list_shipments(
        ctx.user,
        ctx.tenant_id,
        params,
        status=status,
        payment_method=payment_method,
        from_date=from_date,
        to_date=to_date,
        driver_id=driver_id,
        vehicle_id=vehicle_id,
        source=source,
        destination=destination,
    )
    return build_page(ShipmentRead, items, total, params)


@router.get("/{shipment_id}", response_model=ShipmentRead)
async def get_shipment(
    shipment_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.SHIPMENTS, Action.READ)),
    db: AsyncSession = Depends(get_db),
):
    """Get a shipment by ID."""
    return await ShipmentService(db).get_shipment(ctx.tenant_id, shipment_id, ctx.user)


@router.get("/{shipment_id}/pdf")
async def download_shipment_pdf(
    shipment_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.SHIPMENTS, Action.READ)),
    db: AsyncSession = Depends(get_db),
):
    """Download the consignment note as a PDF attachment."""
    shipment = await ShipmentService(db).get_shipment(ctx.tenant_id, shipment_id, ctx.user)
    return Response(
        content=render_shipment_pdf(shipment, ctx.tenant),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={pdf_filename(shipment)}"},
    )


@router.post("", response_model=ShipmentRead, status_code=status.HTTP_201_CREATED)
async def create_shipment(
    data: ShipmentCreate,
    ctx: RequestContext = Depends(require_permission(Resource.SHIPMENTS, Action.CREATE)),
    db: AsyncSession = Depends(get_db),
):
    """Create a new shipment; grand_total is computed from the charges."""
    return await ShipmentService(db).create_shipment(ctx.tenant_id, data)


@router.put("/{shipment_id}", response_model=ShipmentRead)
async def replace_shipment(
    shipment_id: UUID,
    data: ShipmentCreate,
    ctx: RequestContext = Depends(require_permission(Resource.SHIPMENTS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    """Replace every writable field of a shipment."""
    return await ShipmentService(db).update_shipment(ctx.tenant_id, shipment_id, data.model_dump())


@router.patch("/{shipment_id}", response_model=ShipmentRead)
async def update_shipment(
    shipment_id: UUID,
    data: ShipmentUpdate,
    ctx: RequestContext = Depends(require_permission(Resource.SHIPMENTS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    """Update the fields present in the body."""
    return await ShipmentService(db).update_shipment(
        ctx.tenant_id, shipment_id, data.model_dump(exclude_unset=True)
    )


@router.patch("/{shipment_id}/status", response_model=ShipmentRead)
async def update_shipment_status(
    shipment_id: UUID,
    data: ShipmentStatusUpdate,
    ctx: RequestContext = Depends(require_permission(Resource.SHIPMENTS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    """Set the shipment status; any transition is allowed."""
    return await ShipmentService(db).update_status(ctx.tenant_id, shipment_id, data.status)


@router.patch("/{shipment_id}/complete", response_model=ShipmentRead)
async def complete_shipment(
    shipment_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """Mark a shipment COMPLETED (dispatch staff or the assigned driver)."""
    return await ShipmentService(db).complete(ctx.user, ctx.tenant_id, shipment_id)


@router.delete("/{shipment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shipment(
    shipment_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.SHIPMENTS, Action.DELETE)),
    db: AsyncSession = Depends(get_db),
):
    await ShipmentService(db).delete_shipment(ctx.tenant_id, shipment_id)
