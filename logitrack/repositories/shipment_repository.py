"""
Shipment repository - database operations for Shipment.
"""

from datetime import date
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.models.enums import PaymentMethod, ShipmentStatus
from logitrack.models.shipment import Shipment
from logitrack.repositories.base import contains_clause, paginate, search_clause


class ShipmentRepository:
    """Repository for Shipment database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, tenant_id: Optional[UUID], shipment_id: UUID) -> Optional[Shipment]:
        """Get a shipment; a None tenant_id looks across tenants."""
        query = select(Shipment).where(Shipment.id == shipment_id)
        if tenant_id is not None:
            query = query.where(Shipment.tenant_id == tenant_id)
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def get_by_bill_no(self, tenant_id: UUID, bill_no: str) -> Optional[Shipment]:
        result = await self.db.execute(
            select(Shipment).where(
                Shipment.tenant_id == tenant_id,
                Shipment.bill_no == bill_no.strip(),
            )
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        tenant_id: Optional[UUID],
        page: int,
        page_size: int,
        search: Optional[str] = None,
        status: Optional[ShipmentStatus] = None,
        payment_method: Optional[PaymentMethod] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        driver_id: Optional[UUID] = None,
        vehicle_id: Optional[UUID] = None,
        source: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> Tuple[List[Shipment], int]:
        """
        List shipments newest first.

        Filters are AND-ed; the search term is OR-ed over bill number,
        party names and transport name. A None tenant_id lists across
        tenants (platform views only).
        """
        query = select(Shipment)
        if tenant_id is not None:
            query = query.where(Shipment.tenant_id == tenant_id)
        if status is not None:
            query = query.where(Shipment.status == status)
        if payment_method is not None:
            query = query.where(Shipment.payment_method == payment_method)
        if from_date is not None:
            query = query.where(Shipment.date >= from_date)
        if to_date is not None:
            query = query.where(Shipment.date <= to_date)
        if driver_id is not None:
            query = query.where(Shipment.driver_id == driver_id)
        if vehicle_id is not None:
            query = query.where(Shipment.vehicle_id == vehicle_id)
        if source and source.strip():
            query = query.where(contains_clause(Shipment.source, source))
        if destination and destination.strip():
            query = query.where(contains_clause(Shipment.destination, destination))
        if search and search.strip():
            query = query.where(
                search_clause(
                    search,
                    Shipment.bill_no,
                    Shipment.consignor_name,
                    Shipment.consignee_name,
                    Shipment.transport_name,
                )
            )
        query = query.order_by(Shipment.date.desc(), Shipment.created_at.desc())
        return await paginate(self.db, query, page, page_size)

    async def create(self, tenant_id: UUID, values: dict) -> Shipment:
        shipment = Shipment(tenant_id=tenant_id, **values)
        self.db.add(shipment)
        await self.db.flush()
        return shipment

    async def update(self, shipment: Shipment, values: dict) -> Shipment:
        for field, value in values.items():
            setattr(shipment, field, value)
        await self.db.flush()
        return shipment

    async def delete(self, shipment: Shipment) -> None:
        await self.db.delete(shipment)
        await self.db.flush()

    async def clear_driver(self, tenant_id: UUID, driver_id: UUID) -> None:
        """Detach a driver from its shipments, keeping the rows."""
        await self.db.execute(
            update(Shipment)
            .where(Shipment.tenant_id == tenant_id, Shipment.driver_id == driver_id)
            .values(driver_id=None)
        )

    async def clear_vehicle(self, tenant_id: UUID, vehicle_id: UUID) -> None:
        await self.db.execute(
            update(Shipment)
            .where(Shipment.tenant_id == tenant_id, Shipment.vehicle_id == vehicle_id)
            .values(vehicle_id=None)
        )

    async def list_for_driver(
        self,
        tenant_id: UUID,
        driver_id: UUID,
        statuses: Optional[Sequence[ShipmentStatus]] = None,
    ) -> List[Shipment]:
        """Every shipment assigned to a driver, newest first."""
        query = select(Shipment).where(Shipment.tenant_id == tenant_id, Shipment.driver_id == driver_id)
        if statuses:
            query = query.where(Shipment.status.in_(list(statuses)))
        result = await self.db.execute(query.order_by(Shipment.date.desc(), Shipment.created_at.desc()))
        return list(result.scalars().all())

    async def count(self, tenant_id: Optional[UUID] = None) -> int:
        query = select(func.count(Shipment.id))
        if tenant_id is not None:
            query = query.where(Shipment.tenant_id == tenant_id)
        return int((await self.db.execute(query)).scalar_one())
