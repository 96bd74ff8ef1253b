"""
Vehicle repository - database operations for Vehicle.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.models.vehicle import Vehicle
from logitrack.repositories.base import paginate, search_clause


class VehicleRepository:
    """Repository for Vehicle database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(
        self,
        tenant_id: UUID,
        vehicle_id: UUID,
        for_update: bool = False,
    ) -> Optional[Vehicle]:
        query = (
            select(Vehicle)
            .where(Vehicle.tenant_id == tenant_id, Vehicle.id == vehicle_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_number(self, tenant_id: UUID, number: str) -> Optional[Vehicle]:
        result = await self.db.execute(
            select(Vehicle).where(
                Vehicle.tenant_id == tenant_id,
                func.lower(Vehicle.number) == number.strip().lower(),
            )
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        tenant_id: UUID,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        is_available: Optional[bool] = None,
    ) -> Tuple[List[Vehicle], int]:
        query = select(Vehicle).where(Vehicle.tenant_id == tenant_id)
        if is_available is not None:
            query = query.where(Vehicle.is_available == is_available)
        if search and search.strip():
            query = query.where(search_clause(search, Vehicle.number, Vehicle.model))
        query = query.order_by(Vehicle.created_at.desc(), Vehicle.number.asc())
        return await paginate(self.db, query, page, page_size)

    async def create(self, tenant_id: UUID, values: dict) -> Vehicle:
        vehicle = Vehicle(tenant_id=tenant_id, is_available=True, **values)
        self.db.add(vehicle)
        await self.db.flush()
        return vehicle

    async def update(self, vehicle: Vehicle, values: dict) -> Vehicle:
        for field, value in values.items():
            setattr(vehicle, field, value)
        await self.db.flush()
        return vehicle

    async def delete(self, vehicle: Vehicle) -> None:
        await self.db.delete(vehicle)
        await self.db.flush()
