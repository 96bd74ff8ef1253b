"""
Vehicle business logic service.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.pagination import PageParams
from logitrack.errors import Conflict, NotFound
from logitrack.models.vehicle import Vehicle
from logitrack.repositories.driver_repository import DriverRepository
from logitrack.repositories.shipment_repository import ShipmentRepository
from logitrack.repositories.vehicle_repository import VehicleRepository
from logitrack.schemas.vehicle import VehicleCreate

logger = logging.getLogger(__name__)


class VehicleService:
    """Service for vehicle business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = VehicleRepository(db)
        self.driver_repository = DriverRepository(db)
        self.shipment_repository = ShipmentRepository(db)

    async def list_vehicles(
        self,
        tenant_id: UUID,
        params: PageParams,
        is_available: Optional[bool] = None,
    ) -> Tuple[List[Vehicle], int]:
        return await self.repository.list(
            tenant_id=tenant_id,
            page=params.page,
            page_size=params.page_size,
            search=params.search,
            is_available=is_available,
        )

    async def get_vehicle(self, tenant_id: UUID, vehicle_id: UUID) -> Vehicle:
        vehicle = await self.repository.get_by_id(tenant_id, vehicle_id)
        if not vehicle:
            raise NotFound(f"Vehicle {vehicle_id} not found")
        return vehicle

    async def _ensure_unique_number(
        self,
        tenant_id: UUID,
        number: str,
        exclude_id: Optional[UUID] = None,
    ) -> None:
        existing = await self.repository.get_by_number(tenant_id, number)
        if existing and existing.id != exclude_id:
            raise Conflict(f"Vehicle number {number} already exists", details={"field": "number"})

    async def create_vehicle(self, tenant_id: UUID, data: VehicleCreate) -> Vehicle:
        """Create a new vehicle; it starts out available."""
        values = data.model_dump()
        values["number"] = values["number"].strip()
        await self._ensure_unique_number(tenant_id, values["number"])

        vehicle = await self.repository.create(tenant_id, values)
        await self.db.commit()
        return await self.get_vehicle(tenant_id, vehicle.id)

    async def update_vehicle(self, tenant_id: UUID, vehicle_id: UUID, values: dict) -> Vehicle:
        """Apply writable fields; availability is never set here."""
        vehicle = await self.get_vehicle(tenant_id, vehicle_id)
        values.pop("is_available", None)
        if values.get("number"):
            values["number"] = values["number"].strip()
            await self._ensure_unique_number(tenant_id, values["number"], exclude_id=vehicle.id)

        await self.repository.update(vehicle, values)
        await self.db.commit()
        return await self.get_vehicle(tenant_id, vehicle_id)

    async def delete_vehicle(self, tenant_id: UUID, vehicle_id: UUID) -> None:
        """Delete a vehicle, releasing its driver and detaching its shipments."""
        vehicle = await self.repository.get_by_id(tenant_id, vehicle_id, for_update=True)
        if not vehicle:
            raise NotFound(f"Vehicle {vehicle_id} not found")

        holder = await self.driver_repository.get_by_vehicle(tenant_id, vehicle_id, for_update=True)
        if holder is not None:
            holder.vehicle_id = None
            await self.db.flush()
            logger.info("Unassigned driver %s from deleted vehicle %s", holder.id, vehicle_id)

        await self.shipment_repository.clear_vehicle(tenant_id, vehicle_id)
        await self.repository.delete(vehicle)
        await self.db.commit()
