"""
Driver business logic service.

Owns the driver/vehicle assignment invariant: a vehicle is unavailable
exactly when one driver references it. Every assignment change happens in
one transaction with the rows involved locked.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.pagination import PageParams
from logitrack.core.security import generate_temporary_password
from logitrack.errors import Conflict, NotFound
from logitrack.models.driver import Driver
from logitrack.models.enums import UserRole
from logitrack.repositories.driver_repository import DriverRepository
from logitrack.repositories.shipment_repository import ShipmentRepository
from logitrack.repositories.user_repository import UserRepository
from logitrack.repositories.vehicle_repository import VehicleRepository
from logitrack.schemas.driver import DriverCreate

logger = logging.getLogger(__name__)

_USER_FIELDS = ("name", "email", "phone")


class DriverService:
    """Service for driver business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = DriverRepository(db)
        self.vehicle_repository = VehicleRepository(db)
        self.user_repository = UserRepository(db)
        self.shipment_repository = ShipmentRepository(db)

    async def list_drivers(
        self,
        tenant_id: UUID,
        params: PageParams,
        vehicle_id: Optional[UUID] = None,
        assigned: Optional[bool] = None,
    ) -> Tuple[List[Driver], int]:
        return await self.repository.list(
            tenant_id=tenant_id,
            page=params.page,
            page_size=params.page_size,
            search=params.search,
            vehicle_id=vehicle_id,
            assigned=assigned,
        )

    async def get_driver(self, tenant_id: UUID, driver_id: UUID) -> Driver:
        driver = await self.repository.get_by_id(tenant_id, driver_id)
        if not driver:
            raise NotFound(f"Driver {driver_id} not found")
        return driver

    async def get_driver_for_user(self, user_id: UUID) -> Optional[Driver]:
        return await self.repository.get_by_user_id(user_id)

    async def _ensure_unique(
        self,
        tenant_id: UUID,
        email: Optional[str] = None,
        license_number: Optional[str] = None,
        exclude_driver: Optional[Driver] = None,
    ) -> None:
        if email:
            existing_user = await self.user_repository.get_by_email(tenant_id, email)
            if existing_user and (exclude_driver is None or existing_user.id != exclude_driver.user_id):
                raise Conflict(f"A user with email {email} already exists", details={"field": "email"})
        if license_number:
            existing = await self.repository.get_by_license(tenant_id, license_number)
            if existing and (exclude_driver is None or existing.id != exclude_driver.id):
                raise Conflict(
                    f"License number {license_number} already exists",
                    details={"field": "license_number"},
                )

    async def create_profile(self, tenant_id: UUID, user_id: UUID, license_number: str) -> Driver:
        """Attach a driver profile to an existing DRIVER user (caller commits)."""
        await self._ensure_unique(tenant_id, license_number=license_number)
        return await self.repository.create(tenant_id, user_id, license_number)

    async def create_driver(self, tenant_id: UUID, data: DriverCreate) -> Tuple[Driver, str]:
        """
        Create the backing DRIVER user and the driver profile together.

        Returns:
            The driver and the generated temporary password, which is not
            stored anywhere in plain text.
        """
        await self._ensure_unique(tenant_id, email=data.email, license_number=data.license_number)

        temporary_password = generate_temporary_password()
        user = await self.user_repository.create(
            tenant_id=tenant_id,
            name=data.name,
            email=data.email,
            password=temporary_password,
            role=UserRole.DRIVER,
            phone=data.phone,
        )
        driver = await self.repository.create(tenant_id, user.id, data.license_number)

        if data.vehicle_id is not None:
            await self._assign(tenant_id, driver, data.vehicle_id)

        await self._commit()
        logger.info("Created driver %s (user %s) in tenant %s", driver.id, user.id, tenant_id)
        return await self.get_driver(tenant_id, driver.id), temporary_password

    async def update_driver(self, tenant_id: UUID, driver_id: UUID, values: dict) -> Driver:
        """
        Update profile and backing-user fields.

        A ``vehicle_id`` key routes through the assignment operations;
        None unassigns.
        """
        driver = await self.repository.get_by_id(tenant_id, driver_id, for_update=True)
        if not driver:
            raise NotFound(f"Driver {driver_id} not found")

        await self._ensure_unique(
            tenant_id,
            email=values.get("email"),
            license_number=values.get("license_number"),
            exclude_driver=driver,
        )

        user_values = {key: values[key] for key in _USER_FIELDS if key in values}
        if user_values:
            await self.user_repository.update(driver.user, user_values)
        if values.get("license_number"):
            driver.license_number = values["license_number"].strip()

        if "vehicle_id" in values:
            if values["vehicle_id"] is None:
                await self._release(tenant_id, driver)
            else:
                await self._assign(tenant_id, driver, values["vehicle_id"])

        await self._commit()
        return await self.get_driver(tenant_id, driver_id)

    async def assign_vehicle(self, tenant_id: UUID, driver_id: UUID, vehicle_id: UUID) -> Driver:
        """
        Assign a vehicle to a driver.

        Raises:
            NotFound: driver or vehicle is not in the tenant
            Conflict: another driver holds the vehicle
        """
        driver = await self.repository.get_by_id(tenant_id, driver_id, for_update=True)
        if not driver:
            raise NotFound(f"Driver {driver_id} not found")
        await self._assign(tenant_id, driver, vehicle_id)
        await self._commit()
        return await self.get_driver(tenant_id, driver_id)

    async def unassign(self, tenant_id: UUID, driver_id: UUID) -> Driver:
        driver = await self.repository.get_by_id(tenant_id, driver_id, for_update=True)
        if not driver:
            raise NotFound(f"Driver {driver_id} not found")
        await self._release(tenant_id, driver)
        await self._commit()
        return await self.get_driver(tenant_id, driver_id)

    async def delete_driver(self, tenant_id: UUID, driver_id: UUID) -> None:
        """Delete the driver and its backing user; shipments keep their rows."""
        driver = await self.repository.get_by_id(tenant_id, driver_id, for_update=True)
        if not driver:
            raise NotFound(f"Driver {driver_id} not found")
        await self.delete_loaded_driver(tenant_id, driver)
        await self.db.commit()

    async def delete_loaded_driver(self, tenant_id: UUID, driver: Driver) -> None:
        """Delete a locked driver row and its user (caller commits)."""
        await self._release(tenant_id, driver)
        await self.shipment_repository.clear_driver(tenant_id, driver.id)
        user = driver.user
        await self.repository.delete(driver)
        if user is not None:
            await self.user_repository.delete(user)
        logger.info("Deleted driver %s and user %s", driver.id, driver.user_id)

    async def _assign(self, tenant_id: UUID, driver: Driver, vehicle_id: UUID) -> None:
        if driver.vehicle_id == vehicle_id:
            return

        vehicle = await self.vehicle_repository.get_by_id(tenant_id, vehicle_id, for_update=True)
        if not vehicle:
            raise NotFound(f"Vehicle {vehicle_id} not found")

        holder = await self.repository.get_by_vehicle(tenant_id, vehicle_id, for_update=True)
        if holder is not None and holder.id != driver.id:
            raise Conflict(
                f"Vehicle {vehicle.number} is already assigned to another driver",
                details={"vehicle_id": str(vehicle_id), "driver_id": str(holder.id)},
            )

        if driver.vehicle_id is not None:
            await self._release(tenant_id, driver)

        driver.vehicle_id = vehicle.id
        vehicle.is_available = False
        await self.db.flush()
        logger.info("Assigned vehicle %s to driver %s", vehicle.id, driver.id)

    async def _release(self, tenant_id: UUID, driver: Driver) -> None:
        if driver.vehicle_id is None:
            return

        previous_id = driver.vehicle_id
        vehicle = await self.vehicle_repository.get_by_id(tenant_id, previous_id, for_update=True)
        driver.vehicle_id = None
        if vehicle is not None:
            vehicle.is_available = True
        await self.db.flush()
        logger.info("Released vehicle %s from driver %s", previous_id, driver.id)

    async def _commit(self) -> None:
        """Commit, reporting a lost assignment race as a conflict."""
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("Vehicle is already assigned to another driver")
