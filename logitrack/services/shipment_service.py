"""
Shipment business logic service.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.pagination import PageParams
from logitrack.core.permissions import Action, Resource, can
from logitrack.errors import Conflict, Forbidden, NotFound, ValidationFailed
from logitrack.models.enums import ShipmentStatus, UserRole
from logitrack.models.shipment import CHARGE_FIELDS, Shipment
from logitrack.models.user import User
from logitrack.repositories.driver_repository import DriverRepository
from logitrack.repositories.shipment_repository import ShipmentRepository
from logitrack.repositories.vehicle_repository import VehicleRepository
from logitrack.schemas.shipment import ShipmentCreate

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Convert any numeric value to a Decimal with two places."""
    return Decimal(str(value if value is not None else 0)).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_grand_total(charges: Dict[str, Any]) -> Decimal:
    """Sum the six charge fields; missing charges count as zero."""
    return to_money(sum((to_money(charges.get(field)) for field in CHARGE_FIELDS), Decimal("0")))


class ShipmentService:
    """Service for shipment business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = ShipmentRepository(db)
        self.driver_repository = DriverRepository(db)
        self.vehicle_repository = VehicleRepository(db)

    async def _own_driver_id(self, user: User) -> Optional[UUID]:
        """The driver profile id a DRIVER user is confined to."""
        driver = await self.driver_repository.get_by_user_id(user.id)
        return driver.id if driver else None

    async def list_shipments(
        self,
        user: User,
        tenant_id: UUID,
        params: PageParams,
        **filters,
    ) -> Tuple[List[Shipment], int]:
        """
        List shipments with filters.

        A DRIVER only ever sees shipments assigned to its own profile.
        """
        if user.role == UserRole.DRIVER:
            own_driver_id = await self._own_driver_id(user)
            if own_driver_id is None:
                return [], 0
            if filters.get("driver_id") not in (None, own_driver_id):
                return [], 0
            filters["driver_id"] = own_driver_id

        return await self.repository.list(
            tenant_id=tenant_id,
            page=params.page,
            page_size=params.page_size,
            search=params.search,
            **filters,
        )

    async def get_shipment(self, tenant_id: UUID, shipment_id: UUID, user: Optional[User] = None) -> Shipment:
        shipment = await self.repository.get_by_id(tenant_id, shipment_id)
        if not shipment:
            raise NotFound(f"Shipment {shipment_id} not found")
        if user is not None and user.role == UserRole.DRIVER:
            if shipment.driver_id is None or shipment.driver_id != await self._own_driver_id(user):
                raise NotFound(f"Shipment {shipment_id} not found")
        return shipment

    async def _check_references(self, tenant_id: UUID, values: dict) -> None:
        driver_id = values.get("driver_id")
        if driver_id is not None and not await self.driver_repository.get_by_id(tenant_id, driver_id):
            raise ValidationFailed("Driver does not belong to this tenant", details={"field": "driver_id"})
        vehicle_id = values.get("vehicle_id")
        if vehicle_id is not None and not await self.vehicle_repository.get_by_id(tenant_id, vehicle_id):
            raise ValidationFailed("Vehicle does not belong to this tenant", details={"field": "vehicle_id"})

    async def _check_bill_no(self, tenant_id: UUID, bill_no: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await self.repository.get_by_bill_no(tenant_id, bill_no)
        if existing and existing.id != exclude_id:
            raise Conflict(f"Bill number {bill_no} already exists", details={"field": "bill_no"})

    @staticmethod
    def _apply_grand_total(values: dict, charges: Dict[str, Any]) -> None:
        supplied = values.pop("grand_total", None)
        total = compute_grand_total(charges)
        if supplied is not None and to_money(supplied) != total:
            logger.warning(
                "Client grand_total %s does not match charges total %s; using %s",
                supplied,
                total,
                total,
            )
        values["grand_total"] = total

    async def create_shipment(self, tenant_id: UUID, data: ShipmentCreate) -> Shipment:
        """Create a shipment; grand_total is always recomputed from the charges."""
        values = data.model_dump()
        values["bill_no"] = values["bill_no"].strip()
        await self._check_bill_no(tenant_id, values["bill_no"])
        await self._check_references(tenant_id, values)

        for field in CHARGE_FIELDS:
            values[field] = to_money(values[field])
        self._apply_grand_total(values, values)

        shipment = await self.repository.create(tenant_id, values)
        await self.db.commit()
        logger.info("Created shipment %s (%s) in tenant %s", shipment.id, shipment.bill_no, tenant_id)
        return await self.get_shipment(tenant_id, shipment.id)

    async def update_shipment(self, tenant_id: UUID, shipment_id: UUID, values: dict) -> Shipment:
        """Apply the given fields and recompute grand_total from the resulting charges."""
        shipment = await self.get_shipment(tenant_id, shipment_id)

        if values.get("bill_no"):
            values["bill_no"] = values["bill_no"].strip()
            await self._check_bill_no(tenant_id, values["bill_no"], exclude_id=shipment.id)
        await self._check_references(tenant_id, values)

        charges = {}
        for field in CHARGE_FIELDS:
            if field in values:
                values[field] = to_money(values[field])
                charges[field] = values[field]
            else:
                charges[field] = getattr(shipment, field)
        self._apply_grand_total(values, charges)

        await self.repository.update(shipment, values)
        await self.db.commit()
        return await self.get_shipment(tenant_id, shipment_id)

    async def update_status(self, tenant_id: UUID, shipment_id: UUID, status: ShipmentStatus) -> Shipment:
        """Set any status; transitions are unconstrained."""
        shipment = await self.get_shipment(tenant_id, shipment_id)
        await self.repository.update(shipment, {"status": status})
        await self.db.commit()
        return await self.get_shipment(tenant_id, shipment_id)

    async def complete(self, user: User, tenant_id: UUID, shipment_id: UUID) -> Shipment:
        """
        Mark a shipment COMPLETED.

        Allowed for roles with shipment update rights and for the driver the
        shipment is assigned to.
        """
        shipment = await self.get_shipment(tenant_id, shipment_id, user)
        if not can(user.role, Resource.SHIPMENTS, Action.UPDATE):
            if user.role != UserRole.DRIVER or shipment.driver_id != await self._own_driver_id(user):
                raise Forbidden("Only the assigned driver can complete this shipment")

        await self.repository.update(shipment, {"status": ShipmentStatus.COMPLETED})
        await self.db.commit()
        logger.info("Shipment %s completed by user %s", shipment_id, user.id)
        return await self.get_shipment(tenant_id, shipment_id)

    async def delete_shipment(self, tenant_id: UUID, shipment_id: UUID) -> None:
        shipment = await self.get_shipment(tenant_id, shipment_id)
        await self.repository.delete(shipment)
        await self.db.commit()
