"""
Driver repository - database operations for Driver.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.models.driver import Driver
from logitrack.models.user import User
from logitrack.repositories.base import paginate, search_clause


class DriverRepository:
    """Repository for Driver database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(
        self,
        tenant_id: UUID,
        driver_id: UUID,
        for_update: bool = False,
    ) -> Optional[Driver]:
        query = (
            select(Driver)
            .where(Driver.tenant_id == tenant_id, Driver.id == driver_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> Optional[Driver]:
        result = await self.db.execute(select(Driver).where(Driver.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_by_vehicle(
        self,
        tenant_id: UUID,
        vehicle_id: UUID,
        for_update: bool = False,
    ) -> Optional[Driver]:
        """The driver currently holding a vehicle, if any."""
        query = select(Driver).where(
            Driver.tenant_id == tenant_id,
            Driver.vehicle_id == vehicle_id,
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_license(self, tenant_id: UUID, license_number: str) -> Optional[Driver]:
        result = await self.db.execute(
            select(Driver).where(
                Driver.tenant_id == tenant_id,
                func.lower(Driver.license_number) == license_number.strip().lower(),
            )
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        tenant_id: UUID,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        vehicle_id: Optional[UUID] = None,
        assigned: Optional[bool] = None,
    ) -> Tuple[List[Driver], int]:
        query = (
            select(Driver)
            .join(User, User.id == Driver.user_id)
            .where(Driver.tenant_id == tenant_id)
        )
        if vehicle_id is not None:
            query = query.where(Driver.vehicle_id == vehicle_id)
        if assigned is True:
            query = query.where(Driver.vehicle_id.is_not(None))
        elif assigned is False:
            query = query.where(Driver.vehicle_id.is_(None))
        if search and search.strip():
            query = query.where(
                search_clause(search, Driver.license_number, User.name, User.email, User.phone)
            )
        query = query.order_by(User.name.asc(), Driver.id)
        return await paginate(self.db, query, page, page_size)

    async def create(
        self,
        tenant_id: UUID,
        user_id: UUID,
        license_number: str,
    ) -> Driver:
        driver = Driver(
            tenant_id=tenant_id,
            user_id=user_id,
            license_number=license_number.strip(),
        )
        self.db.add(driver)
        await self.db.flush()
        return driver

    async def delete(self, driver: Driver) -> None:
        await self.db.delete(driver)
        await self.db.flush()
