"""
Tenant repository - database operations for Tenant.
"""

from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.models.driver import Driver
from logitrack.models.shipment import Shipment
from logitrack.models.tenant import Tenant
from logitrack.models.user import User
from logitrack.models.vehicle import Vehicle
from logitrack.repositories.base import paginate, search_clause


class TenantRepository:
    """Repository for Tenant database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        result = await self.db.execute(select(Tenant).where(Tenant.id == tenant_id))
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Tenant]:
        result = await self.db.execute(
            select(Tenant).where(Tenant.slug == slug.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Tenant]:
        result = await self.db.execute(
            select(Tenant).where(func.lower(Tenant.name) == name.strip().lower())
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        page: int = 1,
        page_size: int = 10,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[Tenant], int]:
        query = select(Tenant)
        if search and search.strip():
            query = query.where(search_clause(search, Tenant.name, Tenant.domain, Tenant.slug))
        if is_active is not None:
            query = query.where(Tenant.is_active == is_active)
        return await paginate(self.db, query.order_by(Tenant.created_at.desc()), page, page_size)

    async def counts_by_tenant(self, tenant_ids: List[UUID]) -> Dict[UUID, Dict[str, int]]:
        """Per-tenant row counts of users, vehicles, drivers and shipments."""
        counts: Dict[UUID, Dict[str, int]] = {
            tenant_id: {"users": 0, "vehicles": 0, "drivers": 0, "shipments": 0}
            for tenant_id in tenant_ids
        }
        if not tenant_ids:
            return counts

        for key, model in (
            ("users", User),
            ("vehicles", Vehicle),
            ("drivers", Driver),
            ("shipments", Shipment),
        ):
            result = await self.db.execute(
                select(model.tenant_id, func.count(model.id))
                .where(model.tenant_id.in_(tenant_ids))
                .group_by(model.tenant_id)
            )
            for tenant_id, count in result.all():
                counts[tenant_id][key] = count
        return counts

    async def create(self, **values) -> Tenant:
        tenant = Tenant(**values)
        self.db.add(tenant)
        await self.db.flush()
        await self.db.refresh(tenant)
        return tenant
