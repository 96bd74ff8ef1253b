"""
Transporter (tenant) provisioning for superadmins.

Tenants are never deleted; deactivation blocks every request bound to them.
"""

import logging
import re
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.pagination import PageParams
from logitrack.errors import Conflict, NotFound, TenantNotFound, ValidationFailed
from logitrack.models.enums import UserRole
from logitrack.models.shipment import Shipment
from logitrack.models.tenant import Tenant
from logitrack.models.user import User
from logitrack.repositories.tenant_repository import TenantRepository
from logitrack.repositories.user_repository import UserRepository
from logitrack.schemas.tenant import (
    TransporterAdmin,
    TransporterCounts,
    TransporterCreate,
    TransporterDetail,
    TransporterSummary,
    TenantRead,
)
from logitrack.services.shipment_service import to_money

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_SETTINGS = {
    "theme": "light",
    "language": "en",
    "notifications": True,
    "page_size": 10,
}


def slugify(name: str) -> str:
    """Lower-case, spaces to hyphens, anything outside [a-z0-9-] dropped."""
    slug = re.sub(r"\s+", "-", name.strip().lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


class TenantService:
    """Service for superadmin tenant management."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = TenantRepository(db)
        self.user_repository = UserRepository(db)

    async def get_tenant(self, tenant_id: UUID) -> Tenant:
        tenant = await self.repository.get_by_id(tenant_id)
        if not tenant:
            raise NotFound(f"Transporter {tenant_id} not found")
        return tenant

    async def get_by_slug(self, slug: str) -> Tenant:
        tenant = await self.repository.get_by_slug(slug)
        if not tenant:
            raise TenantNotFound(f"Tenant '{slug}' not found")
        return tenant

    async def create_transporter(self, data: TransporterCreate) -> Tuple[Tenant, User]:
        """Create a tenant and its ADMIN user in one transaction."""
        slug = slugify(data.name)
        if not slug:
            raise ValidationFailed("Transporter name must contain letters or digits", details={"field": "name"})
        if await self.repository.get_by_name(data.name):
            raise Conflict(f"A transporter named {data.name} already exists", details={"field": "name"})
        if await self.repository.get_by_slug(slug):
            raise Conflict(f"Slug {slug} is already taken", details={"field": "name"})

        tenant = await self.repository.create(
            name=data.name.strip(),
            slug=slug,
            domain=data.domain,
            gst_number=data.gst_number,
            is_active=True,
            settings={},
        )
        admin = await self.user_repository.create(
            tenant_id=tenant.id,
            name=data.admin_name,
            email=data.admin_email,
            password=data.admin_password,
            role=UserRole.ADMIN,
            settings=dict(DEFAULT_ADMIN_SETTINGS),
        )
        await self.db.commit()
        logger.info("Provisioned transporter %s (%s) with admin %s", tenant.id, slug, admin.id)
        return await self.get_tenant(tenant.id), admin

    async def list_transporters(
        self,
        params: PageParams,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[TransporterSummary], int]:
        tenants, total = await self.repository.list(
            page=params.page,
            page_size=params.page_size,
            search=params.search,
            is_active=is_active,
        )
        counts = await self.repository.counts_by_tenant([t.id for t in tenants])
        summaries = [
            TransporterSummary(
                **TenantRead.model_validate(tenant).model_dump(),
                counts=TransporterCounts(**counts[tenant.id]),
            )
            for tenant in tenants
        ]
        return summaries, total

    async def get_transporter_details(self, tenant_id: UUID) -> TransporterDetail:
        tenant = await self.get_tenant(tenant_id)
        counts = await self.repository.counts_by_tenant([tenant.id])
        revenue = (
            await self.db.execute(
                select(func.sum(Shipment.grand_total)).where(Shipment.tenant_id == tenant.id)
            )
        ).scalar()
        admins = await self.db.execute(
            select(User)
            .where(User.tenant_id == tenant.id, User.role == UserRole.ADMIN)
            .order_by(User.created_at.asc())
        )
        return TransporterDetail(
            **TenantRead.model_validate(tenant).model_dump(),
            counts=TransporterCounts(**counts[tenant.id]),
            total_revenue=to_money(revenue),
            admins=[TransporterAdmin.model_validate(user) for user in admins.scalars().all()],
        )

    async def update_transporter(self, tenant_id: UUID, values: dict) -> Tenant:
        tenant = await self.get_tenant(tenant_id)
        if values.get("name"):
            existing = await self.repository.get_by_name(values["name"])
            if existing and existing.id != tenant.id:
                raise Conflict(f"A transporter named {values['name']} already exists", details={"field": "name"})
            values["name"] = values["name"].strip()

        for field, value in values.items():
            setattr(tenant, field, value)
        await self.db.commit()
        if "is_active" in values:
            logger.info("Transporter %s active=%s", tenant_id, values["is_active"])
        return await self._reload(tenant_id)

    async def set_status(self, tenant_id: UUID, is_active: bool) -> Tenant:
        return await self.update_transporter(tenant_id, {"is_active": is_active})

    async def _reload(self, tenant_id: UUID) -> Tenant:
        result = await self.db.execute(
            select(Tenant).where(Tenant.id == tenant_id).execution_options(populate_existing=True)
        )
        return result.scalar_one()

