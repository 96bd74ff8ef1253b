"""
Public tenant lookup used by login pages to resolve a subdomain.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.db.session import get_db
from logitrack.schemas.tenant import TenantPublic
from logitrack.services.tenant_service import TenantService

router = APIRouter(prefix="/api/tenants", tags=["Tenants"])


@router.get("/slug/{slug}", response_model=TenantPublic)
async def get_tenant_by_slug(slug: str, db: AsyncSession = Depends(get_db)):
    """No authentication; inactive tenants are returned with is_active false."""
    return await TenantService(db).get_by_slug(slug)
