"""
Tenant resolution.

Every tenant-scoped request is bound to exactly one tenant. The slug is
taken from the Host subdomain, the X-Tenant-Slug header or the ``tenant``
query parameter, in that order. Without a slug the authenticated user's own
tenant is used.
"""

import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.config import settings
from logitrack.core.permissions import check_is_superadmin
from logitrack.errors import Forbidden, TenantInactive, TenantNotFound, TenantRequired
from logitrack.models.tenant import Tenant
from logitrack.models.user import User
from logitrack.repositories.tenant_repository import TenantRepository

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-Slug"
TENANT_QUERY_PARAM = "tenant"

# Subdomains that never name a tenant
RESERVED_SUBDOMAINS = {"www", "api"}


def slug_from_host(host: Optional[str], root_domain: Optional[str]) -> Optional[str]:
    """
    Extract the tenant slug from a host such as ``acme.example.com``.

    Only strict subdomains of the configured root domain count.
    """
    if not host or not root_domain:
        return None
    hostname = host.split(":", 1)[0].strip().lower().rstrip(".")
    root = root_domain.strip().lower().lstrip(".")
    suffix = "." + root
    if not hostname.endswith(suffix):
        return None
    prefix = hostname[: -len(suffix)]
    if not prefix or "." in prefix or prefix in RESERVED_SUBDOMAINS:
        return None
    return prefix


def extract_tenant_slug(request: Request, root_domain: Optional[str] = None) -> Optional[str]:
    """Return the first slug found in subdomain, header, then query string."""
    slug = slug_from_host(request.headers.get("host"), root_domain)
    if slug:
        return slug

    header_value = request.headers.get(TENANT_HEADER)
    if header_value and header_value.strip():
        return header_value.strip().lower()

    query_value = request.query_params.get(TENANT_QUERY_PARAM)
    if query_value and query_value.strip():
        return query_value.strip().lower()

    return None


async def resolve_tenant(request: Request, user: User, db: AsyncSession) -> Tenant:
    """
    Bind the request to a tenant.

    Raises:
        TenantNotFound: slug does not match any tenant
        TenantInactive: tenant is deactivated
        Forbidden: a tenant user addressed another tenant
        TenantRequired: no slug and no tenant on the token
    """
    repo = TenantRepository(db)
    slug = extract_tenant_slug(request, settings.TENANT_ROOT_DOMAIN)

    if slug:
        tenant = await repo.get_by_slug(slug)
        if tenant is None:
            raise TenantNotFound(f"Tenant '{slug}' not found")
        if not check_is_superadmin(user.role) and user.tenant_id != tenant.id:
            logger.warning("User %s attempted to access tenant %s", user.id, slug)
            raise Forbidden("You do not have access to this tenant")
    else:
        if user.tenant_id is None:
            raise TenantRequired(
                f"Tenant required: send the {TENANT_HEADER} header or ?{TENANT_QUERY_PARAM}= parameter"
            )
        tenant = await repo.get_by_id(user.tenant_id)
        if tenant is None:
            raise TenantNotFound("Tenant not found")

    if not tenant.is_active:
        raise TenantInactive(f"Tenant '{tenant.slug}' is inactive")

    return tenant
