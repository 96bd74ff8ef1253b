"""
FastAPI dependencies for the application.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.jwt import decode_access_token
from logitrack.core.permissions import Action, Resource, check_is_superadmin, raise_if_cannot
from logitrack.core.tenancy import resolve_tenant
from logitrack.db.session import get_db
from logitrack.errors import Forbidden, Unauthorized
from logitrack.models.enums import UserRole
from logitrack.models.tenant import Tenant
from logitrack.models.user import User
from logitrack.repositories.user_repository import UserRepository

# Security scheme for JWT bearer tokens; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get the current authenticated user from JWT token.

    Validates the JWT token, loads the user from database,
    and ensures the user is active.

    Raises:
        401: If token is missing, invalid, expired or the user no longer exists
        403: If user is not active
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authenticated")

    # Decode JWT token
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise Unauthorized("Invalid or expired token")

    # Extract user_id from token
    try:
        user_id = UUID(str(payload.get("user_id")))
    except ValueError:
        raise Unauthorized("Invalid token payload")

    # Load user from database
    user = await UserRepository(db).get_by_id(user_id)
    if not user:
        raise Unauthorized("User not found")

    if not user.is_active:
        raise Forbidden("User account is inactive")

    return user


@dataclass
class RequestContext:
    """The authenticated user and the tenant the request is bound to."""

    user: User
    tenant: Tenant

    @property
    def tenant_id(self) -> UUID:
        return self.tenant.id

    @property
    def role(self) -> UserRole:
        return self.user.role


async def get_request_context(
    request: Request,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> RequestContext:
    tenant = await resolve_tenant(request, user, db)
    return RequestContext(user=user, tenant=tenant)


def require_permission(resource: Resource, action: Action):
    """
    Dependency factory to require a capability from the role policy.

    Usage:
        @router.post("/")
        async def create_vehicle(
            ctx: RequestContext = Depends(require_permission(Resource.VEHICLES, Action.CREATE)),
        ):
            ...

    The role is checked before the tenant is resolved.
    """
    async def check_permission(
        request: Request,
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ) -> RequestContext:
        raise_if_cannot(user.role, resource, action)
        tenant = await resolve_tenant(request, user, db)
        return RequestContext(user=user, tenant=tenant)

    return check_permission


async def require_superadmin(user: User = Depends(get_current_user)) -> User:
    """Dependency to require the platform superadmin role."""
    if not check_is_superadmin(user.role):
        raise Forbidden("Superadmin access required")
    return user
