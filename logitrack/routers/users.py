"""
User management router.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.dependencies import RequestContext, require_permission
from logitrack.core.pagination import PageParams, build_page, page_params
from logitrack.core.permissions import Action, Resource
from logitrack.db.session import get_db
from logitrack.models.enums import UserRole
from logitrack.schemas.base import Page
from logitrack.schemas.user import PasswordReset, UserCreate, UserCreated, UserRead, UserStatusUpdate, UserUpdate
from logitrack.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=Page[UserRead])
async def list_users(
    ctx: RequestContext = Depends(require_permission(Resource.USERS, Action.LIST)),
    db: AsyncSession = Depends(get_db),
    params: PageParams = Depends(page_params),
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
):
    """List the tenant's users; search matches name and email."""
    items, total = await UserService(db).list_users(ctx.tenant_id, params, role=role, is_active=is_active)
    return build_page(UserRead, items, total, params)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.USERS, Action.READ)),
    db: AsyncSession = Depends(get_db),
):
    return await UserService(db).get_user(ctx.tenant_id, user_id)


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    ctx: RequestContext = Depends(require_permission(Resource.USERS, Action.CREATE)),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a user in the resolved tenant.

    Only superadmins may create ADMIN users. A temporary password is
    generated and returned once when none is supplied.
    """
    user, temporary_password = await UserService(db).create_user(ctx.user, ctx.tenant_id, data)
    return UserCreated(
        **UserRead.model_validate(user).model_dump(),
        temporary_password=temporary_password,
    )


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    ctx: RequestContext = Depends(require_permission(Resource.USERS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await UserService(db).update_user(
        ctx.user, ctx.tenant_id, user_id, data.model_dump(exclude_unset=True)
    )


@router.patch("/{user_id}/status", response_model=UserRead)
async def update_user_status(
    user_id: UUID,
    data: UserStatusUpdate,
    ctx: RequestContext = Depends(require_permission(Resource.USERS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    """Activate or deactivate a user."""
    return await UserService(db).set_status(ctx.user, ctx.tenant_id, user_id, data.is_active)


@router.post("/{user_id}/reset-password", response_model=PasswordReset)
async def reset_password(
    user_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.USERS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    temporary_password = await UserService(db).reset_password(ctx.user, ctx.tenant_id, user_id)
    return PasswordReset(user_id=user_id, temporary_password=temporary_password)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.USERS, Action.DELETE)),
    db: AsyncSession = Depends(get_db),
):
    await UserService(db).delete_user(ctx.user, ctx.tenant_id, user_id)
