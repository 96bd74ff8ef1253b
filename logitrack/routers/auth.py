"""
Authentication router for login and self-service account endpoints.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.config import settings
from logitrack.core.dependencies import get_current_user
from logitrack.core.tenancy import extract_tenant_slug
from logitrack.db.session import get_db
from logitrack.models.user import User
from logitrack.schemas.user import (
    AccountExport,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    UserRead,
    UserSettings,
    UserSettingsUpdate,
)
from logitrack.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate user and return JWT access token.

    The tenant comes from the subdomain, X-Tenant-Slug header or ?tenant=
    when given; otherwise the email must identify a single account.
    """
    auth_service = AuthService(db)
    slug = extract_tenant_slug(request, settings.TENANT_ROOT_DOMAIN)
    return await auth_service.login(credentials, tenant_slug=slug)


@router.get("/me", response_model=UserRead)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """
    Get information about the currently authenticated user.
    """
    return current_user


@router.put("/profile", response_model=UserRead)
async def update_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update the caller's name and phone."""
    return await AuthService(db).update_profile(current_user, data)


@router.get("/settings", response_model=UserSettings)
async def get_settings(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return AuthService(db).get_settings(current_user)


@router.put("/settings", response_model=UserSettings)
async def update_settings(
    data: UserSettingsUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await AuthService(db).update_settings(current_user, data)


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    data: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await AuthService(db).change_password(current_user, data)


@router.get("/export-data", response_model=AccountExport)
async def export_data(
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Download the caller's data as a JSON attachment."""
    export = await AuthService(db).export_data(current_user)
    filename = f"user-data-{current_user.id}-{export.exported_at.date().isoformat()}.json"
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return export


@router.delete("/delete-account", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await AuthService(db).delete_account(current_user)
