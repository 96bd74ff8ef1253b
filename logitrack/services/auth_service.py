"""
Authentication service for user login and token management.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.jwt import create_access_token
from logitrack.core.security import hash_password, verify_password
from logitrack.errors import (
    Forbidden,
    TenantInactive,
    TenantNotFound,
    TenantRequired,
    Unauthorized,
    ValidationFailed,
)
from logitrack.models.enums import ShipmentStatus, UserRole
from logitrack.models.tenant import Tenant
from logitrack.models.user import User
from logitrack.repositories.driver_repository import DriverRepository
from logitrack.repositories.shipment_repository import ShipmentRepository
from logitrack.repositories.tenant_repository import TenantRepository
from logitrack.repositories.user_repository import UserRepository
from logitrack.schemas.driver import DriverRead
from logitrack.schemas.shipment import ShipmentRead
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
from logitrack.services.driver_service import DriverService
from logitrack.utils.time import utc_now

logger = logging.getLogger(__name__)

OPEN_SHIPMENT_STATUSES = (ShipmentStatus.PENDING, ShipmentStatus.IN_PROGRESS)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repository = UserRepository(db)
        self.tenant_repository = TenantRepository(db)

    async def _find_login_user(self, email: str, tenant_slug: Optional[str]) -> Optional[User]:
        """
        Locate the account an email refers to.

        With a slug the lookup is confined to that tenant. Without one a
        superadmin matches first, then the single tenant user holding the
        email.
        """
        if tenant_slug:
            tenant = await self.tenant_repository.get_by_slug(tenant_slug)
            if tenant is None:
                raise TenantNotFound(f"Tenant '{tenant_slug}' not found")
            user = await self.user_repository.get_by_email(tenant.id, email)
            if user is None:
                user = await self.user_repository.get_superadmin_by_email(email)
            return user

        user = await self.user_repository.get_superadmin_by_email(email)
        if user is not None:
            return user

        candidates = await self.user_repository.find_tenant_users_by_email(email)
        if len(candidates) > 1:
            raise TenantRequired("This email exists in several tenants; specify the tenant")
        return candidates[0] if candidates else None

    async def authenticate_user(
        self,
        email: str,
        password: str,
        tenant_slug: Optional[str] = None,
    ) -> User:
        """
        Authenticate a user by email and password.

        Raises:
            Unauthorized: unknown email or wrong password
            Forbidden: the account is inactive
            TenantInactive: the user's tenant is deactivated
        """
        user = await self._find_login_user(email, tenant_slug)

        if not user or not verify_password(password, user.hashed_password):
            logger.info("Failed login for %s", email)
            raise Unauthorized("Invalid email or password")

        if not user.is_active:
            raise Forbidden("User account is inactive")

        if user.tenant is not None and not user.tenant.is_active:
            raise TenantInactive("Your organization's account is inactive")

        return user

    def create_token_for_user(self, user: User) -> str:
        """
        Create a JWT access token for a user.

        Args:
            user: User object

        Returns:
            JWT token string
        """
        token_data = {
            "user_id": str(user.id),
            "tenant_id": str(user.tenant_id) if user.tenant_id else None,
            "role": user.role.value,
        }
        return create_access_token(token_data)

    async def login(self, credentials: LoginRequest, tenant_slug: Optional[str] = None) -> LoginResponse:
        """
        Perform user login.

        Returns:
            LoginResponse with token, user data and the tenant slug
        """
        user = await self.authenticate_user(credentials.email, credentials.password, tenant_slug)
        access_token = self.create_token_for_user(user)
        logger.info("User %s logged in (role=%s)", user.id, user.role.value)

        tenant: Optional[Tenant] = user.tenant
        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            user=UserRead.model_validate(user),
            tenant_slug=tenant.slug if tenant else None,
        )

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        await self.user_repository.update(user, data.model_dump(exclude_unset=True))
        await self.db.commit()
        return await self.user_repository.get_by_id(user.id)

    def get_settings(self, user: User) -> UserSettings:
        """Stored preferences merged over the defaults."""
        return UserSettings(**(user.settings or {}))

    async def update_settings(self, user: User, data: UserSettingsUpdate) -> UserSettings:
        merged = data.merged_into(self.get_settings(user).model_dump())
        await self.user_repository.update(user, {"settings": merged})
        await self.db.commit()
        return UserSettings(**merged)

    async def change_password(self, user: User, data: ChangePasswordRequest) -> None:
        if not verify_password(data.current_password, user.hashed_password):
            raise ValidationFailed("Current password is incorrect")
        await self.user_repository.update(user, {"hashed_password": hash_password(data.new_password)})
        await self.db.commit()
        logger.info("User %s changed password", user.id)

    async def export_data(self, user: User) -> AccountExport:
        """Profile, preferences and, for drivers, the assigned shipments."""
        driver = await DriverRepository(self.db).get_by_user_id(user.id)
        shipments = []
        if driver is not None:
            shipments = await ShipmentRepository(self.db).list_for_driver(driver.tenant_id, driver.id)
        return AccountExport(
            user=UserRead.model_validate(user),
            settings=self.get_settings(user),
            driver=DriverRead.model_validate(driver) if driver is not None else None,
            shipments=[ShipmentRead.model_validate(shipment) for shipment in shipments],
            exported_at=utc_now(),
        )

    async def delete_account(self, user: User) -> None:
        """
        Delete the caller's own account.

        A driver profile goes with it; its shipments stay, unassigned.

        Raises:
            Forbidden: superadmin accounts
            ValidationFailed: the caller is the last active admin of its
                tenant, or still has pending or in-progress shipments
        """
        if user.role == UserRole.SUPERADMIN:
            raise Forbidden("Superadmin accounts cannot be deleted here")

        user_id = user.id

        if user.role == UserRole.ADMIN:
            admins = await self.user_repository.count_active(user.tenant_id, UserRole.ADMIN)
            if admins <= 1:
                raise ValidationFailed("The last active admin of a transporter cannot delete the account")

        driver = await DriverRepository(self.db).get_by_user_id(user.id)
        if driver is not None:
            open_shipments = await ShipmentRepository(self.db).list_for_driver(
                driver.tenant_id, driver.id, statuses=OPEN_SHIPMENT_STATUSES
            )
            if open_shipments:
                raise ValidationFailed(
                    "Complete or reassign active shipments before deleting the account",
                    details={"open_shipments": len(open_shipments)},
                )
            await DriverService(self.db).delete_loaded_driver(driver.tenant_id, driver)
        else:
            await self.user_repository.delete(user)

        await self.db.commit()
        logger.info("User %s deleted their account", user_id)
