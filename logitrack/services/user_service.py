"""
User management service.

Tenant admins manage dispatchers and drivers; only a superadmin may create
or promote ADMIN users.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.pagination import PageParams
from logitrack.core.permissions import check_is_superadmin
from logitrack.core.security import generate_temporary_password
from logitrack.errors import Conflict, Forbidden, NotFound, ValidationFailed
from logitrack.models.enums import UserRole
from logitrack.models.user import User
from logitrack.repositories.driver_repository import DriverRepository
from logitrack.repositories.user_repository import UserRepository
from logitrack.schemas.user import UserCreate
from logitrack.services.driver_service import DriverService

logger = logging.getLogger(__name__)


class UserService:
    """Service for user business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = UserRepository(db)
        self.driver_repository = DriverRepository(db)

    async def list_users(
        self,
        tenant_id: Optional[UUID],
        params: PageParams,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[User], int]:
        return await self.repository.list(
            tenant_id=tenant_id,
            page=params.page,
            page_size=params.page_size,
            search=params.search,
            role=role,
            is_active=is_active,
        )

    async def get_user(self, tenant_id: UUID, user_id: UUID) -> User:
        user = await self.repository.get_in_tenant(tenant_id, user_id)
        if not user:
            raise NotFound(f"User {user_id} not found")
        return user

    async def create_user(self, actor: User, tenant_id: UUID, data: UserCreate) -> Tuple[User, Optional[str]]:
        """
        Create a user inside a tenant.

        DRIVER users get a driver profile in the same transaction. When no
        password is supplied a temporary one is generated and returned.
        """
        if data.role == UserRole.ADMIN and not check_is_superadmin(actor.role):
            raise Forbidden("Only a superadmin can create ADMIN users")

        if await self.repository.get_by_email(tenant_id, data.email):
            raise Conflict(f"A user with email {data.email} already exists", details={"field": "email"})

        temporary_password = None
        password = data.password
        if not password:
            temporary_password = generate_temporary_password()
            password = temporary_password

        user = await self.repository.create(
            tenant_id=tenant_id,
            name=data.name,
            email=data.email,
            password=password,
            role=data.role,
            phone=data.phone,
        )
        if data.role == UserRole.DRIVER:
            await DriverService(self.db).create_profile(tenant_id, user.id, data.license_number)

        await self.db.commit()
        logger.info("User %s created user %s with role %s", actor.id, user.id, data.role.value)
        return await self.get_user(tenant_id, user.id), temporary_password

    async def update_user(self, actor: User, tenant_id: UUID, user_id: UUID, values: dict) -> User:
        user = await self.get_user(tenant_id, user_id)
        self._check_can_manage(actor, user)

        new_role = values.get("role")
        if new_role is not None and new_role != user.role:
            if new_role == UserRole.ADMIN and not check_is_superadmin(actor.role):
                raise Forbidden("Only a superadmin can promote users to ADMIN")
            if UserRole.DRIVER in (new_role, user.role):
                raise ValidationFailed("Driver accounts are managed through /api/drivers")
        elif "role" in values:
            values.pop("role")

        if values.get("email"):
            existing = await self.repository.get_by_email(tenant_id, values["email"])
            if existing and existing.id != user.id:
                raise Conflict(f"A user with email {values['email']} already exists", details={"field": "email"})

        await self.repository.update(user, values)
        await self.db.commit()
        return await self.get_user(tenant_id, user_id)

    async def set_status(self, actor: User, tenant_id: UUID, user_id: UUID, is_active: bool) -> User:
        user = await self.get_user(tenant_id, user_id)
        self._check_can_manage(actor, user)
        if user.id == actor.id and not is_active:
            raise ValidationFailed("You cannot deactivate your own account")

        await self.repository.update(user, {"is_active": is_active})
        await self.db.commit()
        logger.info("User %s set user %s active=%s", actor.id, user.id, is_active)
        return await self.get_user(tenant_id, user_id)

    async def reset_password(self, actor: User, tenant_id: UUID, user_id: UUID) -> str:
        """Replace the password with a temporary one, returned once."""
        user = await self.get_user(tenant_id, user_id)
        self._check_can_manage(actor, user)

        temporary_password = generate_temporary_password()
        await self.repository.update(user, {"password": temporary_password})
        await self.db.commit()
        logger.info("User %s reset the password of user %s", actor.id, user.id)
        return temporary_password

    async def delete_user(self, actor: User, tenant_id: UUID, user_id: UUID) -> None:
        user = await self.get_user(tenant_id, user_id)
        self._check_can_manage(actor, user)
        if user.id == actor.id:
            raise ValidationFailed("You cannot delete your own account")

        driver = await self.driver_repository.get_by_user_id(user.id)
        if driver is not None:
            # Removes the user as well
            await DriverService(self.db).delete_loaded_driver(tenant_id, driver)
        else:
            await self.repository.delete(user)
        await self.db.commit()
        logger.info("User %s deleted user %s", actor.id, user_id)

    @staticmethod
    def _check_can_manage(actor: User, target: User) -> None:
        if target.role == UserRole.ADMIN and target.id != actor.id and not check_is_superadmin(actor.role):
            raise Forbidden("Only a superadmin can manage other ADMIN users")
