"""
User repository - database operations for User.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.security import hash_password
from logitrack.models.enums import UserRole
from logitrack.models.user import User
from logitrack.repositories.base import paginate, search_clause


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get a user by ID, regardless of tenant."""
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_in_tenant(self, tenant_id: UUID, user_id: UUID) -> Optional[User]:
        result = await self.db.execute(
            select(User)
            .where(User.tenant_id == tenant_id, User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, tenant_id: UUID, email: str) -> Optional[User]:
        """Get a user by email within a tenant (case-insensitive email)."""
        if not email or not email.strip():
            return None
        email_clean = email.strip().lower()
        result = await self.db.execute(
            select(User).where(
                User.tenant_id == tenant_id,
                func.lower(User.email) == email_clean,
            )
        )
        return result.scalar_one_or_none()

    async def get_superadmin_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(
                User.role == UserRole.SUPERADMIN,
                func.lower(User.email) == email.strip().lower(),
            )
        )
        return result.scalars().first()

    async def find_tenant_users_by_email(self, email: str) -> List[User]:
        """All non-superadmin users with this email, across tenants."""
        result = await self.db.execute(
            select(User).where(
                User.tenant_id.is_not(None),
                func.lower(User.email) == email.strip().lower(),
            )
        )
        return list(result.scalars().all())

    async def list(
        self,
        tenant_id: Optional[UUID],
        page: int,
        page_size: int,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[User], int]:
        """List users; a None tenant_id lists across tenants."""
        query = select(User)
        if tenant_id is not None:
            query = query.where(User.tenant_id == tenant_id)
        if role is not None:
            query = query.where(User.role == role)
        if is_active is not None:
            query = query.where(User.is_active == is_active)
        if search and search.strip():
            query = query.where(search_clause(search, User.name, User.email))
        query = query.order_by(User.created_at.desc(), User.name.asc())
        return await paginate(self.db, query, page, page_size)

    async def count_active(self, tenant_id: UUID, role: UserRole) -> int:
        result = await self.db.execute(
            select(func.count(User.id)).where(
                User.tenant_id == tenant_id,
                User.role == role,
                User.is_active.is_(True),
            )
        )
        return int(result.scalar_one())

    async def create(
        self,
        tenant_id: Optional[UUID],
        name: str,
        email: str,
        password: str,
        role: UserRole,
        phone: Optional[str] = None,
        settings: Optional[dict] = None,
    ) -> User:
        """Create a new user."""
        user = User(
            tenant_id=tenant_id,
            name=name,
            email=email.strip().lower(),
            phone=phone,
            hashed_password=hash_password(password),
            role=role,
            is_active=True,
            settings=settings,
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update(self, user: User, values: dict) -> User:
        if "email" in values and values["email"]:
            values["email"] = values["email"].strip().lower()
        if "password" in values:
            values["hashed_password"] = hash_password(values.pop("password"))
        for field, value in values.items():
            setattr(user, field, value)
        await self.db.flush()
        return user

    async def delete(self, user: User) -> None:
        await self.db.delete(user)
        await self.db.flush()
