"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite database file. The app's get_db dependency is
overridden to hand out sessions bound to it, so API tests run without a
PostgreSQL server.
"""

import asyncio
import os
from datetime import timedelta
from decimal import Decimal
from typing import Optional

# Settings are read at import time; point them at SQLite before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from logitrack.core.jwt import create_access_token
from logitrack.core.tenancy import TENANT_HEADER
from logitrack.db.base import Base
from logitrack.db.session import get_db
from logitrack.main import app
from logitrack.models import Tenant, User  # noqa: F401  registers every table
from logitrack.models.enums import UserRole
from logitrack.repositories.driver_repository import DriverRepository
from logitrack.repositories.tenant_repository import TenantRepository
from logitrack.repositories.user_repository import UserRepository
from logitrack.services.tenant_service import slugify


TEST_PASSWORD = "secret123"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no database")
    config.addinivalue_line("markers", "api: exercises the HTTP API against SQLite")


def run(coro):
    """Run a coroutine from a synchronous test."""
    return asyncio.run(coro)


def token_for(user: User, expires_delta: Optional[timedelta] = None) -> str:
    return create_access_token(
        {
            "user_id": str(user.id),
            "tenant_id": str(user.tenant_id) if user.tenant_id else None,
            "role": user.role.value,
        },
        expires_delta=expires_delta,
    )


def auth_headers(user: User, tenant_slug: Optional[str] = None) -> dict:
    headers = {"Authorization": f"Bearer {token_for(user)}"}
    if tenant_slug:
        headers[TENANT_HEADER] = tenant_slug
    return headers


def shipment_payload(bill_no: str = "LR-0001", **overrides) -> dict:
    payload = {
        "bill_no": bill_no,
        "date": "2025-03-10",
        "transport_name": "Acme Logistics",
        "consignor_name": "Shree Textiles",
        "consignor_address": "12 MIDC, Pune",
        "consignee_name": "Gupta Traders",
        "consignee_address": "4 Ring Road, Surat",
        "goods_type": "Textiles",
        "weight": "1200",
        "payment_method": "PAID",
        "source": "Pune",
        "destination": "Surat",
    }
    payload.update(overrides)
    return payload


def money(value) -> Decimal:
    return Decimal(str(value))


class Seeder:
    """Creates tenants and users directly through the repositories."""

    def __init__(self, session_maker: async_sessionmaker):
        self.session_maker = session_maker
        self._counter = 0

    def tenant(self, name: str = "Acme Logistics", is_active: bool = True) -> Tenant:
        async def _create():
            async with self.session_maker() as db:
                tenant = await TenantRepository(db).create(
                    name=name,
                    slug=slugify(name),
                    is_active=is_active,
                    settings={},
                )
                await db.commit()
                return tenant

        return run(_create())

    def user(
        self,
        tenant: Optional[Tenant],
        role: UserRole = UserRole.ADMIN,
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        name: Optional[str] = None,
    ) -> User:
        self._counter += 1
        email = email or f"{role.value.lower()}{self._counter}@example.com"

        async def _create():
            async with self.session_maker() as db:
                user = await UserRepository(db).create(
                    tenant_id=tenant.id if tenant else None,
                    name=name or f"{role.value.title()} {self._counter}",
                    email=email,
                    password=password,
                    role=role,
                )
                if role == UserRole.DRIVER:
                    await DriverRepository(db).create(tenant.id, user.id, f"DL-{self._counter:05d}")
                await db.commit()
                return user

        return run(_create())

    def superadmin(self, email: str = "root@example.com") -> User:
        return self.user(None, role=UserRole.SUPERADMIN, email=email)


@pytest.fixture
def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'logitrack-test.db'}",
        poolclass=NullPool,
    )

    async def _create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    run(_create_schema())
    yield engine
    run(engine.dispose())


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def seed(session_maker):
    return Seeder(session_maker)


@pytest.fixture
def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def tenant(seed):
    return seed.tenant("Acme Logistics")


@pytest.fixture
def admin(seed, tenant):
    return seed.user(tenant, UserRole.ADMIN, email="admin@acme.example.com")


@pytest.fixture
def admin_headers(admin, tenant):
    return auth_headers(admin, tenant.slug)
