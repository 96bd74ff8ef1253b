"""
Create the platform superadmin account.

Superadmins carry no tenant. Credentials come from SUPERADMIN_EMAIL,
SUPERADMIN_PASSWORD and SUPERADMIN_NAME, with development defaults.

Usage:
    python scripts/create_superadmin.py
"""

import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add parent directory to path so we can import logitrack modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from logitrack.db.session import get_async_session_context
from logitrack.models.enums import UserRole
from logitrack.repositories.settings_repository import GlobalSettingsRepository
from logitrack.repositories.user_repository import UserRepository
from logitrack.schemas.settings import DEFAULT_GLOBAL_SETTINGS


async def create_superadmin() -> None:
    email = os.getenv("SUPERADMIN_EMAIL", "superadmin@logitrack.example.com")
    password = os.getenv("SUPERADMIN_PASSWORD", "superadmin123")  # Change this in production!
    name = os.getenv("SUPERADMIN_NAME", "Platform Admin")

    async with get_async_session_context() as db:
        user_repo = UserRepository(db)
        existing = await user_repo.get_superadmin_by_email(email)
        if existing:
            print(f"[OK] Superadmin already exists: {existing.email} ({existing.id})")
            return

        user = await user_repo.create(
            tenant_id=None,
            name=name,
            email=email,
            password=password,
            role=UserRole.SUPERADMIN,
        )
        await GlobalSettingsRepository(db).ensure(DEFAULT_GLOBAL_SETTINGS)

        print("[OK] Created superadmin:")
        print(f"  Email: {user.email}")
        print(f"  User ID: {user.id}")
        print("\nLogin without a tenant slug:")
        print(f"  POST /api/auth/login  {{\"email\": \"{email}\", \"password\": \"...\"}}")


if __name__ == "__main__":
    load_dotenv()
    print("Creating superadmin...\n")
    asyncio.run(create_superadmin())
    print("\n[OK] Done!")
