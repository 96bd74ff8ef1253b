"""
Platform-wide settings service.
"""

import logging
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.repositories.settings_repository import GlobalSettingsRepository
from logitrack.schemas.settings import DEFAULT_GLOBAL_SETTINGS

logger = logging.getLogger(__name__)


class SettingsService:
    """Reads and writes the global settings singleton."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = GlobalSettingsRepository(db)

    async def get_settings(self) -> Dict[str, Any]:
        """Return the settings, creating the row with defaults on first read."""
        row = await self.repository.ensure(dict(DEFAULT_GLOBAL_SETTINGS))
        await self.db.commit()
        return dict(row.data or {})

    async def update_settings(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Replace the settings blob."""
        row = await self.repository.ensure(dict(DEFAULT_GLOBAL_SETTINGS))
        await self.repository.save(row, dict(data))
        await self.db.commit()
        logger.info("Global settings updated (%d keys)", len(data))
        return dict(data)
