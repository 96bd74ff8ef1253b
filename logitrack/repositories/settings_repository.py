"""
Global settings repository.

The settings live in a single row (id=1) that is created on first read.
"""

from typing import Any, Dict

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.models.global_settings import GlobalSettings


SETTINGS_ROW_ID = 1


class GlobalSettingsRepository:
    """Repository for the GlobalSettings singleton."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "sqlite":
            return sqlite_insert(GlobalSettings)
        return pg_insert(GlobalSettings)

    async def ensure(self, defaults: Dict[str, Any]) -> GlobalSettings:
        """Insert the row if missing (idempotent under concurrency), then read it."""
        stmt = (
            self._insert()
            .values(id=SETTINGS_ROW_ID, data=defaults)
            .on_conflict_do_nothing(index_elements=["id"])
        )
        await self.db.execute(stmt)
        result = await self.db.execute(
            select(GlobalSettings)
            .where(GlobalSettings.id == SETTINGS_ROW_ID)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def save(self, row: GlobalSettings, data: Dict[str, Any]) -> GlobalSettings:
        row.data = data
        await self.db.flush()
        return row
