"""
Query helpers shared by the repositories.
"""

from typing import Any, List, Tuple

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_clause(term: str, *columns):
    """Case-insensitive substring match OR-ed over the given columns."""
    pattern = f"%{_escape_like(term.strip())}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))


def contains_clause(column, term: str):
    return column.ilike(f"%{_escape_like(term.strip())}%", escape="\\")


async def paginate(
    db: AsyncSession,
    stmt: Select,
    page: int,
    page_size: int,
) -> Tuple[List[Any], int]:
    """Run one page of a select and count every match."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    result = await db.execute(
        stmt.offset((page - 1) * page_size).limit(page_size)
    )
    return list(result.scalars().all()), int(total or 0)
