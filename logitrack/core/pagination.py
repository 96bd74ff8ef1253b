"""
Query parameters shared by every list endpoint.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Type

from fastapi import Query
from pydantic import BaseModel

from logitrack.core.config import settings
from logitrack.schemas.base import Page


@dataclass
class PageParams:
    page: int
    page_size: int
    search: Optional[str] = None


def page_params(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    page_size_camel: Optional[int] = Query(
        None, alias="pageSize", ge=1, le=settings.MAX_PAGE_SIZE, description="Alias of page_size"
    ),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE, description="Alias of page_size"),
    search: Optional[str] = Query(None, max_length=200),
) -> PageParams:
    size = page_size or page_size_camel or limit or settings.DEFAULT_PAGE_SIZE
    term = search.strip() if search and search.strip() else None
    return PageParams(page=page, page_size=size, search=term)


def build_page(schema: Type[BaseModel], items: Sequence[Any], total: int, params: PageParams) -> Page:
    """Serialize one page of ORM rows into the shared envelope."""
    return Page[schema](
        items=[schema.model_validate(item) for item in items],
        total=total,
        page=params.page,
        page_size=params.page_size,
    )
