"""
Global search: one term fanned out to every list endpoint the role may use.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from logitrack.client.api import ApiClient
from logitrack.core.permissions import Action, Resource, can
from logitrack.models.enums import UserRole

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 3

SEARCHABLE_RESOURCES = (
    Resource.SHIPMENTS,
    Resource.DRIVERS,
    Resource.VEHICLES,
    Resource.EMPLOYEES,
    Resource.EXPENSES,
)


def searchable_resources(role: Union[UserRole, str, None]) -> List[Resource]:
    return [resource for resource in SEARCHABLE_RESOURCES if can(role, resource, Action.LIST)]


async def global_search(
    client: ApiClient,
    term: str,
    role: Optional[Union[UserRole, str]] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Search shipments, drivers, vehicles, employees and expenses at once.

    Calls run concurrently with ``page_size=3``. A failed call is logged and
    left out of the result, so the result holds only resources that
    answered. A blank term issues no calls.
    """
    query = (term or "").strip()
    if not query:
        return {}

    resources = searchable_resources(role if role is not None else client.session.role)
    if not resources:
        return {}

    responses = await asyncio.gather(
        *(client.list(resource.value, search=query, page_size=SEARCH_PAGE_SIZE) for resource in resources),
        return_exceptions=True,
    )

    results: Dict[str, List[Dict[str, Any]]] = {}
    for resource, response in zip(resources, responses):
        if isinstance(response, Exception):
            logger.warning("Global search on %s failed: %s", resource.value, response)
            continue
        if isinstance(response, BaseException):
            raise response
        results[resource.value] = list((response or {}).get("items", []))
    return results
