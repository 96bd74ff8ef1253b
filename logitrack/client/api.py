"""
Async HTTP client for the LogiTrack API.

Attaches the bearer token and tenant slug to every request, validates
payloads with the same schemas the server uses, and ends the session when
the server answers 401.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Type, Union

import httpx
from pydantic import BaseModel

from logitrack.client.config import ClientSettings
from logitrack.client.session import SessionStore
from logitrack.schemas.driver import DriverCreate, DriverUpdate
from logitrack.schemas.employee import EmployeeCreate, EmployeeUpdate
from logitrack.schemas.expense import ExpenseCreate, ExpenseUpdate
from logitrack.schemas.shipment import ShipmentCreate, ShipmentUpdate
from logitrack.schemas.user import LoginRequest, UserCreate, UserUpdate
from logitrack.schemas.vehicle import VehicleCreate, VehicleUpdate

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-Slug"
PDF_CONTENT_TYPE = "application/pdf"

CREATE_SCHEMAS: Dict[str, Type[BaseModel]] = {
    "shipments": ShipmentCreate,
    "vehicles": VehicleCreate,
    "drivers": DriverCreate,
    "employees": EmployeeCreate,
    "expenses": ExpenseCreate,
    "users": UserCreate,
}

UPDATE_SCHEMAS: Dict[str, Type[BaseModel]] = {
    "shipments": ShipmentUpdate,
    "vehicles": VehicleUpdate,
    "drivers": DriverUpdate,
    "employees": EmployeeUpdate,
    "expenses": ExpenseUpdate,
    "users": UserUpdate,
}

Confirm = Callable[[str], Union[bool, Awaitable[bool]]]


class ApiError(Exception):
    """An error payload returned by the API."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"{status_code} {code}: {message}")
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            return cls(
                response.status_code,
                error.get("code", "error"),
                error.get("message", response.reason_phrase),
                error.get("details"),
            )
        return cls(response.status_code, "error", response.text or response.reason_phrase)


class SessionExpired(ApiError):
    """The server rejected the token; the session has been cleared."""


def _validated(schema: Type[BaseModel], payload: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Validate client-side and return the JSON body to send."""
    model = payload if isinstance(payload, schema) else schema.model_validate(
        payload.model_dump(exclude_unset=True) if isinstance(payload, BaseModel) else payload
    )
    return model.model_dump(mode="json", exclude_unset=True)


class ApiClient:
    """Client for the /api endpoints."""

    def __init__(
        self,
        session: Optional[SessionStore] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = ClientSettings()
        self.session = session or SessionStore()
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_URL,
            timeout=httpx.Timeout(timeout or settings.CLIENT_TIMEOUT_SECONDS),
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        if self.session.tenant_slug:
            headers[TENANT_HEADER] = self.session.tenant_slug
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        expect_pdf: bool = False,
    ) -> Any:
        """
        Send a request and decode the response.

        Raises:
            SessionExpired: 401 on an authenticated session
            ApiError: any other error payload, or a non-PDF body where a
                PDF was expected
        """
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        response = await self._client.request(
            method,
            path,
            params=clean_params or None,
            json=json,
            headers=self._headers(),
        )

        if response.status_code == 401 and self.session.is_authenticated:
            self.session.logout(expired=True)
            error = ApiError.from_response(response)
            raise SessionExpired(401, error.code, error.message, error.details)

        if response.status_code >= 400:
            raise ApiError.from_response(response)

        if expect_pdf:
            content_type = response.headers.get("content-type", "")
            if not content_type.startswith(PDF_CONTENT_TYPE):
                raise ApiError.from_response(response)
            return response.content

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def login(self, email: str, password: str, tenant_slug: Optional[str] = None) -> Dict[str, Any]:
        body = _validated(LoginRequest, {"email": email, "password": password})
        headers_slug = tenant_slug.strip().lower() if tenant_slug else None
        response = await self._client.post(
            "/api/auth/login",
            json=body,
            headers={TENANT_HEADER: headers_slug} if headers_slug else None,
        )
        if response.status_code >= 400:
            raise ApiError.from_response(response)

        data = response.json()
        self.session.login(data["access_token"], data["user"], data.get("tenant_slug") or headers_slug)
        return data

    def logout(self) -> None:
        self.session.logout()

    async def me(self) -> Dict[str, Any]:
        return await self.request("GET", "/api/auth/me")

    async def list(self, resource: str, **params) -> Dict[str, Any]:
        """List a resource; returns the {items, total, page, page_size} envelope."""
        return await self.request("GET", f"/api/{resource}", params=params)

    async def get(self, resource: str, item_id: Any) -> Dict[str, Any]:
        return await self.request("GET", f"/api/{resource}/{item_id}")

    async def create(self, resource: str, payload: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
        body = _validated(CREATE_SCHEMAS[resource], payload)
        return await self.request("POST", f"/api/{resource}", json=body)

    async def update(
        self,
        resource: str,
        item_id: Any,
        payload: Union[BaseModel, Dict[str, Any]],
        replace: bool = False,
    ) -> Dict[str, Any]:
        """PATCH the given fields, or PUT a full payload when replace is True."""
        if replace:
            body = _validated(CREATE_SCHEMAS[resource], payload)
            return await self.request("PUT", f"/api/{resource}/{item_id}", json=body)
        body = _validated(UPDATE_SCHEMAS[resource], payload)
        return await self.request("PATCH", f"/api/{resource}/{item_id}", json=body)

    async def delete(self, resource: str, item_id: Any, confirm: Confirm) -> bool:
        """
        Delete after explicit confirmation.

        Returns False without sending anything when the confirmation
        callback declines.
        """
        answer = confirm(f"Delete {resource.rstrip('s')} {item_id}? This cannot be undone.")
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            logger.debug("Delete of %s %s cancelled", resource, item_id)
            return False
        await self.request("DELETE", f"/api/{resource}/{item_id}")
        return True

    async def assign_vehicle(self, driver_id: Any, vehicle_id: Any) -> Dict[str, Any]:
        return await self.request(
            "POST", f"/api/drivers/{driver_id}/assign", json={"vehicle_id": str(vehicle_id)}
        )

    async def unassign_vehicle(self, driver_id: Any) -> Dict[str, Any]:
        return await self.request("POST", f"/api/drivers/{driver_id}/unassign")

    async def set_shipment_status(self, shipment_id: Any, status: str) -> Dict[str, Any]:
        return await self.request("PATCH", f"/api/shipments/{shipment_id}/status", json={"status": status})

    async def shipment_pdf(self, shipment_id: Any) -> bytes:
        return await self.request("GET", f"/api/shipments/{shipment_id}/pdf", expect_pdf=True)

    async def profit_loss(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        group_by: str = "month",
    ) -> Dict[str, Any]:
        return await self.request(
            "GET",
            "/api/analytics/profit-loss",
            params={"start_date": start_date, "end_date": end_date, "group_by": group_by},
        )
