"""
API client tests against an httpx mock transport.
"""

import json

import httpx
import pytest
from pydantic import ValidationError

from logitrack.client.api import ApiClient, ApiError, SessionExpired
from logitrack.client.search import SEARCH_PAGE_SIZE, global_search
from logitrack.client.session import LOGIN_ROUTE, SessionStore
from logitrack.models.enums import UserRole

pytestmark = pytest.mark.unit

BASE_URL = "http://api.logitrack.test"

USER = {"id": "9b2f6c1e-2f51-4a9b-9e8a-1c2d3e4f5a6b", "name": "Asha", "role": "ADMIN"}


class Recorder:
    """Mock transport handler that records requests and replays routes."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        handler = self.routes.get(key)
        if handler is None:
            return httpx.Response(404, json={"error": {"code": "not_found", "message": "no route"}})
        return handler(request) if callable(handler) else handler


def _client(recorder, session=None):
    return ApiClient(session=session or SessionStore(), base_url=BASE_URL, transport=httpx.MockTransport(recorder))


def _signed_in(slug="acme-logistics"):
    session = SessionStore()
    session.login("token-123", USER, slug)
    return session


class TestSessionStore:
    def test_logout_clears_everything_and_signals_login_route(self):
        session = _signed_in()
        events = []
        session.add_listener(lambda store, event: events.append(event))

        session.logout()

        assert session.token is None
        assert session.user is None
        assert session.tenant_slug is None
        assert session.redirect_to == LOGIN_ROUTE
        assert events == ["logout"]
        assert session.consume_expired_notice() is False

    def test_expired_notice_is_one_shot(self):
        session = _signed_in()

        session.logout(expired=True)

        assert session.consume_expired_notice() is True
        assert session.consume_expired_notice() is False

    def test_login_resets_redirect(self):
        session = SessionStore()
        session.logout(expired=True)

        session.login("t", USER)

        assert session.redirect_to is None
        assert session.is_authenticated
        assert session.consume_expired_notice() is False


class TestApiClient:
    @pytest.mark.asyncio
    async def test_login_stores_session_and_sends_headers(self):
        recorder = Recorder(
            {
                ("POST", "/api/auth/login"): httpx.Response(
                    200,
                    json={"access_token": "tok", "token_type": "bearer", "user": USER, "tenant_slug": "acme-logistics"},
                ),
                ("GET", "/api/vehicles"): httpx.Response(200, json={"items": [], "total": 0, "page": 1, "page_size": 10}),
            }
        )
        async with _client(recorder) as client:
            await client.login("asha@example.com", "secret")
            await client.list("vehicles", page=1, search=None)

        assert client.session.token == "tok"
        assert client.session.tenant_slug == "acme-logistics"
        listing = recorder.requests[-1]
        assert listing.headers["Authorization"] == "Bearer tok"
        assert listing.headers["X-Tenant-Slug"] == "acme-logistics"
        assert "search" not in listing.url.params

    @pytest.mark.asyncio
    async def test_unauthorized_response_expires_session(self):
        recorder = Recorder(
            {
                ("GET", "/api/shipments"): httpx.Response(
                    401, json={"error": {"code": "unauthorized", "message": "Invalid or expired token"}}
                ),
            }
        )
        session = _signed_in()
        events = []
        session.add_listener(lambda store, event: events.append(event))

        async with _client(recorder, session) as client:
            with pytest.raises(SessionExpired):
                await client.list("shipments")

        assert session.token is None
        assert session.user is None
        assert session.redirect_to == LOGIN_ROUTE
        assert events == ["expired"]
        assert session.consume_expired_notice() is True
        assert session.consume_expired_notice() is False

    @pytest.mark.asyncio
    async def test_failed_login_does_not_expire(self):
        recorder = Recorder(
            {
                ("POST", "/api/auth/login"): httpx.Response(
                    401, json={"error": {"code": "unauthorized", "message": "Invalid email or password"}}
                ),
            }
        )
        async with _client(recorder) as client:
            with pytest.raises(ApiError) as excinfo:
                await client.login("asha@example.com", "wrong")

        assert not isinstance(excinfo.value, SessionExpired)
        assert excinfo.value.status_code == 401
        assert client.session.consume_expired_notice() is False

    @pytest.mark.asyncio
    async def test_error_payload_is_exposed(self):
        recorder = Recorder(
            {
                ("POST", "/api/drivers/d1/assign"): httpx.Response(
                    409,
                    json={"error": {"code": "conflict", "message": "taken", "details": {"driver_id": "d2"}}},
                ),
            }
        )
        async with _client(recorder, _signed_in()) as client:
            with pytest.raises(ApiError) as excinfo:
                await client.assign_vehicle("d1", "v1")

        assert excinfo.value.code == "conflict"
        assert excinfo.value.details == {"driver_id": "d2"}
        assert json.loads(recorder.requests[0].content) == {"vehicle_id": "v1"}

    @pytest.mark.asyncio
    async def test_delete_requires_confirmation(self):
        recorder = Recorder({("DELETE", "/api/vehicles/v1"): httpx.Response(204)})
        prompts = []

        def decline(message):
            prompts.append(message)
            return False

        async def accept(message):
            return True

        async with _client(recorder, _signed_in()) as client:
            assert await client.delete("vehicles", "v1", confirm=decline) is False
            assert recorder.requests == []
            assert await client.delete("vehicles", "v1", confirm=accept) is True

        assert prompts and "v1" in prompts[0]
        assert [request.method for request in recorder.requests] == ["DELETE"]

    @pytest.mark.asyncio
    async def test_pdf_download_checks_content_type(self):
        recorder = Recorder(
            {
                ("GET", "/api/shipments/s1/pdf"): httpx.Response(
                    200, content=b"%PDF-1.4 fake", headers={"content-type": "application/pdf"}
                ),
                ("GET", "/api/shipments/s2/pdf"): httpx.Response(200, json={"unexpected": True}),
            }
        )
        async with _client(recorder, _signed_in()) as client:
            assert (await client.shipment_pdf("s1")).startswith(b"%PDF")
            with pytest.raises(ApiError):
                await client.shipment_pdf("s2")

    @pytest.mark.asyncio
    async def test_payloads_are_validated_before_sending(self):
        recorder = Recorder()
        async with _client(recorder, _signed_in()) as client:
            with pytest.raises(ValidationError):
                await client.create("vehicles", {"number": "MH12", "model": "Eicher", "capacity": 0})

        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_partial_update_sends_only_given_fields(self):
        recorder = Recorder(
            {("PATCH", "/api/vehicles/v1"): lambda request: httpx.Response(200, json=json.loads(request.content))}
        )
        async with _client(recorder, _signed_in()) as client:
            body = await client.update("vehicles", "v1", {"model": "Eicher Pro"})

        assert body == {"model": "Eicher Pro"}


class TestGlobalSearch:
    @staticmethod
    def _page(request):
        resource = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(200, json={"items": [{"resource": resource}], "total": 1, "page": 1, "page_size": 3})

    @pytest.mark.asyncio
    async def test_blank_term_makes_no_calls(self):
        recorder = Recorder()
        async with _client(recorder, _signed_in()) as client:
            assert await global_search(client, "   ", UserRole.ADMIN) == {}

        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_admin_searches_every_resource(self):
        routes = {
            ("GET", f"/api/{name}"): self._page
            for name in ("shipments", "drivers", "vehicles", "employees", "expenses")
        }
        recorder = Recorder(routes)
        async with _client(recorder, _signed_in()) as client:
            results = await global_search(client, "pune", UserRole.ADMIN)

        assert set(results) == {"shipments", "drivers", "vehicles", "employees", "expenses"}
        for request in recorder.requests:
            assert request.url.params["search"] == "pune"
            assert request.url.params["page_size"] == str(SEARCH_PAGE_SIZE)

    @pytest.mark.asyncio
    async def test_driver_skips_forbidden_resources(self):
        routes = {("GET", f"/api/{name}"): self._page for name in ("shipments", "drivers", "vehicles")}
        recorder = Recorder(routes)
        async with _client(recorder, _signed_in()) as client:
            results = await global_search(client, "MH12", UserRole.DRIVER)

        assert set(results) == {"shipments", "drivers", "vehicles"}
        assert {request.url.path for request in recorder.requests} == {
            "/api/shipments",
            "/api/drivers",
            "/api/vehicles",
        }

    @pytest.mark.asyncio
    async def test_failures_are_left_out(self):
        routes = {
            ("GET", "/api/shipments"): self._page,
            ("GET", "/api/drivers"): httpx.Response(500, json={"error": {"code": "internal_error", "message": "boom"}}),
            ("GET", "/api/vehicles"): self._page,
            ("GET", "/api/employees"): self._page,
            ("GET", "/api/expenses"): self._page,
        }
        recorder = Recorder(routes)
        async with _client(recorder, _signed_in()) as client:
            results = await global_search(client, "pune", "ADMIN")

        assert "drivers" not in results
        assert results["shipments"] == [{"resource": "shipments"}]
