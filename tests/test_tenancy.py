"""
Tenant resolution tests.
"""

import pytest
from starlette.requests import Request

from logitrack.core.tenancy import extract_tenant_slug, slug_from_host
from logitrack.models.enums import UserRole
from tests.conftest import auth_headers


def _request(host="api.example.com", headers=None, query=b""):
    raw_headers = [(b"host", host.encode())]
    for name, value in (headers or {}).items():
        raw_headers.append((name.lower().encode(), value.encode()))
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/api/shipments",
            "headers": raw_headers,
            "query_string": query,
        }
    )


@pytest.mark.unit
class TestSlugExtraction:
    def test_subdomain_of_root_domain(self):
        assert slug_from_host("acme.logitrack.io", "logitrack.io") == "acme"
        assert slug_from_host("ACME.logitrack.io:8443", "logitrack.io") == "acme"

    def test_non_matching_hosts(self):
        assert slug_from_host("logitrack.io", "logitrack.io") is None
        assert slug_from_host("a.b.logitrack.io", "logitrack.io") is None
        assert slug_from_host("www.logitrack.io", "logitrack.io") is None
        assert slug_from_host("acme.other.io", "logitrack.io") is None
        assert slug_from_host("acme.logitrack.io", None) is None

    def test_precedence_subdomain_header_query(self):
        request = _request(
            host="acme.logitrack.io",
            headers={"X-Tenant-Slug": "bharat"},
            query=b"tenant=delta",
        )
        assert extract_tenant_slug(request, "logitrack.io") == "acme"
        assert extract_tenant_slug(request, None) == "bharat"

    def test_query_parameter_fallback(self):
        request = _request(query=b"tenant=Delta")
        assert extract_tenant_slug(request) == "delta"

    def test_blank_values_are_ignored(self):
        request = _request(headers={"X-Tenant-Slug": "   "})
        assert extract_tenant_slug(request) is None


@pytest.mark.api
class TestTenantBinding:
    def test_user_falls_back_to_own_tenant(self, client, admin):
        response = client.get("/api/vehicles", headers=auth_headers(admin))
        assert response.status_code == 200

    def test_foreign_slug_is_forbidden(self, client, seed, admin):
        other = seed.tenant("Bharat Carriers")

        response = client.get("/api/vehicles", headers=auth_headers(admin, other.slug))

        assert response.status_code == 403

    def test_unknown_slug_is_not_found(self, client, admin):
        response = client.get("/api/vehicles", headers=auth_headers(admin, "ghost"))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "tenant_not_found"

    def test_query_parameter_selects_tenant(self, client, admin, tenant):
        response = client.get(f"/api/vehicles?tenant={tenant.slug}", headers=auth_headers(admin))
        assert response.status_code == 200

    def test_superadmin_needs_a_slug(self, client, seed):
        root = seed.superadmin()

        response = client.get("/api/vehicles", headers=auth_headers(root))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "tenant_required"

    def test_superadmin_may_enter_any_tenant(self, client, seed, tenant, admin_headers):
        client.post(
            "/api/vehicles",
            json={"number": "MH12AB1001", "model": "Eicher", "capacity": 5000},
            headers=admin_headers,
        )
        root = seed.superadmin()

        response = client.get("/api/vehicles", headers=auth_headers(root, tenant.slug))

        assert response.status_code == 200
        assert response.json()["total"] == 1

    def test_inactive_tenant_is_rejected(self, client, seed):
        dormant = seed.tenant("Dormant Freight", is_active=False)
        user = seed.user(dormant, UserRole.ADMIN)

        response = client.get("/api/vehicles", headers=auth_headers(user))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "tenant_inactive"

    def test_role_is_checked_before_tenant(self, client, seed, tenant):
        driver = seed.user(tenant, UserRole.DRIVER)

        response = client.get("/api/expenses", headers=auth_headers(driver, "ghost"))

        assert response.status_code == 403
