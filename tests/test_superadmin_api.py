"""
Superadmin endpoint tests: transporter onboarding, global settings and
platform-wide views.
"""

import pytest

from logitrack.services.tenant_service import slugify
from tests.conftest import auth_headers, money, shipment_payload


@pytest.fixture
def root_headers(seed):
    return auth_headers(seed.superadmin())


def _onboard(client, headers, name="Swift Movers", email="owner@swift.example.com"):
    response = client.post(
        "/api/superadmin/transporters",
        json={
            "name": name,
            "gst_number": "27AAACS1234F1Z5",
            "admin_name": "Swift Owner",
            "admin_email": email,
            "admin_password": "swift-pass",
        },
        headers=headers,
    )
    return response


@pytest.mark.unit
def test_slugify():
    assert slugify("Swift Movers") == "swift-movers"
    assert slugify("  Shree Ganesh   Roadlines & Co. ") == "shree-ganesh-roadlines--co"
    assert slugify("!!!") == ""


@pytest.mark.api
class TestTransporters:
    def test_onboarding_creates_tenant_and_admin(self, client, root_headers):
        response = _onboard(client, root_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["tenant"]["slug"] == "swift-movers"
        assert body["tenant"]["is_active"] is True
        assert body["admin"]["email"] == "owner@swift.example.com"

        login = client.post(
            "/api/auth/login",
            json={"email": "owner@swift.example.com", "password": "swift-pass"},
            headers={"X-Tenant-Slug": "swift-movers"},
        )
        assert login.status_code == 200
        assert login.json()["user"]["role"] == "ADMIN"

        settings = client.get(
            "/api/auth/settings",
            headers={"Authorization": f"Bearer {login.json()['access_token']}"},
        ).json()
        assert settings["theme"] == "light"

    def test_duplicate_name_conflicts(self, client, root_headers):
        _onboard(client, root_headers)

        response = _onboard(client, root_headers, email="other@swift.example.com")

        assert response.status_code == 409

    def test_name_without_slug_characters_is_rejected(self, client, root_headers):
        response = _onboard(client, root_headers, name="***")

        assert response.status_code == 400

    def test_listing_with_counts_and_status_filter(self, client, seed, root_headers, tenant, admin_headers):
        seed.tenant("Dormant Freight", is_active=False)
        client.post("/api/shipments", json=shipment_payload(freight="700"), headers=admin_headers)

        everyone = client.get("/api/superadmin/transporters", headers=root_headers).json()
        assert everyone["total"] == 2
        assert {item["slug"] for item in everyone["items"]} == {"acme-logistics", "dormant-freight"}

        active = client.get("/api/superadmin/transporters?status=active", headers=root_headers).json()
        assert active["total"] == 1
        assert [item["slug"] for item in active["items"]] == ["acme-logistics"]
        assert active["items"][0]["counts"]["shipments"] == 1
        assert active["items"][0]["counts"]["users"] == 1

        first_page = client.get("/api/superadmin/transporters?page_size=1", headers=root_headers).json()
        assert len(first_page["items"]) == 1
        assert first_page["total"] == 2
        assert first_page["page_size"] == 1

        bad = client.get("/api/superadmin/transporters?status=paused", headers=root_headers)
        assert bad.status_code == 400

    def test_details_include_revenue_and_admins(self, client, root_headers, tenant, admin, admin_headers):
        client.post("/api/shipments", json=shipment_payload(freight="700"), headers=admin_headers)

        body = client.get(f"/api/superadmin/transporters/{tenant.id}", headers=root_headers).json()

        assert money(body["total_revenue"]) == money("700")
        assert [item["email"] for item in body["admins"]] == [admin.email]

    def test_deactivation_blocks_tenant_users(self, client, root_headers, tenant, admin_headers):
        response = client.patch(
            f"/api/superadmin/transporters/{tenant.id}/status",
            json={"is_active": False},
            headers=root_headers,
        )

        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert client.get("/api/vehicles", headers=admin_headers).status_code == 403

    def test_tenant_admin_is_forbidden(self, client, admin_headers):
        response = client.get("/api/superadmin/transporters", headers=admin_headers)

        assert response.status_code == 403


@pytest.mark.api
class TestGlobalSettings:
    def test_first_read_creates_defaults(self, client, root_headers):
        first = client.get("/api/superadmin/settings", headers=root_headers)
        second = client.get("/api/superadmin/settings", headers=root_headers)

        assert first.status_code == 200
        assert first.json()["data"]["platform_name"] == "LogiTrack"
        assert second.json() == first.json()

    def test_update_replaces_blob(self, client, root_headers):
        response = client.put(
            "/api/superadmin/settings",
            json={"data": {"platform_name": "FleetHub", "maintenance_mode": True}},
            headers=root_headers,
        )

        assert response.status_code == 200
        stored = client.get("/api/superadmin/settings", headers=root_headers).json()
        assert stored["data"] == {"platform_name": "FleetHub", "maintenance_mode": True}


@pytest.mark.api
class TestPlatformViews:
    def test_dashboard_stats(self, client, seed, root_headers, tenant, admin_headers):
        seed.tenant("Dormant Freight", is_active=False)
        client.post(
            "/api/vehicles",
            json={"number": "MH12AB1001", "model": "Eicher", "capacity": 5000},
            headers=admin_headers,
        )

        body = client.get("/api/superadmin/dashboard-stats", headers=root_headers).json()

        assert body["total_transporters"] == 2
        assert body["active_transporters"] == 1
        assert body["inactive_transporters"] == 1
        assert body["total_vehicles"] == 1

    def test_shipments_across_tenants_carry_tenant(self, client, seed, root_headers, admin_headers):
        other = seed.tenant("Bharat Carriers")
        other_headers = auth_headers(seed.user(other), other.slug)
        client.post("/api/shipments", json=shipment_payload(bill_no="A-1"), headers=admin_headers)
        client.post("/api/shipments", json=shipment_payload(bill_no="B-1"), headers=other_headers)

        body = client.get("/api/superadmin/shipments", headers=root_headers).json()

        assert body["total"] == 2
        assert {item["tenant"]["slug"] for item in body["items"]} == {"acme-logistics", "bharat-carriers"}

        one = client.get(f"/api/superadmin/shipments/{body['items'][0]['id']}", headers=root_headers)
        assert one.status_code == 200

    def test_platform_users_listing(self, client, root_headers, tenant, admin):
        body = client.get(f"/api/superadmin/users?tenant_id={tenant.id}", headers=root_headers).json()

        assert [item["email"] for item in body["items"]] == [admin.email]
        assert body["items"][0]["tenant"]["slug"] == tenant.slug

    def test_overview_has_twelve_months(self, client, root_headers):
        body = client.get("/api/superadmin/analytics/overview", headers=root_headers).json()

        assert len(body["monthly_stats"]) == 12
        assert body["total_shipments"] == 0

    def test_top_transporters(self, client, root_headers, admin_headers):
        client.post("/api/shipments", json=shipment_payload(freight="900"), headers=admin_headers)

        body = client.get("/api/superadmin/analytics/top-transporters", headers=root_headers).json()

        assert body["by_shipments"][0]["name"] == "Acme Logistics"
        assert body["by_shipments"][0]["count"] == 1

    def test_user_growth_counts_this_month(self, client, root_headers, admin):
        body = client.get("/api/superadmin/analytics/user-growth", headers=root_headers).json()

        assert len(body) == 12
        assert sum(point["count"] for point in body) == 2
        assert body[-1]["count"] == 2
        assert (body[0]["year"], body[0]["month"]) < (body[-1]["year"], body[-1]["month"])

    def test_transporter_status_counts(self, client, seed, root_headers, tenant):
        seed.tenant("Dormant Freight", is_active=False)

        body = client.get("/api/superadmin/analytics/transporter-status", headers=root_headers).json()

        assert body == {"active": 1, "inactive": 1}

    def test_recent_shipments_are_newest_first_with_tenant(self, client, root_headers, admin_headers):
        client.post("/api/shipments", json=shipment_payload(bill_no="OLD", date="2025-01-05"), headers=admin_headers)
        client.post("/api/shipments", json=shipment_payload(bill_no="NEW", date="2025-02-05"), headers=admin_headers)

        body = client.get("/api/superadmin/analytics/recent-shipments", headers=root_headers).json()
        assert [item["bill_no"] for item in body] == ["NEW", "OLD"]
        assert body[0]["tenant"]["slug"] == "acme-logistics"

        filtered = client.get(
            "/api/superadmin/analytics/recent-shipments?to_date=2025-01-31", headers=root_headers
        ).json()
        assert [item["bill_no"] for item in filtered] == ["OLD"]
