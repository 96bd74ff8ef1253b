"""
Authentication endpoint tests.
"""

from datetime import timedelta

import pytest

from logitrack.core.jwt import decode_access_token
from logitrack.models.enums import UserRole
from tests.conftest import TEST_PASSWORD, auth_headers, shipment_payload, token_for

pytestmark = pytest.mark.api


def _login(client, email, password=TEST_PASSWORD, slug=None):
    headers = {"X-Tenant-Slug": slug} if slug else None
    return client.post("/api/auth/login", json={"email": email, "password": password}, headers=headers)


def test_login_returns_token_with_claims(client, admin, tenant):
    response = _login(client, admin.email, slug=tenant.slug)

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["tenant_slug"] == tenant.slug
    assert body["user"]["role"] == "ADMIN"

    claims = decode_access_token(body["access_token"])
    assert claims["user_id"] == str(admin.id)
    assert claims["tenant_id"] == str(tenant.id)
    assert claims["role"] == "ADMIN"


def test_login_without_slug_finds_unique_user(client, admin, tenant):
    response = _login(client, admin.email)

    assert response.status_code == 200
    assert response.json()["tenant_slug"] == tenant.slug


def test_login_with_email_in_two_tenants_requires_slug(client, seed, tenant):
    other = seed.tenant("Bharat Carriers")
    seed.user(tenant, UserRole.ADMIN, email="shared@example.com")
    seed.user(other, UserRole.ADMIN, email="shared@example.com")

    ambiguous = _login(client, "shared@example.com")
    assert ambiguous.status_code == 400
    assert ambiguous.json()["error"]["code"] == "tenant_required"

    scoped = _login(client, "shared@example.com", slug=other.slug)
    assert scoped.status_code == 200
    assert scoped.json()["tenant_slug"] == other.slug


def test_wrong_password_is_unauthorized(client, admin, tenant):
    response = _login(client, admin.email, password="nope", slug=tenant.slug)

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "unauthorized"


def test_unknown_slug_on_login(client, admin):
    response = _login(client, admin.email, slug="nowhere")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "tenant_not_found"


def test_inactive_user_cannot_login(client, seed, tenant, admin_headers):
    dispatcher = seed.user(tenant, UserRole.DISPATCHER)
    client.patch(f"/api/users/{dispatcher.id}/status", json={"is_active": False}, headers=admin_headers)

    assert _login(client, dispatcher.email, slug=tenant.slug).status_code == 403


def test_inactive_tenant_cannot_login(client, seed):
    dormant = seed.tenant("Dormant Freight", is_active=False)
    user = seed.user(dormant, UserRole.ADMIN)

    response = _login(client, user.email, slug=dormant.slug)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "tenant_inactive"


def test_superadmin_logs_in_without_slug(client, seed):
    root = seed.superadmin()

    response = _login(client, root.email)

    assert response.status_code == 200
    assert response.json()["tenant_slug"] is None
    assert decode_access_token(response.json()["access_token"])["tenant_id"] is None


def test_missing_token_is_unauthorized(client, tenant):
    response = client.get("/api/shipments", headers={"X-Tenant-Slug": tenant.slug})

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_expired_token_is_unauthorized(client, admin, tenant):
    expired = token_for(admin, expires_delta=timedelta(minutes=-5))

    response = client.get(
        "/api/shipments",
        headers={"Authorization": f"Bearer {expired}", "X-Tenant-Slug": tenant.slug},
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or expired token"


def test_garbage_token_is_unauthorized(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_me_returns_current_user(client, admin):
    response = client.get("/api/auth/me", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["email"] == admin.email
    assert "hashed_password" not in response.json()


def test_profile_update(client, admin):
    response = client.put(
        "/api/auth/profile",
        json={"name": "Renamed Admin", "phone": "9988776655"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed Admin"
    assert response.json()["phone"] == "9988776655"


def test_settings_default_and_merge(client, admin):
    headers = auth_headers(admin)

    defaults = client.get("/api/auth/settings", headers=headers).json()
    assert defaults == {"theme": "system", "language": "en", "notifications": True, "page_size": 10}

    updated = client.put("/api/auth/settings", json={"theme": "dark"}, headers=headers).json()
    assert updated["theme"] == "dark"
    assert updated["page_size"] == 10

    assert client.get("/api/auth/settings", headers=headers).json()["theme"] == "dark"


def test_change_password(client, admin, tenant):
    headers = auth_headers(admin)

    wrong = client.post(
        "/api/auth/change-password",
        json={"current_password": "wrong", "new_password": "brand-new"},
        headers=headers,
    )
    assert wrong.status_code == 400

    ok = client.post(
        "/api/auth/change-password",
        json={"current_password": TEST_PASSWORD, "new_password": "brand-new"},
        headers=headers,
    )
    assert ok.status_code == 204

    assert _login(client, admin.email, password="brand-new", slug=tenant.slug).status_code == 200
    assert _login(client, admin.email, slug=tenant.slug).status_code == 401


def _driver_session(client, admin_headers, tenant):
    """Create a driver through the API and log in as that driver."""
    driver = client.post(
        "/api/drivers",
        json={
            "name": "Ramesh Yadav",
            "email": "ramesh@example.com",
            "phone": "9876501234",
            "license_number": "MH-DL-0420",
        },
        headers=admin_headers,
    ).json()
    login = _login(client, "ramesh@example.com", password=driver["temporary_password"], slug=tenant.slug)
    return driver, {"Authorization": f"Bearer {login.json()['access_token']}"}


def test_export_data_is_an_attachment_without_credentials(client, admin):
    response = client.get("/api/auth/export-data", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.headers["content-disposition"].startswith(f'attachment; filename="user-data-{admin.id}-')
    body = response.json()
    assert body["user"]["email"] == admin.email
    assert body["settings"]["theme"] == "system"
    assert body["driver"] is None
    assert body["shipments"] == []
    assert "hashed_password" not in response.text


def test_driver_export_includes_assigned_shipments(client, tenant, admin_headers):
    driver, driver_headers = _driver_session(client, admin_headers, tenant)
    client.post("/api/shipments", json=shipment_payload(driver_id=driver["id"]), headers=admin_headers)
    client.post("/api/shipments", json=shipment_payload(bill_no="LR-0002"), headers=admin_headers)

    body = client.get("/api/auth/export-data", headers=driver_headers).json()

    assert body["driver"]["license_number"] == "MH-DL-0420"
    assert [item["bill_no"] for item in body["shipments"]] == ["LR-0001"]


def test_delete_account_revokes_access(client, seed, tenant):
    dispatcher = seed.user(tenant, UserRole.DISPATCHER)
    headers = auth_headers(dispatcher)

    response = client.delete("/api/auth/delete-account", headers=headers)

    assert response.status_code == 204
    assert client.get("/api/auth/me", headers=headers).status_code == 401
    assert _login(client, dispatcher.email, slug=tenant.slug).status_code == 401


def test_last_admin_cannot_delete_account(client, admin):
    response = client.delete("/api/auth/delete-account", headers=auth_headers(admin))

    assert response.status_code == 400
    assert client.get("/api/auth/me", headers=auth_headers(admin)).status_code == 200


def test_admin_with_a_peer_can_delete_account(client, seed, tenant, admin):
    seed.user(tenant, UserRole.ADMIN)

    assert client.delete("/api/auth/delete-account", headers=auth_headers(admin)).status_code == 204


def test_driver_with_open_shipment_cannot_delete_account(client, tenant, admin_headers):
    driver, driver_headers = _driver_session(client, admin_headers, tenant)
    shipment = client.post(
        "/api/shipments", json=shipment_payload(driver_id=driver["id"]), headers=admin_headers
    ).json()

    blocked = client.delete("/api/auth/delete-account", headers=driver_headers)
    assert blocked.status_code == 400
    assert blocked.json()["error"]["details"] == {"open_shipments": 1}

    client.patch(f"/api/shipments/{shipment['id']}/status", json={"status": "COMPLETED"}, headers=admin_headers)
    assert client.delete("/api/auth/delete-account", headers=driver_headers).status_code == 204

    kept = client.get(f"/api/shipments/{shipment['id']}", headers=admin_headers).json()
    assert kept["driver_id"] is None
    assert client.get(f"/api/drivers/{driver['id']}", headers=admin_headers).status_code == 404


def test_superadmin_cannot_delete_account(client, seed):
    response = client.delete("/api/auth/delete-account", headers=auth_headers(seed.superadmin()))

    assert response.status_code == 403
