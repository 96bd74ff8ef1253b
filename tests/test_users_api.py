"""
Tenant user management tests.
"""

import pytest

from logitrack.models.enums import UserRole
from tests.conftest import auth_headers

pytestmark = pytest.mark.api


def test_create_dispatcher_with_temporary_password(client, tenant, admin_headers):
    response = client.post(
        "/api/users",
        json={"name": "Kavita Rao", "email": "kavita@example.com", "role": "DISPATCHER"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "DISPATCHER"
    assert body["tenant_id"] == str(tenant.id)
    assert len(body["temporary_password"]) >= 8

    login = client.post(
        "/api/auth/login",
        json={"email": "kavita@example.com", "password": body["temporary_password"]},
        headers={"X-Tenant-Slug": tenant.slug},
    )
    assert login.status_code == 200


def test_supplied_password_is_not_echoed(client, admin_headers):
    response = client.post(
        "/api/users",
        json={"name": "Imran", "email": "imran@example.com", "password": "imran-pass"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["temporary_password"] is None


def test_driver_user_gets_profile(client, admin_headers):
    response = client.post(
        "/api/users",
        json={"name": "Raju", "email": "raju@example.com", "role": "DRIVER", "license_number": "MH-DL-9"},
        headers=admin_headers,
    )
    assert response.status_code == 201

    drivers = client.get("/api/drivers", headers=admin_headers).json()
    assert [item["license_number"] for item in drivers["items"]] == ["MH-DL-9"]


def test_driver_user_requires_license(client, admin_headers):
    response = client.post(
        "/api/users",
        json={"name": "Raju", "email": "raju@example.com", "role": "DRIVER"},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_admin_cannot_create_admin(client, admin_headers):
    response = client.post(
        "/api/users",
        json={"name": "Second Admin", "email": "second@example.com", "role": "ADMIN"},
        headers=admin_headers,
    )

    assert response.status_code == 403


def test_superadmin_creates_admin_in_tenant(client, seed, tenant):
    root_headers = auth_headers(seed.superadmin(), tenant.slug)

    response = client.post(
        "/api/users",
        json={"name": "Second Admin", "email": "second@example.com", "role": "ADMIN"},
        headers=root_headers,
    )

    assert response.status_code == 201
    assert response.json()["tenant_id"] == str(tenant.id)


def test_duplicate_email_conflicts(client, admin, admin_headers):
    response = client.post(
        "/api/users",
        json={"name": "Copy", "email": admin.email.upper()},
        headers=admin_headers,
    )

    assert response.status_code == 409


def test_dispatcher_cannot_manage_users(client, seed, tenant):
    headers = auth_headers(seed.user(tenant, UserRole.DISPATCHER), tenant.slug)

    assert client.get("/api/users", headers=headers).status_code == 403


def test_cannot_deactivate_self(client, admin, admin_headers):
    response = client.patch(f"/api/users/{admin.id}/status", json={"is_active": False}, headers=admin_headers)

    assert response.status_code == 400


def test_reset_password_returns_new_secret(client, seed, tenant, admin_headers):
    dispatcher = seed.user(tenant, UserRole.DISPATCHER)

    response = client.post(f"/api/users/{dispatcher.id}/reset-password", headers=admin_headers)

    assert response.status_code == 200
    new_password = response.json()["temporary_password"]
    login = client.post(
        "/api/auth/login",
        json={"email": dispatcher.email, "password": new_password},
        headers={"X-Tenant-Slug": tenant.slug},
    )
    assert login.status_code == 200


def test_users_of_other_tenants_are_invisible(client, seed, admin_headers):
    other = seed.tenant("Bharat Carriers")
    stranger = seed.user(other, UserRole.DISPATCHER)

    assert client.get(f"/api/users/{stranger.id}", headers=admin_headers).status_code == 404


def test_deleting_driver_user_removes_profile(client, seed, tenant, admin_headers):
    driver_user = seed.user(tenant, UserRole.DRIVER)

    assert client.delete(f"/api/users/{driver_user.id}", headers=admin_headers).status_code == 204

    assert client.get("/api/drivers", headers=admin_headers).json()["total"] == 0
    assert client.get(f"/api/users/{driver_user.id}", headers=admin_headers).status_code == 404
