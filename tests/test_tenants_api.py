"""
Public tenant lookup tests.
"""

import pytest

pytestmark = pytest.mark.api


def test_lookup_by_slug_needs_no_token(client, tenant):
    response = client.get(f"/api/tenants/slug/{tenant.slug}")

    assert response.status_code == 200
    assert response.json() == {
        "id": str(tenant.id),
        "name": "Acme Logistics",
        "slug": "acme-logistics",
        "domain": None,
        "is_active": True,
    }


def test_inactive_tenant_is_still_resolved(client, seed):
    dormant = seed.tenant("Dormant Freight", is_active=False)

    response = client.get(f"/api/tenants/slug/{dormant.slug}")

    assert response.status_code == 200
    assert response.json()["is_active"] is False


def test_unknown_slug_is_not_found(client):
    response = client.get("/api/tenants/slug/nowhere")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "tenant_not_found"
