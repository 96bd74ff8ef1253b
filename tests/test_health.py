"""
Health endpoint tests.
"""

import pytest

pytestmark = pytest.mark.api


def test_health_reports_database(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["db_ok"] is True
    assert body["version"]
    # The test schema comes from create_all, so no revision is stamped
    assert body["alembic_current"] is None
    assert body["alembic_head_ok"] is False
