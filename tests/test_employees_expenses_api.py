"""
Employee and expense endpoint tests.
"""

from datetime import timedelta

import pytest

from logitrack.models.enums import UserRole
from logitrack.utils.time import utc_today
from tests.conftest import auth_headers, money

pytestmark = pytest.mark.api


def _employee(client, headers, name="Sunil Patil", role="MECHANIC", **overrides):
    payload = {
        "name": name,
        "email": f"{name.split()[0].lower()}@example.com",
        "phone": "9123456780",
        "aadhar_number": "123412341234",
        "address": "7 Shivaji Nagar, Pune",
        "role": role,
        "salary": "18000",
        "date_of_joining": "2024-04-01",
    }
    payload.update(overrides)
    response = client.post("/api/employees", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _expense(client, headers, **overrides):
    payload = {
        "title": "Diesel refill",
        "amount": "2000",
        "category": "FUEL",
        "date": "2025-03-12",
    }
    payload.update(overrides)
    return client.post("/api/expenses", json=payload, headers=headers)


def test_admin_lists_all_employees(client, admin_headers):
    _employee(client, admin_headers, name="Sunil Patil")
    _employee(client, admin_headers, name="Meena Joshi", role="ACCOUNTANT")

    body = client.get("/api/employees", headers=admin_headers).json()

    assert body["total"] == 2
    assert {item["name"] for item in body["items"]} == {"Sunil Patil", "Meena Joshi"}


def test_driver_cannot_list_employees(client, seed, tenant, admin_headers):
    _employee(client, admin_headers)
    driver_headers = auth_headers(seed.user(tenant, UserRole.DRIVER), tenant.slug)

    response = client.get("/api/employees", headers=driver_headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "forbidden"


def test_employee_field_validation(client, admin_headers):
    response = client.post(
        "/api/employees",
        json={
            "name": "Bad Phone",
            "email": "bad@example.com",
            "phone": "12345",
            "aadhar_number": "1234",
            "address": "Somewhere",
            "role": "HELPER",
            "salary": "100",
            "date_of_joining": "2024-01-01",
        },
        headers=admin_headers,
    )

    assert response.status_code == 400
    fields = {tuple(err["loc"])[-1] for err in response.json()["error"]["details"]["errors"]}
    assert {"phone", "aadhar_number"} <= fields


def test_employee_filter_by_role(client, admin_headers):
    _employee(client, admin_headers, name="Sunil Patil", role="MECHANIC")
    _employee(client, admin_headers, name="Meena Joshi", role="ACCOUNTANT")

    body = client.get("/api/employees?role=ACCOUNTANT", headers=admin_headers).json()

    assert [item["name"] for item in body["items"]] == ["Meena Joshi"]


def test_expense_defaults_to_pending(client, admin_headers):
    response = _expense(client, admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "PENDING"
    assert money(body["amount"]) == money("2000.00")


def test_expense_date_cannot_be_in_future(client, admin_headers):
    tomorrow = (utc_today() + timedelta(days=1)).isoformat()

    response = _expense(client, admin_headers, date=tomorrow)

    assert response.status_code == 400


def test_expense_amount_must_be_positive(client, admin_headers):
    assert _expense(client, admin_headers, amount="0").status_code == 400


def test_expense_filters(client, admin_headers):
    _expense(client, admin_headers, title="Diesel", category="FUEL", status="PAID")
    _expense(client, admin_headers, title="Toll plaza", category="TOLL")

    fuel = client.get("/api/expenses?category=FUEL", headers=admin_headers).json()
    assert [item["title"] for item in fuel["items"]] == ["Diesel"]

    pending = client.get("/api/expenses?status=PENDING", headers=admin_headers).json()
    assert [item["title"] for item in pending["items"]] == ["Toll plaza"]


def test_expense_employee_must_belong_to_tenant(client, seed, admin_headers):
    other_tenant = seed.tenant("Bharat Carriers")
    other_headers = auth_headers(seed.user(other_tenant, UserRole.ADMIN), other_tenant.slug)
    foreign_employee = _employee(client, other_headers)

    response = _expense(client, admin_headers, category="SALARY", employee_id=foreign_employee["id"])

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"field": "employee_id"}


def test_deleting_employee_keeps_expenses(client, admin_headers):
    employee = _employee(client, admin_headers)
    expense = _expense(client, admin_headers, category="SALARY", amount="18000", employee_id=employee["id"]).json()

    assert client.delete(f"/api/employees/{employee['id']}", headers=admin_headers).status_code == 204

    kept = client.get(f"/api/expenses/{expense['id']}", headers=admin_headers)
    assert kept.status_code == 200
    assert kept.json()["employee_id"] is None


def test_dispatcher_can_record_but_not_delete_expenses(client, seed, tenant):
    headers = auth_headers(seed.user(tenant, UserRole.DISPATCHER), tenant.slug)

    created = _expense(client, headers)
    assert created.status_code == 201

    response = client.delete(f"/api/expenses/{created.json()['id']}", headers=headers)
    assert response.status_code == 403
