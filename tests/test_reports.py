"""
Profit-and-loss report tests.
"""

from datetime import date
from decimal import Decimal

import pytest

from logitrack.models.enums import UserRole
from logitrack.schemas.report import GroupBy
from logitrack.services.report_service import month_start, period_key, period_keys, profit_margin
from logitrack.services.shipment_service import compute_grand_total, to_money
from tests.conftest import auth_headers, money, shipment_payload


@pytest.mark.unit
class TestPeriodHelpers:
    def test_period_key_formats(self):
        day = date(2025, 8, 14)
        assert period_key(day, GroupBy.MONTH) == "2025-08"
        assert period_key(day, GroupBy.QUARTER) == "2025-Q3"
        assert period_key(day, GroupBy.YEAR) == "2025"

    def test_period_keys_cover_range_in_order(self):
        keys = period_keys(date(2024, 11, 20), date(2025, 2, 3), GroupBy.MONTH)
        assert keys == ["2024-11", "2024-12", "2025-01", "2025-02"]

    def test_quarter_keys_are_not_repeated(self):
        keys = period_keys(date(2025, 1, 1), date(2025, 12, 31), GroupBy.QUARTER)
        assert keys == ["2025-Q1", "2025-Q2", "2025-Q3", "2025-Q4"]

    def test_month_start_crosses_year(self):
        assert month_start(date(2025, 3, 19), months_back=11) == date(2024, 4, 1)
        assert month_start(date(2025, 1, 31)) == date(2025, 1, 1)

    def test_profit_margin_without_revenue_is_zero(self):
        assert profit_margin(Decimal("-500"), Decimal("0")) == Decimal("0.00")

    def test_profit_margin_rounds_half_up(self):
        assert profit_margin(Decimal("1"), Decimal("3")) == Decimal("33.33")
        assert profit_margin(Decimal("250"), Decimal("1000")) == Decimal("25.00")


@pytest.mark.unit
def test_money_helpers():
    assert to_money(None) == Decimal("0.00")
    assert to_money("2.675") == Decimal("2.68")
    assert compute_grand_total({"freight": "500", "hamali": "100"}) == Decimal("600.00")


def _expense(client, headers, category, amount, day):
    response = client.post(
        "/api/expenses",
        json={"title": category.title(), "amount": amount, "category": category, "date": day},
        headers=headers,
    )
    assert response.status_code == 201, response.text


@pytest.mark.api
def test_expense_totals_by_category(client, admin_headers):
    _expense(client, admin_headers, "FUEL", "2000", "2025-03-02")
    _expense(client, admin_headers, "SALARY", "18000", "2025-03-31")

    response = client.get(
        "/api/analytics/profit-loss?start_date=2025-03-01&end_date=2025-03-31",
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert money(body["summary"]["total_expenses"]) == money("20000.00")
    assert money(body["expenses"]["by_category"]["FUEL"]) == money("2000.00")
    assert money(body["expenses"]["by_category"]["SALARY"]) == money("18000.00")
    assert money(body["summary"]["net_profit"]) == money("-20000.00")
    assert money(body["summary"]["profit_margin"]) == 0


@pytest.mark.api
def test_profit_loss_grouped_by_month(client, admin_headers):
    client.post(
        "/api/shipments",
        json=shipment_payload(bill_no="J", date="2025-01-15", freight="1000", status="DELIVERED"),
        headers=admin_headers,
    )
    client.post(
        "/api/shipments",
        json=shipment_payload(bill_no="M", date="2025-03-10", freight="3000"),
        headers=admin_headers,
    )
    _expense(client, admin_headers, "FUEL", "1000", "2025-03-11")

    body = client.get(
        "/api/analytics/profit-loss?start_date=2025-01-01&end_date=2025-03-31&group_by=month",
        headers=admin_headers,
    ).json()

    assert list(body["grouped"]) == ["2025-01", "2025-02", "2025-03"]
    assert money(body["grouped"]["2025-01"]["revenue"]) == money("1000")
    assert money(body["grouped"]["2025-02"]["profit"]) == 0
    assert money(body["grouped"]["2025-03"]["profit"]) == money("2000")
    assert money(body["summary"]["total_revenue"]) == money("4000.00")
    assert money(body["summary"]["profit_margin"]) == money("75.00")
    assert money(body["revenue"]["by_status"]["DELIVERED"]) == money("1000")


@pytest.mark.api
def test_profit_loss_excludes_out_of_range_rows(client, admin_headers):
    _expense(client, admin_headers, "TOLL", "500", "2024-12-31")

    body = client.get(
        "/api/analytics/profit-loss?start_date=2025-01-01&end_date=2025-12-31&group_by=quarter",
        headers=admin_headers,
    ).json()

    assert money(body["summary"]["total_expenses"]) == 0
    assert list(body["grouped"]) == ["2025-Q1", "2025-Q2", "2025-Q3", "2025-Q4"]


@pytest.mark.api
def test_profit_loss_rejects_inverted_range(client, admin_headers):
    response = client.get(
        "/api/analytics/profit-loss?start_date=2025-05-01&end_date=2025-04-01",
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


@pytest.mark.api
def test_driver_cannot_read_reports(client, seed, tenant):
    headers = auth_headers(seed.user(tenant, UserRole.DRIVER), tenant.slug)

    assert client.get("/api/analytics/profit-loss", headers=headers).status_code == 403


@pytest.mark.api
def test_overview_counts_and_trend(client, admin_headers):
    client.post(
        "/api/shipments",
        json=shipment_payload(bill_no="A", date="2025-06-01", freight="100", payment_method="TO_PAY"),
        headers=admin_headers,
    )
    client.post(
        "/api/shipments",
        json=shipment_payload(bill_no="B", date="2025-06-20", freight="300"),
        headers=admin_headers,
    )

    body = client.get(
        "/api/analytics/overview?from_date=2025-01-01&to_date=2025-06-30",
        headers=admin_headers,
    ).json()

    assert body["total_shipments"] == 2
    assert body["shipments_by_payment_method"] == {"TO_PAY": 1, "PAID": 1}
    assert money(body["total_revenue"]) == money("400.00")
    assert [point["month"] for point in body["monthly"]][-1] == "2025-06"
    june = body["monthly"][-1]
    assert june["shipments"] == 2
    assert money(june["revenue"]) == money("400.00")
    assert len(body["recent_shipments"]) == 2
