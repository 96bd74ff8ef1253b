"""
Profit-and-loss and dashboard aggregation for one tenant.

Pure reads: sums come from SQL GROUP BY queries, period bucketing happens
in Python so the same code runs on PostgreSQL and SQLite.
"""

from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.errors import ValidationFailed
from logitrack.models.driver import Driver
from logitrack.models.expense import Expense
from logitrack.models.shipment import Shipment
from logitrack.models.user import User
from logitrack.models.vehicle import Vehicle
from logitrack.schemas.report import (
    ExpenseBreakdown,
    GroupBy,
    MonthlyPoint,
    OverviewReport,
    PeriodTotals,
    ProfitLossReport,
    ProfitLossSummary,
    RankedDriver,
    RankedVehicle,
    ReportPeriod,
    RevenueBreakdown,
)
from logitrack.schemas.shipment import ShipmentRead
from logitrack.services.shipment_service import to_money
from logitrack.utils.time import utc_today

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def period_key(day: date, group_by: GroupBy) -> str:
    """Bucket key for a date: YYYY-MM, YYYY-Qn or YYYY."""
    if group_by == GroupBy.MONTH:
        return f"{day.year:04d}-{day.month:02d}"
    if group_by == GroupBy.QUARTER:
        return f"{day.year:04d}-Q{(day.month - 1) // 3 + 1}"
    return f"{day.year:04d}"


def period_keys(start: date, end: date, group_by: GroupBy) -> List[str]:
    """Every bucket key between two dates, in order."""
    keys: List[str] = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        key = period_key(date(year, month, 1), group_by)
        if not keys or keys[-1] != key:
            keys.append(key)
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return keys


def month_start(day: date, months_back: int = 0) -> date:
    """First day of the month lying `months_back` months before `day`."""
    index = day.year * 12 + day.month - 1 - months_back
    return date(index // 12, index % 12 + 1, 1)


def profit_margin(net_profit: Decimal, revenue: Decimal) -> Decimal:
    """Net profit as a percentage of revenue, 0 when there is no revenue."""
    if revenue == 0:
        return ZERO
    return to_money(net_profit / revenue * HUNDRED)


def _bucket(rows: Iterable[Tuple[date, object]], group_by: GroupBy) -> Dict[str, Decimal]:
    totals: Dict[str, Decimal] = {}
    for day, amount in rows:
        key = period_key(day, group_by)
        totals[key] = totals.get(key, ZERO) + to_money(amount)
    return totals


class ReportService:
    """Aggregation queries behind /api/analytics."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def profit_loss(
        self,
        tenant_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        group_by: GroupBy = GroupBy.MONTH,
    ) -> ProfitLossReport:
        """
        Build the P&L report.

        Defaults: start is 1 January of the current year, end is today.

        Raises:
            ValidationFailed: start_date is after end_date
        """
        today = utc_today()
        start = start_date or date(today.year, 1, 1)
        end = end_date or today
        if start > end:
            raise ValidationFailed(
                "start_date must not be after end_date",
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )

        shipment_scope = (
            Shipment.tenant_id == tenant_id,
            Shipment.date >= start,
            Shipment.date <= end,
        )
        expense_scope = (
            Expense.tenant_id == tenant_id,
            Expense.date >= start,
            Expense.date <= end,
        )

        total_revenue = to_money(
            (await self.db.execute(select(func.sum(Shipment.grand_total)).where(*shipment_scope))).scalar()
        )
        total_expenses = to_money(
            (await self.db.execute(select(func.sum(Expense.amount)).where(*expense_scope))).scalar()
        )
        net_profit = total_revenue - total_expenses

        by_status_rows = await self.db.execute(
            select(Shipment.status, func.sum(Shipment.grand_total))
            .where(*shipment_scope)
            .group_by(Shipment.status)
        )
        by_status = {status.value: to_money(total) for status, total in by_status_rows.all()}

        by_category_rows = await self.db.execute(
            select(Expense.category, func.sum(Expense.amount))
            .where(*expense_scope)
            .group_by(Expense.category)
        )
        by_category = {category.value: to_money(total) for category, total in by_category_rows.all()}

        revenue_by_day = await self.db.execute(
            select(Shipment.date, func.sum(Shipment.grand_total))
            .where(*shipment_scope)
            .group_by(Shipment.date)
        )
        expenses_by_day = await self.db.execute(
            select(Expense.date, func.sum(Expense.amount))
            .where(*expense_scope)
            .group_by(Expense.date)
        )
        revenue_buckets = _bucket(revenue_by_day.all(), group_by)
        expense_buckets = _bucket(expenses_by_day.all(), group_by)

        grouped: Dict[str, PeriodTotals] = OrderedDict()
        for key in period_keys(start, end, group_by):
            revenue = revenue_buckets.get(key, ZERO)
            expenses = expense_buckets.get(key, ZERO)
            grouped[key] = PeriodTotals(revenue=revenue, expenses=expenses, profit=revenue - expenses)

        return ProfitLossReport(
            period=ReportPeriod(start_date=start, end_date=end, group_by=group_by),
            summary=ProfitLossSummary(
                total_revenue=total_revenue,
                total_expenses=total_expenses,
                net_profit=net_profit,
                profit_margin=profit_margin(net_profit, total_revenue),
            ),
            revenue=RevenueBreakdown(by_status=by_status),
            expenses=ExpenseBreakdown(by_category=by_category),
            grouped=grouped,
        )

    async def overview(
        self,
        tenant_id: UUID,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> OverviewReport:
        """Dashboard figures; the monthly trend defaults to the last 12 months."""
        if from_date and to_date and from_date > to_date:
            raise ValidationFailed("from_date must not be after to_date")

        scope = [Shipment.tenant_id == tenant_id]
        if from_date:
            scope.append(Shipment.date >= from_date)
        if to_date:
            scope.append(Shipment.date <= to_date)

        total_shipments = (await self.db.execute(select(func.count(Shipment.id)).where(*scope))).scalar_one()
        total_revenue = to_money(
            (await self.db.execute(select(func.sum(Shipment.grand_total)).where(*scope))).scalar()
        )

        status_rows = await self.db.execute(
            select(Shipment.status, func.count(Shipment.id)).where(*scope).group_by(Shipment.status)
        )
        payment_rows = await self.db.execute(
            select(Shipment.payment_method, func.count(Shipment.id))
            .where(*scope)
            .group_by(Shipment.payment_method)
        )

        trend_to = to_date or utc_today()
        trend_from = from_date or month_start(trend_to, months_back=11)
        trend_rows = await self.db.execute(
            select(Shipment.date, func.count(Shipment.id), func.sum(Shipment.grand_total))
            .where(
                Shipment.tenant_id == tenant_id,
                Shipment.date >= trend_from,
                Shipment.date <= trend_to,
            )
            .group_by(Shipment.date)
        )
        monthly: Dict[str, MonthlyPoint] = OrderedDict(
            (key, MonthlyPoint(month=key)) for key in period_keys(trend_from, trend_to, GroupBy.MONTH)
        )
        for day, count, revenue in trend_rows.all():
            point = monthly[period_key(day, GroupBy.MONTH)]
            point.shipments += count
            point.revenue = to_money(point.revenue + to_money(revenue))

        shipment_count = func.count(Shipment.id).label("shipment_count")
        driver_rows = await self.db.execute(
            select(Driver.id, User.name, shipment_count)
            .join(User, User.id == Driver.user_id)
            .join(Shipment, Shipment.driver_id == Driver.id)
            .where(Driver.tenant_id == tenant_id, *scope)
            .group_by(Driver.id, User.name)
            .order_by(shipment_count.desc(), User.name.asc())
            .limit(5)
        )
        vehicle_rows = await self.db.execute(
            select(Vehicle.id, Vehicle.number, Vehicle.model, shipment_count)
            .join(Shipment, Shipment.vehicle_id == Vehicle.id)
            .where(Vehicle.tenant_id == tenant_id, *scope)
            .group_by(Vehicle.id, Vehicle.number, Vehicle.model)
            .order_by(shipment_count.desc(), Vehicle.number.asc())
            .limit(5)
        )

        recent = await self.db.execute(
            select(Shipment).where(*scope).order_by(Shipment.created_at.desc()).limit(5)
        )

        return OverviewReport(
            from_date=from_date,
            to_date=to_date,
            total_shipments=total_shipments,
            shipments_by_status={status.value: count for status, count in status_rows.all()},
            shipments_by_payment_method={method.value: count for method, count in payment_rows.all()},
            total_revenue=total_revenue,
            monthly=list(monthly.values()),
            top_drivers=[
                RankedDriver(id=driver_id, name=name, shipment_count=count)
                for driver_id, name, count in driver_rows.all()
            ],
            top_vehicles=[
                RankedVehicle(id=vehicle_id, number=number, model=model, shipment_count=count)
                for vehicle_id, number, model, count in vehicle_rows.all()
            ],
            recent_shipments=[ShipmentRead.model_validate(s) for s in recent.scalars().all()],
        )
