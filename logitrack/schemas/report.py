"""
Pydantic schemas for analytics responses.
"""

from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from logitrack.schemas.shipment import ShipmentRead


class GroupBy(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class ReportPeriod(BaseModel):
    start_date: date_type
    end_date: date_type
    group_by: GroupBy


class ProfitLossSummary(BaseModel):
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    profit_margin: Decimal


class RevenueBreakdown(BaseModel):
    by_status: Dict[str, Decimal] = Field(default_factory=dict)


class ExpenseBreakdown(BaseModel):
    by_category: Dict[str, Decimal] = Field(default_factory=dict)


class PeriodTotals(BaseModel):
    revenue: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")


class ProfitLossReport(BaseModel):
    period: ReportPeriod
    summary: ProfitLossSummary
    revenue: RevenueBreakdown
    expenses: ExpenseBreakdown
    grouped: Dict[str, PeriodTotals]


class MonthlyPoint(BaseModel):
    month: str
    revenue: Decimal = Decimal("0")
    shipments: int = 0


class RankedDriver(BaseModel):
    id: UUID
    name: str
    shipment_count: int


class RankedVehicle(BaseModel):
    id: UUID
    number: str
    model: str
    shipment_count: int


class OverviewReport(BaseModel):
    """Tenant dashboard figures."""

    from_date: Optional[date_type] = None
    to_date: Optional[date_type] = None
    total_shipments: int
    shipments_by_status: Dict[str, int]
    shipments_by_payment_method: Dict[str, int]
    total_revenue: Decimal
    monthly: List[MonthlyPoint]
    top_drivers: List[RankedDriver]
    top_vehicles: List[RankedVehicle]
    recent_shipments: List[ShipmentRead]
