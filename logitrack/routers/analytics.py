"""
Analytics router - P&L report and dashboard overview.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.dependencies import RequestContext, require_permission
from logitrack.core.permissions import Action, Resource
from logitrack.db.session import get_db
from logitrack.schemas.report import GroupBy, OverviewReport, ProfitLossReport
from logitrack.services.report_service import ReportService

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("/profit-loss", response_model=ProfitLossReport)
async def profit_loss_report(
    ctx: RequestContext = Depends(require_permission(Resource.REPORTS, Action.READ)),
    db: AsyncSession = Depends(get_db),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    group_by: GroupBy = GroupBy.MONTH,
):
    """
    Profit and loss for a date range.

    Defaults to 1 January of the current year through today, grouped by month.
    """
    return await ReportService(db).profit_loss(ctx.tenant_id, start_date, end_date, group_by)


@router.get("/overview", response_model=OverviewReport)
async def overview(
    ctx: RequestContext = Depends(require_permission(Resource.REPORTS, Action.READ)),
    db: AsyncSession = Depends(get_db),
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
):
    return await ReportService(db).overview(ctx.tenant_id, from_date, to_date)
