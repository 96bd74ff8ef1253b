"""
Cross-tenant figures for the superadmin dashboard.
"""

from datetime import date, datetime, time, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.models.driver import Driver
from logitrack.models.shipment import Shipment
from logitrack.models.tenant import Tenant
from logitrack.models.user import User
from logitrack.models.vehicle import Vehicle
from logitrack.repositories.shipment_repository import ShipmentRepository
from logitrack.schemas.settings import (
    DashboardStats,
    MonthlyStat,
    PlatformOverview,
    PlatformShipment,
    TopTransporters,
    TransporterRank,
    TransporterStatusCounts,
    UserGrowthPoint,
)
from logitrack.services.report_service import month_start
from logitrack.services.shipment_service import to_money
from logitrack.utils.time import utc_today


class PlatformAnalyticsService:
    """Aggregations across every tenant."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, model, *criteria) -> int:
        result = await self.db.execute(select(func.count(model.id)).where(*criteria))
        return int(result.scalar_one())

    async def dashboard_stats(self) -> DashboardStats:
        total_transporters = await self._count(Tenant)
        active_transporters = await self._count(Tenant, Tenant.is_active.is_(True))
        return DashboardStats(
            total_transporters=total_transporters,
            active_transporters=active_transporters,
            inactive_transporters=total_transporters - active_transporters,
            total_users=await self._count(User),
            total_vehicles=await self._count(Vehicle),
            total_drivers=await self._count(Driver),
            total_shipments=await self._count(Shipment),
        )

    @staticmethod
    def _shipment_scope(
        from_date: Optional[date],
        to_date: Optional[date],
        tenant_id: Optional[UUID],
    ) -> List:
        scope = []
        if from_date:
            scope.append(Shipment.date >= from_date)
        if to_date:
            scope.append(Shipment.date <= to_date)
        if tenant_id:
            scope.append(Shipment.tenant_id == tenant_id)
        return scope

    async def overview(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        tenant_id: Optional[UUID] = None,
    ) -> PlatformOverview:
        """Totals plus shipments and revenue for each of the last 12 months."""
        scope = self._shipment_scope(from_date, to_date, tenant_id)
        total_revenue = (await self.db.execute(select(func.sum(Shipment.grand_total)).where(*scope))).scalar()

        today = utc_today()
        first = month_start(today, months_back=11)
        monthly_scope = [Shipment.date >= first, Shipment.date <= today]
        if tenant_id:
            monthly_scope.append(Shipment.tenant_id == tenant_id)
        rows = await self.db.execute(
            select(Shipment.date, func.count(Shipment.id), func.sum(Shipment.grand_total))
            .where(*monthly_scope)
            .group_by(Shipment.date)
        )

        stats = {}
        for months_back in range(11, -1, -1):
            start = month_start(today, months_back=months_back)
            stats[(start.year, start.month)] = MonthlyStat(
                year=start.year, month=start.month, shipments=0, revenue=to_money(0)
            )
        for day, count, revenue in rows.all():
            stat = stats[(day.year, day.month)]
            stat.shipments += count
            stat.revenue = to_money(stat.revenue + to_money(revenue))

        return PlatformOverview(
            from_date=from_date,
            to_date=to_date,
            total_shipments=await self._count(Shipment, *scope),
            total_revenue=to_money(total_revenue),
            active_transporters=await self._count(Tenant, Tenant.is_active.is_(True)),
            active_users=await self._count(User, User.is_active.is_(True)),
            monthly_stats=list(stats.values()),
        )

    async def top_transporters(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        limit: int = 5,
    ) -> TopTransporters:
        scope = self._shipment_scope(from_date, to_date, None)
        shipment_count = func.count(Shipment.id).label("shipment_count")
        revenue = func.coalesce(func.sum(Shipment.grand_total), 0).label("revenue")

        by_count = await self.db.execute(
            select(Tenant.id, Tenant.name, shipment_count)
            .join(Shipment, Shipment.tenant_id == Tenant.id)
            .where(*scope)
            .group_by(Tenant.id, Tenant.name)
            .order_by(shipment_count.desc(), Tenant.name.asc())
            .limit(limit)
        )
        by_revenue = await self.db.execute(
            select(Tenant.id, Tenant.name, revenue)
            .join(Shipment, Shipment.tenant_id == Tenant.id)
            .where(*scope)
            .group_by(Tenant.id, Tenant.name)
            .order_by(revenue.desc(), Tenant.name.asc())
            .limit(limit)
        )
        return TopTransporters(
            by_shipments=[
                TransporterRank(id=tenant_id, name=name, count=count)
                for tenant_id, name, count in by_count.all()
            ],
            by_revenue=[
                TransporterRank(id=tenant_id, name=name, revenue=to_money(total))
                for tenant_id, name, total in by_revenue.all()
            ],
        )

    async def transporter_status(self) -> TransporterStatusCounts:
        active = await self._count(Tenant, Tenant.is_active.is_(True))
        return TransporterStatusCounts(active=active, inactive=await self._count(Tenant) - active)

    async def user_growth(self, tenant_id: Optional[UUID] = None) -> List[UserGrowthPoint]:
        """New users per calendar month, oldest first, last 12 months."""
        today = utc_today()
        first = month_start(today, months_back=11)
        criteria = [User.created_at >= datetime.combine(first, time.min, tzinfo=timezone.utc)]
        if tenant_id:
            criteria.append(User.tenant_id == tenant_id)
        rows = await self.db.execute(select(User.created_at).where(*criteria))

        points = {}
        for months_back in range(11, -1, -1):
            start = month_start(today, months_back=months_back)
            points[(start.year, start.month)] = UserGrowthPoint(year=start.year, month=start.month, count=0)
        for (created_at,) in rows.all():
            point = points.get((created_at.year, created_at.month))
            if point is not None:
                point.count += 1
        return list(points.values())

    async def recent_shipments(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        tenant_id: Optional[UUID] = None,
        limit: int = 10,
    ) -> List[PlatformShipment]:
        shipments, _ = await ShipmentRepository(self.db).list(
            tenant_id=tenant_id,
            page=1,
            page_size=limit,
            from_date=from_date,
            to_date=to_date,
        )
        return [PlatformShipment.model_validate(shipment) for shipment in shipments]
