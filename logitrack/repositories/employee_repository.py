"""
Employee repository - database operations for Employee.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.models.employee import Employee
from logitrack.models.enums import EmployeeRole
from logitrack.repositories.base import paginate, search_clause


class EmployeeRepository:
    """Repository for Employee database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, tenant_id: UUID, employee_id: UUID) -> Optional[Employee]:
        result = await self.db.execute(
            select(Employee)
            .where(Employee.tenant_id == tenant_id, Employee.id == employee_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        tenant_id: UUID,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        role: Optional[EmployeeRole] = None,
    ) -> Tuple[List[Employee], int]:
        query = select(Employee).where(Employee.tenant_id == tenant_id)
        if role is not None:
            query = query.where(Employee.role == role)
        if search and search.strip():
            query = query.where(
                search_clause(search, Employee.name, Employee.email, Employee.phone)
            )
        query = query.order_by(Employee.created_at.desc(), Employee.name.asc())
        return await paginate(self.db, query, page, page_size)

    async def create(self, tenant_id: UUID, values: dict) -> Employee:
        employee = Employee(tenant_id=tenant_id, **values)
        self.db.add(employee)
        await self.db.flush()
        return employee

    async def update(self, employee: Employee, values: dict) -> Employee:
        for field, value in values.items():
            setattr(employee, field, value)
        await self.db.flush()
        return employee

    async def delete(self, employee: Employee) -> None:
        await self.db.delete(employee)
        await self.db.flush()
