"""
Employee business logic service.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.pagination import PageParams
from logitrack.errors import NotFound
from logitrack.models.employee import Employee
from logitrack.models.enums import EmployeeRole
from logitrack.repositories.employee_repository import EmployeeRepository
from logitrack.repositories.expense_repository import ExpenseRepository
from logitrack.schemas.employee import EmployeeCreate


class EmployeeService:
    """Service for employee business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = EmployeeRepository(db)

    async def list_employees(
        self,
        tenant_id: UUID,
        params: PageParams,
        role: Optional[EmployeeRole] = None,
    ) -> Tuple[List[Employee], int]:
        """List employees with filters."""
        return await self.repository.list(
            tenant_id=tenant_id,
            page=params.page,
            page_size=params.page_size,
            search=params.search,
            role=role,
        )

    async def get_employee(self, tenant_id: UUID, employee_id: UUID) -> Employee:
        """Get an employee by ID."""
        employee = await self.repository.get_by_id(tenant_id, employee_id)
        if not employee:
            raise NotFound(f"Employee {employee_id} not found")
        return employee

    async def create_employee(self, tenant_id: UUID, data: EmployeeCreate) -> Employee:
        """Create a new employee."""
        employee = await self.repository.create(tenant_id, data.model_dump())
        await self.db.commit()
        return await self.get_employee(tenant_id, employee.id)

    async def update_employee(self, tenant_id: UUID, employee_id: UUID, values: dict) -> Employee:
        """Update an employee."""
        employee = await self.get_employee(tenant_id, employee_id)
        await self.repository.update(employee, values)
        await self.db.commit()
        return await self.get_employee(tenant_id, employee_id)

    async def delete_employee(self, tenant_id: UUID, employee_id: UUID) -> None:
        """Delete an employee; their expenses stay, unlinked."""
        employee = await self.get_employee(tenant_id, employee_id)
        await ExpenseRepository(self.db).clear_employee(tenant_id, employee_id)
        await self.repository.delete(employee)
        await self.db.commit()
