"""
Expense business logic service.
"""

from typing import List, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.pagination import PageParams
from logitrack.errors import NotFound, ValidationFailed
from logitrack.models.expense import Expense
from logitrack.repositories.employee_repository import EmployeeRepository
from logitrack.repositories.expense_repository import ExpenseRepository
from logitrack.schemas.expense import ExpenseCreate


class ExpenseService:
    """Service for expense business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = ExpenseRepository(db)
        self.employee_repository = EmployeeRepository(db)

    async def list_expenses(self, tenant_id: UUID, params: PageParams, **filters) -> Tuple[List[Expense], int]:
        """List expenses newest first; filters: category, status, employee_id, from_date, to_date."""
        return await self.repository.list(
            tenant_id=tenant_id,
            page=params.page,
            page_size=params.page_size,
            search=params.search,
            **filters,
        )

    async def get_expense(self, tenant_id: UUID, expense_id: UUID) -> Expense:
        expense = await self.repository.get_by_id(tenant_id, expense_id)
        if not expense:
            raise NotFound(f"Expense {expense_id} not found")
        return expense

    async def _check_employee(self, tenant_id: UUID, values: dict) -> None:
        employee_id = values.get("employee_id")
        if employee_id is not None and not await self.employee_repository.get_by_id(tenant_id, employee_id):
            raise ValidationFailed("Employee does not belong to this tenant", details={"field": "employee_id"})

    async def create_expense(self, tenant_id: UUID, data: ExpenseCreate) -> Expense:
        values = data.model_dump()
        await self._check_employee(tenant_id, values)
        expense = await self.repository.create(tenant_id, values)
        await self.db.commit()
        return await self.get_expense(tenant_id, expense.id)

    async def update_expense(self, tenant_id: UUID, expense_id: UUID, values: dict) -> Expense:
        expense = await self.get_expense(tenant_id, expense_id)
        await self._check_employee(tenant_id, values)
        await self.repository.update(expense, values)
        await self.db.commit()
        return await self.get_expense(tenant_id, expense_id)

    async def delete_expense(self, tenant_id: UUID, expense_id: UUID) -> None:
        expense = await self.get_expense(tenant_id, expense_id)
        await self.repository.delete(expense)
        await self.db.commit()
