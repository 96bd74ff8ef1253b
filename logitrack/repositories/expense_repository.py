"""
Expense repository - database operations for Expense.
"""

from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.models.enums import ExpenseCategory, ExpenseStatus
from logitrack.models.expense import Expense
from logitrack.repositories.base import paginate, search_clause


class ExpenseRepository:
    """Repository for Expense database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, tenant_id: UUID, expense_id: UUID) -> Optional[Expense]:
        result = await self.db.execute(
            select(Expense)
            .where(Expense.tenant_id == tenant_id, Expense.id == expense_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        tenant_id: UUID,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        category: Optional[ExpenseCategory] = None,
        status: Optional[ExpenseStatus] = None,
        employee_id: Optional[UUID] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Tuple[List[Expense], int]:
        query = select(Expense).where(Expense.tenant_id == tenant_id)
        if category is not None:
            query = query.where(Expense.category == category)
        if status is not None:
            query = query.where(Expense.status == status)
        if employee_id is not None:
            query = query.where(Expense.employee_id == employee_id)
        if from_date is not None:
            query = query.where(Expense.date >= from_date)
        if to_date is not None:
            query = query.where(Expense.date <= to_date)
        if search and search.strip():
            query = query.where(search_clause(search, Expense.title, Expense.description))
        query = query.order_by(Expense.date.desc(), Expense.created_at.desc())
        return await paginate(self.db, query, page, page_size)

    async def create(self, tenant_id: UUID, values: dict) -> Expense:
        expense = Expense(tenant_id=tenant_id, **values)
        self.db.add(expense)
        await self.db.flush()
        return expense

    async def update(self, expense: Expense, values: dict) -> Expense:
        for field, value in values.items():
            setattr(expense, field, value)
        await self.db.flush()
        return expense

    async def delete(self, expense: Expense) -> None:
        await self.db.delete(expense)
        await self.db.flush()

    async def clear_employee(self, tenant_id: UUID, employee_id: UUID) -> None:
        await self.db.execute(
            update(Expense)
            .where(Expense.tenant_id == tenant_id, Expense.employee_id == employee_id)
            .values(employee_id=None)
        )
