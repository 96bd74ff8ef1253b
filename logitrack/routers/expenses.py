"""
Expense router - API endpoints for expenses.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from logitrack.core.dependencies import RequestContext, require_permission
from logitrack.core.pagination import PageParams, build_page, page_params
from logitrack.core.permissions import Action, Resource
from logitrack.db.session import get_db
from logitrack.models.enums import ExpenseCategory, ExpenseStatus
from logitrack.schemas.base import Page
from logitrack.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from logitrack.services.expense_service import ExpenseService

router = APIRouter(prefix="/api/expenses", tags=["Expenses"])


@router.get("", response_model=Page[ExpenseRead])
async def list_expenses(
    ctx: RequestContext = Depends(require_permission(Resource.EXPENSES, Action.LIST)),
    db: AsyncSession = Depends(get_db),
    params: PageParams = Depends(page_params),
    category: Optional[ExpenseCategory] = None,
    expense_status: Optional[ExpenseStatus] = Query(None, alias="status"),
    employee_id: Optional[UUID] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
):
    """
    List expenses newest first.

    Filters: category, status, employee_id, from_date, to_date (inclusive).
    """
    items, total = await ExpenseService(db).list_expenses(
        ctx.tenant_id,
        params,
        category=category,
        status=expense_status,
        employee_id=employee_id,
        from_date=from_date,
        to_date=to_date,
    )
    return build_page(ExpenseRead, items, total, params)


@router.get("/{expense_id}", response_model=ExpenseRead)
async def get_expense(
    expense_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.EXPENSES, Action.READ)),
    db: AsyncSession = Depends(get_db),
):
    return await ExpenseService(db).get_expense(ctx.tenant_id, expense_id)


@router.post("", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
async def create_expense(
    data: ExpenseCreate,
    ctx: RequestContext = Depends(require_permission(Resource.EXPENSES, Action.CREATE)),
    db: AsyncSession = Depends(get_db),
):
    return await ExpenseService(db).create_expense(ctx.tenant_id, data)


@router.put("/{expense_id}", response_model=ExpenseRead)
async def replace_expense(
    expense_id: UUID,
    data: ExpenseCreate,
    ctx: RequestContext = Depends(require_permission(Resource.EXPENSES, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await ExpenseService(db).update_expense(ctx.tenant_id, expense_id, data.model_dump())


@router.patch("/{expense_id}", response_model=ExpenseRead)
async def update_expense(
    expense_id: UUID,
    data: ExpenseUpdate,
    ctx: RequestContext = Depends(require_permission(Resource.EXPENSES, Action.UPDATE)),
    db: AsyncSession = Depends(get_db),
):
    return await ExpenseService(db).update_expense(
        ctx.tenant_id, expense_id, data.model_dump(exclude_unset=True)
    )


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: UUID,
    ctx: RequestContext = Depends(require_permission(Resource.EXPENSES, Action.DELETE)),
    db: AsyncSession = Depends(get_db),
):
    await ExpenseService(db).delete_expense(ctx.tenant_id, expense_id)
