"""
Expense Pydantic schemas.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field

from logitrack.models.enums import ExpenseCategory, ExpenseStatus
from logitrack.schemas.base import PartialUpdate, TenantScopedRead
from logitrack.utils.time import utc_today


def _not_in_future(value: date_type) -> date_type:
    if value > utc_today():
        raise ValueError("Expense date cannot be in the future")
    return value


ExpenseDate = Annotated[date_type, AfterValidator(_not_in_future)]


class ExpenseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0)
    category: ExpenseCategory
    date: ExpenseDate
    status: ExpenseStatus = ExpenseStatus.PENDING
    description: Optional[str] = None
    employee_id: Optional[UUID] = None


class ExpenseUpdate(PartialUpdate):
    NULLABLE = frozenset({"description", "employee_id"})

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, gt=0)
    category: Optional[ExpenseCategory] = None
    date: Optional[ExpenseDate] = None
    status: Optional[ExpenseStatus] = None
    description: Optional[str] = None
    employee_id: Optional[UUID] = None


class ExpenseRead(TenantScopedRead):
    title: str
    amount: Decimal
    category: ExpenseCategory
    date: date_type
    status: ExpenseStatus
    description: Optional[str] = None
    employee_id: Optional[UUID] = None
