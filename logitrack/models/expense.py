"""
Expense model.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Date, Enum as SAEnum, ForeignKey, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from logitrack.models.base_model import TenantScopedModel
from logitrack.models.enums import ExpenseCategory, ExpenseStatus


class Expense(TenantScopedModel):
    """Operating expense recorded against a tenant, optionally tied to an employee."""

    __tablename__ = "expense"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    category: Mapped[ExpenseCategory] = mapped_column(
        SAEnum(ExpenseCategory, native_enum=False, length=30),
        nullable=False,
        index=True,
    )

    date: Mapped[date_type] = mapped_column(Date, nullable=False)

    status: Mapped[ExpenseStatus] = mapped_column(
        SAEnum(ExpenseStatus, native_enum=False, length=20),
        nullable=False,
        default=ExpenseStatus.PENDING,
    )

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    employee_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employee.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        Index("ix_expense_tenant_date", "tenant_id", "date"),
    )
