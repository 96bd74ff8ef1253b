"""
Employee model. Independent of User and Driver.
"""

from datetime import date as date_type
from decimal import Decimal

from sqlalchemy import Date, Enum as SAEnum, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from logitrack.models.base_model import TenantScopedModel
from logitrack.models.enums import EmployeeRole


class Employee(TenantScopedModel):
    __tablename__ = "employee"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    aadhar_number: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)

    role: Mapped[EmployeeRole] = mapped_column(
        SAEnum(EmployeeRole, native_enum=False, length=20),
        nullable=False,
        index=True,
    )

    salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date_of_joining: Mapped[date_type] = mapped_column(Date, nullable=False)
