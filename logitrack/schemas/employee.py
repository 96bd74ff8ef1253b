"""
Employee Pydantic schemas.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from logitrack.models.enums import EmployeeRole
from logitrack.schemas.base import PHONE_PATTERN, PartialUpdate, TenantScopedRead


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN)
    aadhar_number: str = Field(..., pattern=r"^\d{12}$")
    address: str = Field(..., min_length=1)
    role: EmployeeRole
    salary: Decimal = Field(..., gt=0)
    date_of_joining: date_type


class EmployeeUpdate(PartialUpdate):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    aadhar_number: Optional[str] = Field(None, pattern=r"^\d{12}$")
    address: Optional[str] = Field(None, min_length=1)
    role: Optional[EmployeeRole] = None
    salary: Optional[Decimal] = Field(None, gt=0)
    date_of_joining: Optional[date_type] = None


class EmployeeRead(TenantScopedRead):
    name: str
    email: str
    phone: str
    aadhar_number: str
    address: str
    role: EmployeeRole
    salary: Decimal
    date_of_joining: date_type
