"""
Pydantic schemas shared by the API and the client.
"""

from logitrack.schemas.base import Page, TenantScopedRead
from logitrack.schemas.driver import DriverAssign, DriverCreate, DriverCreated, DriverRead, DriverUpdate
from logitrack.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from logitrack.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from logitrack.schemas.shipment import ShipmentCreate, ShipmentRead, ShipmentStatusUpdate, ShipmentUpdate
from logitrack.schemas.user import LoginRequest, LoginResponse, UserCreate, UserRead, UserUpdate
from logitrack.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate

__all__ = [
    "Page",
    "TenantScopedRead",
    "DriverAssign",
    "DriverCreate",
    "DriverCreated",
    "DriverRead",
    "DriverUpdate",
    "EmployeeCreate",
    "EmployeeRead",
    "EmployeeUpdate",
    "ExpenseCreate",
    "ExpenseRead",
    "ExpenseUpdate",
    "ShipmentCreate",
    "ShipmentRead",
    "ShipmentStatusUpdate",
    "ShipmentUpdate",
    "LoginRequest",
    "LoginResponse",
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "VehicleCreate",
    "VehicleRead",
    "VehicleUpdate",
]
