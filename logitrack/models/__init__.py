"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from logitrack.models.tenant import Tenant
from logitrack.models.user import User
from logitrack.models.vehicle import Vehicle
from logitrack.models.driver import Driver
from logitrack.models.shipment import Shipment
from logitrack.models.employee import Employee
from logitrack.models.expense import Expense
from logitrack.models.global_settings import GlobalSettings

# Export all models
__all__ = [
    "Tenant",
    "User",
    "Vehicle",
    "Driver",
    "Shipment",
    "Employee",
    "Expense",
    "GlobalSettings",
]
