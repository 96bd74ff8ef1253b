"""
Enumerations shared by models and schemas.
"""

from enum import Enum


class UserRole(str, Enum):
    SUPERADMIN = "SUPERADMIN"
    ADMIN = "ADMIN"
    DISPATCHER = "DISPATCHER"
    DRIVER = "DRIVER"


class ShipmentStatus(str, Enum):
    # Free-choice: any status may follow any other.
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DELIVERED = "DELIVERED"


class PaymentMethod(str, Enum):
    TO_PAY = "TO_PAY"
    PAID = "PAID"
    TO_BE_BILLED = "TO_BE_BILLED"


class EmployeeRole(str, Enum):
    DRIVER = "DRIVER"
    HELPER = "HELPER"
    MECHANIC = "MECHANIC"
    MANAGER = "MANAGER"
    ACCOUNTANT = "ACCOUNTANT"


class ExpenseCategory(str, Enum):
    FUEL = "FUEL"
    MAINTENANCE = "MAINTENANCE"
    SALARY = "SALARY"
    TOLL = "TOLL"
    INSURANCE = "INSURANCE"
    OFFICE_SUPPLIES = "OFFICE_SUPPLIES"
    REPAIR = "REPAIR"
    PARKING = "PARKING"
    FINES = "FINES"
    TAX = "TAX"
    RENT = "RENT"
    UTILITIES = "UTILITIES"
    LOAN_PAYMENT = "LOAN_PAYMENT"
    COMMISSION = "COMMISSION"
    TRAINING = "TRAINING"
    MEDICAL = "MEDICAL"
    OTHER = "OTHER"


class ExpenseStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    PAID = "PAID"
    REJECTED = "REJECTED"
