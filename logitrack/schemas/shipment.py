"""
Shipment Pydantic schemas.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from logitrack.models.enums import PaymentMethod, ShipmentStatus
from logitrack.schemas.base import PartialUpdate, TenantScopedRead


Money = Decimal


class ShipmentCharges(BaseModel):
    freight: Money = Field(Decimal("0"), ge=0)
    local_cartage: Money = Field(Decimal("0"), ge=0)
    hamali: Money = Field(Decimal("0"), ge=0)
    stationary: Money = Field(Decimal("0"), ge=0)
    door_delivery: Money = Field(Decimal("0"), ge=0)
    other: Money = Field(Decimal("0"), ge=0)


class ShipmentCreate(ShipmentCharges):
    """
    Payload for POST and PUT.

    grand_total is accepted for compatibility but the server always
    recomputes it from the charges.
    """

    bill_no: str = Field(..., min_length=1, max_length=50)
    date: date_type
    transport_name: str = Field(..., min_length=1, max_length=255)

    consignor_name: str = Field(..., min_length=1, max_length=255)
    consignor_address: str = Field(..., min_length=1)
    consignor_gst_number: Optional[str] = Field(None, max_length=30)
    consignee_name: str = Field(..., min_length=1, max_length=255)
    consignee_address: str = Field(..., min_length=1)
    consignee_gst_number: Optional[str] = Field(None, max_length=30)

    goods_type: str = Field(..., min_length=1, max_length=100)
    goods_description: Optional[str] = None
    weight: Decimal = Field(..., gt=0)
    private_mark: Optional[str] = Field(None, max_length=100)
    payment_method: PaymentMethod

    grand_total: Optional[Money] = None
    status: ShipmentStatus = ShipmentStatus.PENDING

    source: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=255)
    eway_bill_number: Optional[str] = Field(None, max_length=50)

    driver_id: Optional[UUID] = None
    vehicle_id: Optional[UUID] = None


class ShipmentUpdate(PartialUpdate):
    """Partial update (PATCH); only fields present are applied."""

    NULLABLE = frozenset(
        {
            "consignor_gst_number",
            "consignee_gst_number",
            "goods_description",
            "private_mark",
            "grand_total",
            "eway_bill_number",
            "driver_id",
            "vehicle_id",
        }
    )

    bill_no: Optional[str] = Field(None, min_length=1, max_length=50)
    date: Optional[date_type] = None
    transport_name: Optional[str] = Field(None, min_length=1, max_length=255)

    consignor_name: Optional[str] = Field(None, min_length=1, max_length=255)
    consignor_address: Optional[str] = Field(None, min_length=1)
    consignor_gst_number: Optional[str] = Field(None, max_length=30)
    consignee_name: Optional[str] = Field(None, min_length=1, max_length=255)
    consignee_address: Optional[str] = Field(None, min_length=1)
    consignee_gst_number: Optional[str] = Field(None, max_length=30)

    goods_type: Optional[str] = Field(None, min_length=1, max_length=100)
    goods_description: Optional[str] = None
    weight: Optional[Decimal] = Field(None, gt=0)
    private_mark: Optional[str] = Field(None, max_length=100)
    payment_method: Optional[PaymentMethod] = None

    freight: Optional[Money] = Field(None, ge=0)
    local_cartage: Optional[Money] = Field(None, ge=0)
    hamali: Optional[Money] = Field(None, ge=0)
    stationary: Optional[Money] = Field(None, ge=0)
    door_delivery: Optional[Money] = Field(None, ge=0)
    other: Optional[Money] = Field(None, ge=0)
    grand_total: Optional[Money] = None
    status: Optional[ShipmentStatus] = None

    source: Optional[str] = Field(None, min_length=1, max_length=255)
    destination: Optional[str] = Field(None, min_length=1, max_length=255)
    eway_bill_number: Optional[str] = Field(None, max_length=50)

    driver_id: Optional[UUID] = None
    vehicle_id: Optional[UUID] = None


class ShipmentStatusUpdate(BaseModel):
    status: ShipmentStatus


class ShipmentDriver(BaseModel):
    id: UUID
    name: str
    phone: Optional[str] = None
    license_number: str

    model_config = ConfigDict(from_attributes=True)


class ShipmentVehicle(BaseModel):
    id: UUID
    number: str
    model: str

    model_config = ConfigDict(from_attributes=True)


class ShipmentRead(TenantScopedRead):
    bill_no: str
    date: date_type
    transport_name: str

    consignor_name: str
    consignor_address: str
    consignor_gst_number: Optional[str] = None
    consignee_name: str
    consignee_address: str
    consignee_gst_number: Optional[str] = None

    goods_type: str
    goods_description: Optional[str] = None
    weight: Decimal
    private_mark: Optional[str] = None
    payment_method: PaymentMethod

    freight: Money
    local_cartage: Money
    hamali: Money
    stationary: Money
    door_delivery: Money
    other: Money
    grand_total: Money
    status: ShipmentStatus

    source: str
    destination: str
    eway_bill_number: Optional[str] = None

    driver_id: Optional[UUID] = None
    vehicle_id: Optional[UUID] = None
    driver: Optional[ShipmentDriver] = None
    vehicle: Optional[ShipmentVehicle] = None
