"""
Shipment model.

One row per consignment bill. grand_total is always the sum of the six
charge columns.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import Date, Enum as SAEnum, ForeignKey, Index, Numeric, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logitrack.models.base_model import TenantScopedModel
from logitrack.models.enums import PaymentMethod, ShipmentStatus

if TYPE_CHECKING:
    from logitrack.models.driver import Driver
    from logitrack.models.tenant import Tenant
    from logitrack.models.vehicle import Vehicle


CHARGE_FIELDS = (
    "freight",
    "local_cartage",
    "hamali",
    "stationary",
    "door_delivery",
    "other",
)


def _money():
    return mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))


class Shipment(TenantScopedModel):
    """Consignment bill with parties, goods, charges and route."""

    __tablename__ = "shipment"

    bill_no: Mapped[str] = mapped_column(String(50), nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)
    transport_name: Mapped[str] = mapped_column(String(255), nullable=False)

    consignor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    consignor_address: Mapped[str] = mapped_column(Text, nullable=False)
    consignor_gst_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    consignee_name: Mapped[str] = mapped_column(String(255), nullable=False)
    consignee_address: Mapped[str] = mapped_column(Text, nullable=False)
    consignee_gst_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    goods_type: Mapped[str] = mapped_column(String(100), nullable=False)
    goods_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    weight: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    private_mark: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    payment_method: Mapped[PaymentMethod] = mapped_column(
        SAEnum(PaymentMethod, native_enum=False, length=20),
        nullable=False,
    )

    freight: Mapped[Decimal] = _money()
    local_cartage: Mapped[Decimal] = _money()
    hamali: Mapped[Decimal] = _money()
    stationary: Mapped[Decimal] = _money()
    door_delivery: Mapped[Decimal] = _money()
    other: Mapped[Decimal] = _money()
    grand_total: Mapped[Decimal] = _money()

    status: Mapped[ShipmentStatus] = mapped_column(
        SAEnum(ShipmentStatus, native_enum=False, length=20),
        nullable=False,
        default=ShipmentStatus.PENDING,
        index=True,
    )

    source: Mapped[str] = mapped_column(String(255), nullable=False)
    destination: Mapped[str] = mapped_column(String(255), nullable=False)
    eway_bill_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    driver_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("driver.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    vehicle_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("vehicle.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    driver: Mapped[Optional["Driver"]] = relationship("Driver", lazy="selectin")
    vehicle: Mapped[Optional["Vehicle"]] = relationship("Vehicle", lazy="selectin")
    tenant: Mapped["Tenant"] = relationship("Tenant", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("tenant_id", "bill_no", name="uq_shipment_tenant_bill_no"),
        Index("ix_shipment_tenant_date", "tenant_id", "date"),
    )
