"""
Driver model.

Each driver is backed by exactly one DRIVER user; name, email and phone are
read through that user.
"""

from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logitrack.models.base_model import TenantScopedModel

if TYPE_CHECKING:
    from logitrack.models.user import User
    from logitrack.models.vehicle import Vehicle


class Driver(TenantScopedModel):
    """Driver profile with an optional vehicle assignment."""

    __tablename__ = "driver"

    license_number: Mapped[str] = mapped_column(String(50), nullable=False)

    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    # Unique: a vehicle is held by at most one driver
    vehicle_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("vehicle.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")

    vehicle: Mapped[Optional["Vehicle"]] = relationship(
        "Vehicle",
        back_populates="driver",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "license_number", name="uq_driver_tenant_license"),
    )

    @property
    def name(self) -> str:
        return self.user.name

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def phone(self) -> Optional[str]:
        return self.user.phone
