"""
Vehicle model.

A vehicle is available exactly when no driver references it.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logitrack.models.base_model import TenantScopedModel

if TYPE_CHECKING:
    from logitrack.models.driver import Driver


class Vehicle(TenantScopedModel):
    """Fleet vehicle owned by a tenant."""

    __tablename__ = "vehicle"

    number: Mapped[str] = mapped_column(String(50), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    # Maintained only by the assignment operations
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    driver: Mapped[Optional["Driver"]] = relationship(
        "Driver",
        back_populates="vehicle",
        uselist=False,
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "number", name="uq_vehicle_tenant_number"),
    )
