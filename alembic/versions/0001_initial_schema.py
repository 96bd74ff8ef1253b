"""Initial LogiTrack schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-01-12 10:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _tenant_scoped():
    return [
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("tenant_id", sa.Uuid(), sa.ForeignKey("tenant.id"), nullable=False),
    ]


def _money(name: str):
    return sa.Column(name, sa.Numeric(12, 2), nullable=False, server_default=sa.text("0"))


def upgrade() -> None:
    op.create_table(
        "tenant",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("domain", sa.String(length=255), nullable=True),
        sa.Column("gst_number", sa.String(length=30), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("settings", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_tenant_slug", "tenant", ["slug"], unique=True)

    op.create_table(
        "user",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("tenant_id", sa.Uuid(), sa.ForeignKey("tenant.id"), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("settings", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_user_tenant_id", "user", ["tenant_id"])
    op.create_index("ix_user_tenant_email", "user", ["tenant_id", "email"], unique=True)

    op.create_table(
        "vehicle",
        *_tenant_scoped(),
        sa.Column("number", sa.String(length=50), nullable=False),
        sa.Column("model", sa.String(length=100), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "number", name="uq_vehicle_tenant_number"),
    )
    op.create_index("ix_vehicle_tenant_id", "vehicle", ["tenant_id"])

    op.create_table(
        "driver",
        *_tenant_scoped(),
        sa.Column("license_number", sa.String(length=50), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("user.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("vehicle_id", sa.Uuid(), sa.ForeignKey("vehicle.id", ondelete="SET NULL"), nullable=True, unique=True),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "license_number", name="uq_driver_tenant_license"),
    )
    op.create_index("ix_driver_tenant_id", "driver", ["tenant_id"])

    op.create_table(
        "shipment",
        *_tenant_scoped(),
        sa.Column("bill_no", sa.String(length=50), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("transport_name", sa.String(length=255), nullable=False),
        sa.Column("consignor_name", sa.String(length=255), nullable=False),
        sa.Column("consignor_address", sa.Text(), nullable=False),
        sa.Column("consignor_gst_number", sa.String(length=30), nullable=True),
        sa.Column("consignee_name", sa.String(length=255), nullable=False),
        sa.Column("consignee_address", sa.Text(), nullable=False),
        sa.Column("consignee_gst_number", sa.String(length=30), nullable=True),
        sa.Column("goods_type", sa.String(length=100), nullable=False),
        sa.Column("goods_description", sa.Text(), nullable=True),
        sa.Column("weight", sa.Numeric(12, 2), nullable=False),
        sa.Column("private_mark", sa.String(length=100), nullable=True),
        sa.Column("payment_method", sa.String(length=20), nullable=False),
        _money("freight"),
        _money("local_cartage"),
        _money("hamali"),
        _money("stationary"),
        _money("door_delivery"),
        _money("other"),
        _money("grand_total"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default=sa.text("'PENDING'")),
        sa.Column("source", sa.String(length=255), nullable=False),
        sa.Column("destination", sa.String(length=255), nullable=False),
        sa.Column("eway_bill_number", sa.String(length=50), nullable=True),
        sa.Column("driver_id", sa.Uuid(), sa.ForeignKey("driver.id", ondelete="SET NULL"), nullable=True),
        sa.Column("vehicle_id", sa.Uuid(), sa.ForeignKey("vehicle.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "bill_no", name="uq_shipment_tenant_bill_no"),
    )
    op.create_index("ix_shipment_tenant_id", "shipment", ["tenant_id"])
    op.create_index("ix_shipment_date", "shipment", ["date"])
    op.create_index("ix_shipment_status", "shipment", ["status"])
    op.create_index("ix_shipment_driver_id", "shipment", ["driver_id"])
    op.create_index("ix_shipment_vehicle_id", "shipment", ["vehicle_id"])
    op.create_index("ix_shipment_tenant_date", "shipment", ["tenant_id", "date"])

    op.create_table(
        "employee",
        *_tenant_scoped(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("aadhar_number", sa.String(length=20), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("salary", sa.Numeric(12, 2), nullable=False),
        sa.Column("date_of_joining", sa.Date(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_employee_tenant_id", "employee", ["tenant_id"])
    op.create_index("ix_employee_role", "employee", ["role"])

    op.create_table(
        "expense",
        *_tenant_scoped(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("category", sa.String(length=30), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default=sa.text("'PENDING'")),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("employee_id", sa.Uuid(), sa.ForeignKey("employee.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_expense_tenant_id", "expense", ["tenant_id"])
    op.create_index("ix_expense_category", "expense", ["category"])
    op.create_index("ix_expense_employee_id", "expense", ["employee_id"])
    op.create_index("ix_expense_tenant_date", "expense", ["tenant_id", "date"])

    op.create_table(
        "global_settings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("global_settings")
    op.drop_table("expense")
    op.drop_table("employee")
    op.drop_table("shipment")
    op.drop_table("driver")
    op.drop_table("vehicle")
    op.drop_index("ix_user_tenant_email", table_name="user")
    op.drop_table("user")
    op.drop_table("tenant")
