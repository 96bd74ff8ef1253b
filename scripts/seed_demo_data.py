"""
Seed a demo transporter with vehicles, drivers, shipments, employees and
expenses for UI exploration.

Run after migrations. Re-running is a no-op once the demo tenant exists.

Usage:
    python scripts/seed_demo_data.py
"""

import asyncio
import random
import sys
from datetime import timedelta
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from logitrack.db.session import AsyncSessionLocal
from logitrack.models.enums import (
    EmployeeRole,
    ExpenseCategory,
    ExpenseStatus,
    PaymentMethod,
    ShipmentStatus,
)
from logitrack.repositories.tenant_repository import TenantRepository
from logitrack.schemas.driver import DriverCreate
from logitrack.schemas.employee import EmployeeCreate
from logitrack.schemas.expense import ExpenseCreate
from logitrack.schemas.shipment import ShipmentCreate
from logitrack.schemas.tenant import TransporterCreate
from logitrack.schemas.vehicle import VehicleCreate
from logitrack.services.driver_service import DriverService
from logitrack.services.employee_service import EmployeeService
from logitrack.services.expense_service import ExpenseService
from logitrack.services.shipment_service import ShipmentService
from logitrack.services.tenant_service import TenantService, slugify
from logitrack.services.vehicle_service import VehicleService
from logitrack.utils.time import utc_today

DEMO_TENANT = "Demo Roadways"
DEMO_ADMIN_EMAIL = "admin@demoroadways.example.com"
DEMO_ADMIN_PASSWORD = "admin123"

CITIES = ["Mumbai", "Pune", "Nashik", "Surat", "Ahmedabad", "Indore", "Nagpur"]
GOODS = ["Textiles", "Machinery parts", "FMCG cartons", "Steel coils", "Pharma"]


async def seed_demo_data() -> None:
    random.seed(42)
    async with AsyncSessionLocal() as db:
        existing = await TenantRepository(db).get_by_slug(slugify(DEMO_TENANT))
        if existing:
            print(f"[OK] Demo tenant already seeded: {existing.name} ({existing.slug})")
            return

        tenant, admin = await TenantService(db).create_transporter(
            TransporterCreate(
                name=DEMO_TENANT,
                gst_number="27AAACD1234F1Z5",
                admin_name="Demo Admin",
                admin_email=DEMO_ADMIN_EMAIL,
                admin_password=DEMO_ADMIN_PASSWORD,
            )
        )
        tid = tenant.id
        print(f"[OK] Created tenant {tenant.name} ({tenant.slug}) with admin {admin.email}")

        # ---- Vehicles ----
        vehicle_service = VehicleService(db)
        vehicles = []
        for idx in range(1, 5):
            vehicle = await vehicle_service.create_vehicle(
                tid,
                VehicleCreate(number=f"MH12AB{1000 + idx}", model="Tata LPT 1613", capacity=9000 + idx * 500),
            )
            vehicles.append(vehicle)
        print(f"[OK] Vehicles: {len(vehicles)}")

        # ---- Drivers (first three get a vehicle) ----
        driver_service = DriverService(db)
        drivers = []
        for idx in range(1, 4):
            driver, temp_password = await driver_service.create_driver(
                tid,
                DriverCreate(
                    name=f"Driver {idx}",
                    email=f"driver{idx}@demoroadways.example.com",
                    phone=f"98765432{idx:02d}",
                    license_number=f"MH-DL-{2020 + idx}-{idx:04d}",
                    vehicle_id=vehicles[idx - 1].id,
                ),
            )
            drivers.append(driver)
            print(f"  driver{idx}@demoroadways.example.com / {temp_password}")
        print(f"[OK] Drivers: {len(drivers)}")

        # ---- Shipments over the last six months ----
        shipment_service = ShipmentService(db)
        today = utc_today()
        statuses = list(ShipmentStatus)
        for idx in range(1, 31):
            driver = random.choice(drivers)
            source, destination = random.sample(CITIES, 2)
            await shipment_service.create_shipment(
                tid,
                ShipmentCreate(
                    bill_no=f"LR-{idx:05d}",
                    date=today - timedelta(days=random.randint(0, 180)),
                    transport_name=DEMO_TENANT,
                    consignor_name=f"Consignor {idx}",
                    consignor_address=f"{idx} Industrial Estate, {source}",
                    consignee_name=f"Consignee {idx}",
                    consignee_address=f"{idx} Market Yard, {destination}",
                    goods_type=random.choice(GOODS),
                    weight=Decimal(random.randint(200, 8000)),
                    payment_method=random.choice(list(PaymentMethod)),
                    freight=Decimal(random.randint(2000, 25000)),
                    hamali=Decimal(random.choice([0, 150, 300])),
                    local_cartage=Decimal(random.choice([0, 250])),
                    stationary=Decimal("50"),
                    status=random.choice(statuses),
                    source=source,
                    destination=destination,
                    driver_id=driver.id,
                    vehicle_id=driver.vehicle_id,
                ),
            )
        print("[OK] Shipments: 30")

        # ---- Employees ----
        employee_service = EmployeeService(db)
        employees = []
        for idx, role in enumerate(EmployeeRole, start=1):
            employees.append(
                await employee_service.create_employee(
                    tid,
                    EmployeeCreate(
                        name=f"{role.value.title()} {idx}",
                        email=f"{role.value.lower()}{idx}@demoroadways.example.com",
                        phone=f"91234567{idx:02d}",
                        aadhar_number=f"{idx:012d}",
                        address=f"{idx} Staff Quarters, Pune",
                        role=role,
                        salary=Decimal(15000 + idx * 2500),
                        date_of_joining=today - timedelta(days=365 * idx),
                    ),
                )
            )
        print(f"[OK] Employees: {len(employees)}")

        # ---- Expenses ----
        expense_service = ExpenseService(db)
        categories = [ExpenseCategory.FUEL, ExpenseCategory.TOLL, ExpenseCategory.MAINTENANCE, ExpenseCategory.SALARY]
        for idx in range(1, 21):
            category = random.choice(categories)
            await expense_service.create_expense(
                tid,
                ExpenseCreate(
                    title=f"{category.value.title()} #{idx}",
                    amount=Decimal(random.randint(500, 20000)),
                    category=category,
                    date=today - timedelta(days=random.randint(0, 180)),
                    status=random.choice(list(ExpenseStatus)),
                    employee_id=random.choice(employees).id if category == ExpenseCategory.SALARY else None,
                ),
            )
        print("[OK] Expenses: 20")

        print(f"\nLogin: {DEMO_ADMIN_EMAIL} / {DEMO_ADMIN_PASSWORD}  (X-Tenant-Slug: {tenant.slug})")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
