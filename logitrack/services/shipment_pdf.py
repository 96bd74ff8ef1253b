"""
Printable consignment note for a shipment, rendered with reportlab.
"""

from io import BytesIO
from typing import List, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from logitrack.models.shipment import Shipment
from logitrack.models.tenant import Tenant
from logitrack.services.shipment_service import to_money
from logitrack.utils.time import utc_now

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 18 * mm
HEADER_HEIGHT = 22 * mm
LINE = 5.5 * mm
BRAND_COLOR = colors.HexColor("#1F3A5F")

CHARGE_LABELS = (
    ("freight", "Freight"),
    ("local_cartage", "Local cartage"),
    ("hamali", "Hamali"),
    ("stationary", "Stationary"),
    ("door_delivery", "Door delivery"),
    ("other", "Other"),
)


def pdf_filename(shipment: Shipment) -> str:
    return f"shipment-{shipment.id}.pdf"


def _text(value: Optional[object]) -> str:
    if value is None or value == "":
        return "-"
    return str(getattr(value, "value", value))


class _Writer:
    """Keeps the cursor position while drawing top to bottom."""

    def __init__(self, pdf: canvas.Canvas):
        self.pdf = pdf
        self.y = PAGE_HEIGHT - MARGIN - HEADER_HEIGHT - 8 * mm

    def section(self, title: str) -> None:
        self.y -= 3 * mm
        self.pdf.setFillColor(BRAND_COLOR)
        self.pdf.setFont("Helvetica-Bold", 11)
        self.pdf.drawString(MARGIN, self.y, title)
        self.pdf.setStrokeColor(BRAND_COLOR)
        self.pdf.line(MARGIN, self.y - 1.5 * mm, PAGE_WIDTH - MARGIN, self.y - 1.5 * mm)
        self.pdf.setFillColor(colors.black)
        self.y -= LINE + 1 * mm

    def rows(self, pairs: List[Tuple[str, object]], columns: int = 2) -> None:
        column_width = (PAGE_WIDTH - 2 * MARGIN) / columns
        for index, (label, value) in enumerate(pairs):
            column = index % columns
            x = MARGIN + column * column_width
            self.pdf.setFont("Helvetica-Bold", 9)
            self.pdf.drawString(x, self.y, f"{label}:")
            self.pdf.setFont("Helvetica", 9)
            self.pdf.drawString(x + 32 * mm, self.y, _text(value)[:60])
            if column == columns - 1 or index == len(pairs) - 1:
                self.y -= LINE


def _draw_header(pdf: canvas.Canvas, shipment: Shipment, tenant: Optional[Tenant]) -> None:
    top = PAGE_HEIGHT - MARGIN
    pdf.setFillColor(BRAND_COLOR)
    pdf.rect(MARGIN, top - HEADER_HEIGHT, PAGE_WIDTH - 2 * MARGIN, HEADER_HEIGHT, stroke=0, fill=1)
    pdf.setFillColor(colors.white)
    pdf.setFont("Helvetica-Bold", 16)
    pdf.drawString(MARGIN + 5 * mm, top - 10 * mm, tenant.name if tenant else shipment.transport_name)
    pdf.setFont("Helvetica", 9)
    if tenant and tenant.gst_number:
        pdf.drawString(MARGIN + 5 * mm, top - 16 * mm, f"GSTIN: {tenant.gst_number}")
    pdf.setFont("Helvetica-Bold", 12)
    pdf.drawRightString(PAGE_WIDTH - MARGIN - 5 * mm, top - 10 * mm, "CONSIGNMENT NOTE")
    pdf.setFont("Helvetica", 9)
    pdf.drawRightString(PAGE_WIDTH - MARGIN - 5 * mm, top - 16 * mm, f"Bill No. {shipment.bill_no}")
    pdf.setFillColor(colors.black)


def _draw_charges(writer: _Writer, shipment: Shipment) -> None:
    pdf = writer.pdf
    amount_x = PAGE_WIDTH - MARGIN
    for field, label in CHARGE_LABELS:
        pdf.setFont("Helvetica", 9)
        pdf.drawString(MARGIN, writer.y, label)
        pdf.drawRightString(amount_x, writer.y, f"{to_money(getattr(shipment, field)):,.2f}")
        writer.y -= LINE
    pdf.line(MARGIN, writer.y + 3 * mm, amount_x, writer.y + 3 * mm)
    pdf.setFont("Helvetica-Bold", 10)
    pdf.drawString(MARGIN, writer.y - 1 * mm, "Grand total")
    pdf.drawRightString(amount_x, writer.y - 1 * mm, f"{to_money(shipment.grand_total):,.2f}")
    writer.y -= LINE + 2 * mm


def _draw_footer(pdf: canvas.Canvas) -> None:
    pdf.setFont("Helvetica-Oblique", 8)
    pdf.setFillColor(colors.grey)
    pdf.drawString(MARGIN, MARGIN / 2, f"Generated {utc_now():%Y-%m-%d %H:%M} UTC")
    pdf.drawRightString(PAGE_WIDTH - MARGIN, MARGIN / 2, f"Page {pdf.getPageNumber()}")
    pdf.setFillColor(colors.black)


def render_shipment_pdf(shipment: Shipment, tenant: Optional[Tenant] = None) -> bytes:
    """Render a single-page consignment note and return the PDF bytes."""
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(f"Shipment {shipment.bill_no}")

    _draw_header(pdf, shipment, tenant)
    writer = _Writer(pdf)

    writer.section("Bill")
    writer.rows([
        ("Bill No.", shipment.bill_no),
        ("Date", shipment.date.isoformat()),
        ("Transport", shipment.transport_name),
        ("Status", shipment.status),
        ("Payment", shipment.payment_method),
        ("E-way bill", shipment.eway_bill_number),
    ])

    writer.section("Consignor / Consignee")
    writer.rows([
        ("Consignor", shipment.consignor_name),
        ("Consignee", shipment.consignee_name),
        ("Address", shipment.consignor_address),
        ("Address", shipment.consignee_address),
        ("GSTIN", shipment.consignor_gst_number),
        ("GSTIN", shipment.consignee_gst_number),
    ])

    writer.section("Goods")
    writer.rows([
        ("Type", shipment.goods_type),
        ("Weight (kg)", shipment.weight),
        ("Description", shipment.goods_description),
        ("Private mark", shipment.private_mark),
    ])

    writer.section("Route")
    writer.rows([("From", shipment.source), ("To", shipment.destination)])

    writer.section("Charges")
    _draw_charges(writer, shipment)

    writer.section("Driver / Vehicle")
    driver = shipment.driver
    vehicle = shipment.vehicle
    writer.rows([
        ("Driver", driver.name if driver else None),
        ("Vehicle", vehicle.number if vehicle else None),
        ("Phone", driver.phone if driver else None),
        ("Model", vehicle.model if vehicle else None),
    ])

    _draw_footer(pdf)
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
