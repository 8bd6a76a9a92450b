"""PDF documents: invoices, freight quotes and carrier rate confirmations.

Resolvers load every row a document needs and fail with InvalidInput when a
required member is missing, so the renderers only ever see complete tuples.
"""
import io
from decimal import Decimal, InvalidOperation
from typing import Any, List, Sequence, Tuple, Union

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from app.core.config import settings
from app.core.errors import InvalidInput
from app.core.metrics import documents_rendered
from app.db.store import EntityStore, kind_of
from app.models.carrier import Carrier
from app.models.customer import Customer
from app.models.dispatch import Dispatch
from app.models.invoice import Invoice
from app.models.lead import Lead
from app.models.order import Order
from app.models.quote import Quote

BRAND_BLUE = colors.Color(41 / 255, 128 / 255, 185 / 255)
LIGHT_GREY = colors.Color(245 / 255, 245 / 255, 245 / 255)

QUOTE_TERMS = [
    "This quote is valid until the date specified above",
    "Rates are subject to change based on market conditions",
    "Additional charges may apply for special handling requirements",
    "Payment terms will be established upon booking confirmation",
    "All shipments subject to our standard terms and conditions",
]

RATE_CONFIRMATION_TERMS = [
    "Carrier must call for dispatch before loading",
    "Proof of delivery is required with the carrier invoice",
    "Double brokering is strictly prohibited",
]


async def _require(store: EntityStore, model, entity_id: Any, owner: str):
    if entity_id is None:
        raise InvalidInput(f"{owner} has no {kind_of(model)} to render")
    entity = await store.find(model, entity_id)
    if entity is None:
        raise InvalidInput(f"{owner} references missing {kind_of(model)} {entity_id}")
    return entity


async def resolve_invoice(store: EntityStore, invoice_id: int) -> Tuple[Invoice, Order, Customer]:
    invoice = await store.get(Invoice, invoice_id)
    owner = f"Invoice {invoice.invoice_number}"
    order = await _require(store, Order, invoice.order_id, owner)
    customer = await _require(store, Customer, invoice.customer_id or order.customer_id, owner)
    return invoice, order, customer


async def resolve_quote(store: EntityStore, quote_id: int) -> Tuple[Quote, Union[Lead, Customer]]:
    quote = await store.get(Quote, quote_id)
    owner = f"Quote {quote.quote_number}"
    if quote.lead_id is not None:
        return quote, await _require(store, Lead, quote.lead_id, owner)
    return quote, await _require(store, Customer, quote.customer_id, owner)


async def resolve_rate_confirmation(store: EntityStore, dispatch_id: int) -> Tuple[Dispatch, Order, Carrier]:
    dispatch = await store.get(Dispatch, dispatch_id)
    owner = f"Dispatch {dispatch.id}"
    order = await _require(store, Order, dispatch.order_id, owner)
    carrier = await _require(store, Carrier, dispatch.carrier_id, owner)
    return dispatch, order, carrier


def _money(value) -> str:
    try:
        return f"${Decimal(str(value)):,.2f}"
    except InvalidOperation:
        return str(value)


def _fmt_date(value) -> str:
    if value is None:
        return "-"
    return value.strftime("%B %d, %Y")


class _Page:
    """Top-down cursor over a reportlab canvas."""

    def __init__(self, title: str):
        self.buffer = io.BytesIO()
        self.canvas = canvas.Canvas(self.buffer, pagesize=A4)
        self.width, self.height = A4
        self.left = 15 * mm
        self.y = self.height - 20 * mm
        self.canvas.setTitle(title)
        self._header(title)

    def _header(self, title: str) -> None:
        c = self.canvas
        c.setFillColor(BRAND_BLUE)
        c.setFont("Helvetica-Bold", 22)
        c.drawString(self.left, self.y, settings.COMPANY_NAME)
        self.y -= 8 * mm
        c.setFillColor(colors.grey)
        c.setFont("Helvetica", 11)
        c.drawString(self.left, self.y, "Professional Freight Brokerage Services")
        self.y -= 14 * mm
        c.setFillColor(colors.black)
        c.setFont("Helvetica-Bold", 18)
        c.drawString(self.left, self.y, title)
        self.y -= 10 * mm

    def pairs(self, rows: Sequence[Tuple[str, str, str, str]]) -> None:
        c = self.canvas
        box_height = (len(rows) * 6 + 4) * mm
        c.setFillColor(LIGHT_GREY)
        c.rect(self.left - 2 * mm, self.y - box_height + 6 * mm, self.width - 26 * mm, box_height, stroke=0, fill=1)
        c.setFillColor(colors.black)
        for label_a, value_a, label_b, value_b in rows:
            c.setFont("Helvetica-Bold", 10)
            c.drawString(self.left, self.y, label_a)
            c.drawString(self.left + 95 * mm, self.y, label_b)
            c.setFont("Helvetica", 10)
            c.drawString(self.left + 35 * mm, self.y, value_a)
            c.drawString(self.left + 125 * mm, self.y, value_b)
            self.y -= 6 * mm
        self.y -= 8 * mm

    def section(self, heading: str, lines: List[str]) -> None:
        c = self.canvas
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.left, self.y, heading)
        self.y -= 7 * mm
        c.setFont("Helvetica", 10)
        for line in lines:
            if line:
                c.drawString(self.left, self.y, line)
                self.y -= 5.5 * mm
        self.y -= 5 * mm

    def table(self, headers: List[str], widths: List[float], values: List[str]) -> None:
        c = self.canvas
        x = self.left
        c.setFont("Helvetica-Bold", 9)
        for header, width in zip(headers, widths):
            c.setFillColor(BRAND_BLUE)
            c.rect(x, self.y - 2 * mm, width * mm, 8 * mm, stroke=1, fill=1)
            c.setFillColor(colors.white)
            c.drawCentredString(x + width * mm / 2, self.y + 0.5 * mm, header)
            x += width * mm
        self.y -= 8 * mm

        x = self.left
        c.setFont("Helvetica", 9)
        c.setFillColor(colors.black)
        for index, (value, width) in enumerate(zip(values, widths)):
            c.rect(x, self.y - 2 * mm, width * mm, 8 * mm, stroke=1, fill=0)
            if index == len(values) - 1:
                c.drawRightString(x + width * mm - 2 * mm, self.y + 0.5 * mm, value)
            else:
                c.drawString(x + 2 * mm, self.y + 0.5 * mm, value[:40])
            x += width * mm
        self.y -= 14 * mm

    def total(self, label: str, amount: str) -> None:
        c = self.canvas
        c.setFont("Helvetica-Bold", 12)
        c.drawRightString(self.width - 45 * mm, self.y, label)
        c.drawRightString(self.width - 15 * mm, self.y, amount)
        self.y -= 12 * mm

    def footer(self, lines: List[str]) -> bytes:
        c = self.canvas
        c.setFont("Helvetica-Oblique", 9)
        c.setFillColor(colors.grey)
        y = 20 * mm
        for line in lines:
            c.drawCentredString(self.width / 2, y, line)
            y -= 5 * mm
        c.showPage()
        c.save()
        return self.buffer.getvalue()


def _lane(record) -> str:
    return f"{record.origin_city}, {record.origin_state} - {record.destination_city}, {record.destination_state}"


def render_invoice_pdf(invoice: Invoice, order: Order, customer: Customer) -> bytes:
    page = _Page("INVOICE")
    page.pairs([
        ("Invoice Number:", invoice.invoice_number, "Invoice Date:", _fmt_date(invoice.created_at)),
        ("Due Date:", _fmt_date(invoice.due_date), "Order Number:", order.order_number),
    ])

    billing_city = ", ".join(filter(None, [customer.billing_city or customer.city, customer.billing_state or customer.state]))
    page.section("Bill To:", [
        customer.company_name,
        f"Attn: {customer.contact_person}" if customer.contact_person else "",
        customer.billing_address or customer.address or "",
        " ".join(filter(None, [billing_city, customer.billing_zip_code or customer.zip_code])),
    ])

    page.table(
        ["Origin - Destination", "Equipment Type", "Commodity", "Amount"],
        [60, 45, 45, 30],
        [_lane(order), order.equipment_type, order.commodity or "General Freight", _money(invoice.amount)],
    )
    page.total("Total Amount:", _money(invoice.amount))
    page.section("Payment Terms:", [customer.payment_terms])
    if invoice.notes:
        page.section("Notes:", invoice.notes.splitlines())

    pdf = page.footer([
        "Thank you for your business! For questions about this invoice, please contact us.",
        f"{settings.COMPANY_NAME} - Your Trusted Freight Partner",
    ])
    documents_rendered.labels(document="invoice").inc()
    return pdf


def render_quote_pdf(quote: Quote, party: Union[Lead, Customer]) -> bytes:
    page = _Page("FREIGHT QUOTE")
    page.pairs([
        ("Quote Number:", quote.quote_number, "Quote Date:", _fmt_date(quote.created_at)),
        ("Valid Until:", _fmt_date(quote.valid_until), "Status:", quote.status),
    ])
    page.section("Quote For:", [
        party.company_name,
        f"Attn: {party.contact_person}" if party.contact_person else "",
        f"Email: {party.email}" if party.email else "",
        f"Phone: {party.phone}" if party.phone else "",
    ])

    weight = f"{quote.weight:,.0f}" if quote.weight is not None else "-"
    page.table(
        ["Origin - Destination", "Equipment", "Weight (lbs)", "Commodity", "Quoted Rate"],
        [50, 35, 30, 35, 30],
        [_lane(quote), quote.equipment_type, weight, quote.commodity or "General Freight", _money(quote.quoted_rate)],
    )
    page.section("Terms and Conditions:", [f"- {term}" for term in QUOTE_TERMS])
    if quote.notes:
        page.section("Additional Notes:", quote.notes.splitlines())

    pdf = page.footer([
        f"Thank you for considering {settings.COMPANY_NAME} for your freight needs!",
        "Contact us to book this shipment or discuss your requirements.",
    ])
    documents_rendered.labels(document="quote").inc()
    return pdf


def render_rate_confirmation_pdf(dispatch: Dispatch, order: Order, carrier: Carrier) -> bytes:
    page = _Page("RATE CONFIRMATION")
    page.pairs([
        ("Order Number:", order.order_number, "Dispatch:", str(dispatch.id)),
        ("Pickup Date:", _fmt_date(order.pickup_date), "Delivery Date:", _fmt_date(order.delivery_date)),
    ])
    page.section("Carrier:", [
        carrier.company_name,
        f"Attn: {carrier.contact_person}" if carrier.contact_person else "",
        " / ".join(filter(None, [
            f"MC {carrier.mc_number}" if carrier.mc_number else None,
            f"DOT {carrier.dot_number}" if carrier.dot_number else None,
        ])),
        f"Driver: {dispatch.driver_name}" if dispatch.driver_name else "",
        f"Truck {dispatch.truck_number or '-'} / Trailer {dispatch.trailer_number or '-'}",
    ])
    page.section("Pickup:", [
        order.origin_company or "",
        order.origin_address,
        f"{order.origin_city}, {order.origin_state} {order.origin_zip_code}",
    ])
    page.section("Delivery:", [
        order.destination_company or "",
        order.destination_address,
        f"{order.destination_city}, {order.destination_state} {order.destination_zip_code}",
    ])
    page.table(
        ["Equipment", "Commodity", "Weight (lbs)", "Carrier Rate"],
        [45, 60, 35, 40],
        [
            order.equipment_type,
            order.commodity or "General Freight",
            f"{order.weight:,.0f}" if order.weight is not None else "-",
            _money(dispatch.carrier_rate),
        ],
    )
    page.section("Terms:", [f"- {term}" for term in RATE_CONFIRMATION_TERMS])

    pdf = page.footer([
        "Please sign and return this rate confirmation before pickup.",
        f"{settings.COMPANY_NAME} - Your Trusted Freight Partner",
    ])
    documents_rendered.labels(document="rate_confirmation").inc()
    return pdf
