"""Dashboard metrics computed from current entity state on every call"""
import logging
from typing import List, Optional

from app.core.enums import DispatchStatus, InvoiceStatus, InvoiceType, OrderStatus, QuoteStatus
from app.core.lifecycle import ACTIVE_ORDER_STATUSES, OPEN_INVOICE_STATUSES
from app.db.store import EntityStore
from app.models.carrier import Carrier
from app.models.customer import Customer
from app.models.dispatch import Dispatch
from app.models.invoice import Invoice
from app.models.lead import Lead
from app.models.order import Order
from app.models.quote import Quote

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def average_delivery_days(dispatches: List[Dispatch]) -> Optional[float]:
    """Mean pickup-to-delivery time in days, or None without usable dispatches."""
    durations = []
    for dispatch in dispatches:
        if dispatch.actual_pickup_time is None or dispatch.actual_delivery_time is None:
            continue
        seconds = (dispatch.actual_delivery_time - dispatch.actual_pickup_time).total_seconds()
        if seconds < 0:
            logger.warning(f"Dispatch {dispatch.id} delivered before pickup, skipped")
            continue
        durations.append(seconds / SECONDS_PER_DAY)

    if not durations:
        return None
    return round(sum(durations) / len(durations), 1)


async def compute_dashboard_stats(store: EntityStore) -> dict:
    active_orders = await store.count_where(Order, Order.status.in_(ACTIVE_ORDER_STATUSES))
    in_transit = await store.count_where(Order, Order.status == OrderStatus.IN_TRANSIT.value)
    pending_quotes = await store.count_where(Quote, Quote.status == QuoteStatus.PENDING.value)
    total_revenue = await store.sum_where(
        Invoice,
        "amount",
        Invoice.type == InvoiceType.CUSTOMER.value,
        Invoice.status == InvoiceStatus.PAID.value,
    )
    pending_invoices = await store.count_where(Invoice, Invoice.status.in_(OPEN_INVOICE_STATUSES))

    delivered = await store.list(
        Dispatch,
        Dispatch.status == DispatchStatus.DELIVERED.value,
        Dispatch.actual_pickup_time.is_not(None),
        Dispatch.actual_delivery_time.is_not(None),
    )

    return {
        "active_orders": active_orders,
        "in_transit": in_transit,
        "pending_quotes": pending_quotes,
        "total_revenue": float(total_revenue),
        "avg_delivery_time": average_delivery_days(delivered),
        "pending_invoices": pending_invoices,
        "total_leads": await store.count_where(Lead),
        "total_customers": await store.count_where(Customer),
        "total_carriers": await store.count_where(Carrier),
        "total_orders": await store.count_where(Order),
    }
