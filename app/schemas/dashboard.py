from typing import Optional

from app.schemas.common import APIModel


class DashboardStats(APIModel):
    active_orders: int
    in_transit: int
    pending_quotes: int
    total_revenue: float
    avg_delivery_time: Optional[float] = None
    pending_invoices: int
    total_leads: int
    total_customers: int
    total_carriers: int
    total_orders: int
