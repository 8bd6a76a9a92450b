from datetime import date
from decimal import Decimal
from typing import Optional

from app.schemas.common import APIModel, EntityOut


class InvoiceCreate(APIModel):
    invoice_number: Optional[str] = None
    type: str
    customer_id: Optional[int] = None
    carrier_id: Optional[int] = None
    order_id: Optional[int] = None
    dispatch_id: Optional[int] = None
    amount: Decimal
    status: Optional[str] = None
    due_date: date
    paid_date: Optional[date] = None
    notes: Optional[str] = None


class InvoiceUpdate(APIModel):
    invoice_number: Optional[str] = None
    type: Optional[str] = None
    customer_id: Optional[int] = None
    carrier_id: Optional[int] = None
    order_id: Optional[int] = None
    dispatch_id: Optional[int] = None
    amount: Optional[Decimal] = None
    status: Optional[str] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    notes: Optional[str] = None


class InvoiceOut(EntityOut):
    invoice_number: str
    type: str
    customer_id: Optional[int] = None
    carrier_id: Optional[int] = None
    order_id: Optional[int] = None
    dispatch_id: Optional[int] = None
    amount: str
    status: str
    due_date: date
    paid_date: Optional[date] = None
    notes: Optional[str] = None
