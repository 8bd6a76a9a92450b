from datetime import date
from typing import Optional

from app.schemas.common import APIModel, EntityOut


class QuoteCreate(APIModel):
    quote_number: Optional[str] = None
    lead_id: Optional[int] = None
    customer_id: Optional[int] = None
    origin_city: str
    origin_state: str
    destination_city: str
    destination_state: str
    pickup_date: Optional[date] = None
    equipment_type: str
    weight: Optional[float] = None
    commodity: Optional[str] = None
    quoted_rate: float
    valid_until: date
    status: Optional[str] = None
    notes: Optional[str] = None


class QuoteUpdate(APIModel):
    quote_number: Optional[str] = None
    lead_id: Optional[int] = None
    customer_id: Optional[int] = None
    origin_city: Optional[str] = None
    origin_state: Optional[str] = None
    destination_city: Optional[str] = None
    destination_state: Optional[str] = None
    pickup_date: Optional[date] = None
    equipment_type: Optional[str] = None
    weight: Optional[float] = None
    commodity: Optional[str] = None
    quoted_rate: Optional[float] = None
    valid_until: Optional[date] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class QuoteOut(EntityOut):
    quote_number: str
    lead_id: Optional[int] = None
    customer_id: Optional[int] = None
    origin_city: str
    origin_state: str
    destination_city: str
    destination_state: str
    pickup_date: Optional[date] = None
    equipment_type: str
    weight: Optional[float] = None
    commodity: Optional[str] = None
    quoted_rate: float
    valid_until: date
    status: str
    notes: Optional[str] = None
