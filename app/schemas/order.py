from datetime import date
from typing import Optional

from app.schemas.common import APIModel, EntityOut


class OrderCreate(APIModel):
    order_number: Optional[str] = None
    customer_id: Optional[int] = None
    lead_id: Optional[int] = None
    customer_name: Optional[str] = None
    origin_company: Optional[str] = None
    origin_address: str
    origin_city: str
    origin_state: str
    origin_zip_code: str
    destination_company: Optional[str] = None
    destination_address: str
    destination_city: str
    destination_state: str
    destination_zip_code: str
    pickup_date: date
    delivery_date: Optional[date] = None
    equipment_type: str
    weight: Optional[float] = None
    commodity: Optional[str] = None
    customer_rate: float
    status: Optional[str] = None
    special_instructions: Optional[str] = None


class OrderUpdate(APIModel):
    order_number: Optional[str] = None
    customer_id: Optional[int] = None
    lead_id: Optional[int] = None
    customer_name: Optional[str] = None
    origin_company: Optional[str] = None
    origin_address: Optional[str] = None
    origin_city: Optional[str] = None
    origin_state: Optional[str] = None
    origin_zip_code: Optional[str] = None
    destination_company: Optional[str] = None
    destination_address: Optional[str] = None
    destination_city: Optional[str] = None
    destination_state: Optional[str] = None
    destination_zip_code: Optional[str] = None
    pickup_date: Optional[date] = None
    delivery_date: Optional[date] = None
    equipment_type: Optional[str] = None
    weight: Optional[float] = None
    commodity: Optional[str] = None
    customer_rate: Optional[float] = None
    status: Optional[str] = None
    special_instructions: Optional[str] = None


class OrderOut(EntityOut):
    order_number: str
    customer_id: Optional[int] = None
    lead_id: Optional[int] = None
    customer_name: Optional[str] = None
    origin_company: Optional[str] = None
    origin_address: str
    origin_city: str
    origin_state: str
    origin_zip_code: str
    destination_company: Optional[str] = None
    destination_address: str
    destination_city: str
    destination_state: str
    destination_zip_code: str
    pickup_date: date
    delivery_date: Optional[date] = None
    equipment_type: str
    weight: Optional[float] = None
    commodity: Optional[str] = None
    customer_rate: float
    status: str
    special_instructions: Optional[str] = None
