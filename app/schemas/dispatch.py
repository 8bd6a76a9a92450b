from datetime import datetime
from typing import Optional

from app.schemas.common import APIModel, EntityOut


class DispatchCreate(APIModel):
    order_id: int
    carrier_id: int
    carrier_rate: float
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None
    truck_number: Optional[str] = None
    trailer_number: Optional[str] = None
    status: Optional[str] = None
    rate_confirmation_sent: bool = False
    rate_confirmation_signed: bool = False
    estimated_pickup_time: Optional[datetime] = None
    actual_pickup_time: Optional[datetime] = None
    estimated_delivery_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None
    notes: Optional[str] = None


class DispatchUpdate(APIModel):
    order_id: Optional[int] = None
    carrier_id: Optional[int] = None
    carrier_rate: Optional[float] = None
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None
    truck_number: Optional[str] = None
    trailer_number: Optional[str] = None
    status: Optional[str] = None
    rate_confirmation_sent: Optional[bool] = None
    rate_confirmation_signed: Optional[bool] = None
    estimated_pickup_time: Optional[datetime] = None
    actual_pickup_time: Optional[datetime] = None
    estimated_delivery_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None
    notes: Optional[str] = None


class DispatchOut(EntityOut):
    order_id: int
    carrier_id: int
    carrier_rate: float
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None
    truck_number: Optional[str] = None
    trailer_number: Optional[str] = None
    status: str
    rate_confirmation_sent: bool
    rate_confirmation_signed: bool
    estimated_pickup_time: Optional[datetime] = None
    actual_pickup_time: Optional[datetime] = None
    estimated_delivery_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None
    notes: Optional[str] = None
