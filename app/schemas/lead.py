from datetime import date
from typing import Optional

from app.schemas.common import APIModel, EntityOut


class LeadCreate(APIModel):
    company_name: str
    contact_person: str
    email: str
    phone: str
    origin_city: Optional[str] = None
    origin_state: Optional[str] = None
    destination_city: Optional[str] = None
    destination_state: Optional[str] = None
    pickup_date: Optional[date] = None
    equipment_type: Optional[str] = None
    commodity: Optional[str] = None
    weight: Optional[int] = None
    notes: Optional[str] = None
    status: Optional[str] = None


class LeadUpdate(APIModel):
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    origin_city: Optional[str] = None
    origin_state: Optional[str] = None
    destination_city: Optional[str] = None
    destination_state: Optional[str] = None
    pickup_date: Optional[date] = None
    equipment_type: Optional[str] = None
    commodity: Optional[str] = None
    weight: Optional[int] = None
    notes: Optional[str] = None
    status: Optional[str] = None


class LeadOut(EntityOut):
    company_name: str
    contact_person: str
    email: str
    phone: str
    origin_city: Optional[str] = None
    origin_state: Optional[str] = None
    destination_city: Optional[str] = None
    destination_state: Optional[str] = None
    pickup_date: Optional[date] = None
    equipment_type: Optional[str] = None
    commodity: Optional[str] = None
    weight: Optional[int] = None
    notes: Optional[str] = None
    status: str
