from datetime import date
from typing import Optional

from app.schemas.common import APIModel, EntityOut


class CarrierCreate(APIModel):
    company_name: str
    contact_person: str
    email: str
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    mc_number: Optional[str] = None
    dot_number: Optional[str] = None
    insurance_expiry: Optional[date] = None
    w9_on_file: bool = False
    performance_rating: float = 0.0
    preferred_lanes: Optional[str] = None
    equipment_types: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True


class CarrierUpdate(APIModel):
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    mc_number: Optional[str] = None
    dot_number: Optional[str] = None
    insurance_expiry: Optional[date] = None
    w9_on_file: Optional[bool] = None
    performance_rating: Optional[float] = None
    preferred_lanes: Optional[str] = None
    equipment_types: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class CarrierOut(EntityOut):
    company_name: str
    contact_person: str
    email: str
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    mc_number: Optional[str] = None
    dot_number: Optional[str] = None
    insurance_expiry: Optional[date] = None
    w9_on_file: bool
    performance_rating: float
    preferred_lanes: Optional[str] = None
    equipment_types: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool
