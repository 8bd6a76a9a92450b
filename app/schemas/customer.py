from typing import Optional

from app.schemas.common import APIModel, EntityOut


class CustomerCreate(APIModel):
    company_name: str
    contact_person: str
    email: str
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    billing_address: Optional[str] = None
    billing_city: Optional[str] = None
    billing_state: Optional[str] = None
    billing_zip_code: Optional[str] = None
    credit_limit: Optional[float] = None
    payment_terms: str = "Net 30"
    special_instructions: Optional[str] = None
    is_active: bool = True


class CustomerUpdate(APIModel):
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    billing_address: Optional[str] = None
    billing_city: Optional[str] = None
    billing_state: Optional[str] = None
    billing_zip_code: Optional[str] = None
    credit_limit: Optional[float] = None
    payment_terms: Optional[str] = None
    special_instructions: Optional[str] = None
    is_active: Optional[bool] = None


class CustomerOut(EntityOut):
    company_name: str
    contact_person: str
    email: str
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    billing_address: Optional[str] = None
    billing_city: Optional[str] = None
    billing_state: Optional[str] = None
    billing_zip_code: Optional[str] = None
    credit_limit: Optional[float] = None
    payment_terms: str
    special_instructions: Optional[str] = None
    is_active: bool
