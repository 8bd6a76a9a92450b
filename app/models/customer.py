from sqlalchemy import Column, String, Float, Boolean, Text
from app.models.base import BaseModel


class Customer(BaseModel):
    __tablename__ = "customers"

    company_name = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=False)

    address = Column(String(255))
    city = Column(String(120))
    state = Column(String(40))
    zip_code = Column(String(20))
    billing_address = Column(String(255))
    billing_city = Column(String(120))
    billing_state = Column(String(40))
    billing_zip_code = Column(String(20))

    credit_limit = Column(Float)
    payment_terms = Column(String(50), nullable=False, default="Net 30")
    special_instructions = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
