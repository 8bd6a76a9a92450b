from sqlalchemy import Column, String, Float, Boolean, Date, Text
from app.models.base import BaseModel


class Carrier(BaseModel):
    __tablename__ = "carriers"

    company_name = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=False)

    address = Column(String(255))
    city = Column(String(120))
    state = Column(String(40))
    zip_code = Column(String(20))

    mc_number = Column(String(40))
    dot_number = Column(String(40))
    insurance_expiry = Column(Date)
    w9_on_file = Column(Boolean, nullable=False, default=False)
    performance_rating = Column(Float, nullable=False, default=0.0)
    preferred_lanes = Column(Text)
    equipment_types = Column(Text)
    notes = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
