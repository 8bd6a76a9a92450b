from sqlalchemy import Column, String, Integer, Date, Text
from app.models.base import BaseModel


class Lead(BaseModel):
    __tablename__ = "leads"

    company_name = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=False)

    origin_city = Column(String(120))
    origin_state = Column(String(40))
    destination_city = Column(String(120))
    destination_state = Column(String(40))
    pickup_date = Column(Date)
    equipment_type = Column(String(50))
    commodity = Column(String(255))
    weight = Column(Integer)
    notes = Column(Text)

    status = Column(String(20), nullable=False, index=True)
