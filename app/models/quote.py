from sqlalchemy import Column, String, Float, Date, ForeignKey, Text
from app.models.base import BaseModel


class Quote(BaseModel):
    __tablename__ = "quotes"

    quote_number = Column(String(64), unique=True, nullable=False, index=True)

    lead_id = Column(ForeignKey("leads.id", ondelete="SET NULL"), nullable=True, index=True)
    customer_id = Column(ForeignKey("customers.id", ondelete="RESTRICT"), nullable=True, index=True)

    origin_city = Column(String(120), nullable=False)
    origin_state = Column(String(40), nullable=False)
    destination_city = Column(String(120), nullable=False)
    destination_state = Column(String(40), nullable=False)
    pickup_date = Column(Date)
    equipment_type = Column(String(50), nullable=False)
    weight = Column(Float)
    commodity = Column(String(255))
    quoted_rate = Column(Float, nullable=False)
    valid_until = Column(Date, nullable=False)

    status = Column(String(20), nullable=False, index=True)
    notes = Column(Text)
