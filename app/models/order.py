from sqlalchemy import Column, String, Float, Date, ForeignKey, Text
from app.models.base import BaseModel


class Order(BaseModel):
    __tablename__ = "orders"

    order_number = Column(String(64), unique=True, nullable=False, index=True)

    customer_id = Column(ForeignKey("customers.id", ondelete="RESTRICT"), nullable=True, index=True)
    lead_id = Column(ForeignKey("leads.id", ondelete="SET NULL"), nullable=True, index=True)
    customer_name = Column(String(255))

    origin_company = Column(String(255))
    origin_address = Column(String(255), nullable=False)
    origin_city = Column(String(120), nullable=False)
    origin_state = Column(String(40), nullable=False)
    origin_zip_code = Column(String(20), nullable=False)

    destination_company = Column(String(255))
    destination_address = Column(String(255), nullable=False)
    destination_city = Column(String(120), nullable=False)
    destination_state = Column(String(40), nullable=False)
    destination_zip_code = Column(String(20), nullable=False)

    pickup_date = Column(Date, nullable=False)
    delivery_date = Column(Date)
    equipment_type = Column(String(50), nullable=False)
    weight = Column(Float)
    commodity = Column(String(255))
    customer_rate = Column(Float, nullable=False)

    status = Column(String(20), nullable=False, index=True)
    special_instructions = Column(Text)
