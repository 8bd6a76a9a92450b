from sqlalchemy import Column, String, Float, Boolean, DateTime, ForeignKey, Text
from app.models.base import BaseModel


class Dispatch(BaseModel):
    __tablename__ = "dispatches"

    order_id = Column(ForeignKey("orders.id", ondelete="RESTRICT"), nullable=False, index=True)
    carrier_id = Column(ForeignKey("carriers.id", ondelete="RESTRICT"), nullable=False, index=True)
    carrier_rate = Column(Float, nullable=False)

    driver_name = Column(String(255))
    driver_phone = Column(String(40))
    truck_number = Column(String(40))
    trailer_number = Column(String(40))

    status = Column(String(20), nullable=False, index=True)
    rate_confirmation_sent = Column(Boolean, nullable=False, default=False)
    rate_confirmation_signed = Column(Boolean, nullable=False, default=False)

    estimated_pickup_time = Column(DateTime(timezone=True))
    actual_pickup_time = Column(DateTime(timezone=True))
    estimated_delivery_time = Column(DateTime(timezone=True))
    actual_delivery_time = Column(DateTime(timezone=True))
    notes = Column(Text)
