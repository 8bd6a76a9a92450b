from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text
from app.models.base import BaseModel


class FollowUp(BaseModel):
    __tablename__ = "follow_ups"

    title = Column(String(255), nullable=False)
    description = Column(Text)
    type = Column(String(50), nullable=False)

    lead_id = Column(ForeignKey("leads.id", ondelete="SET NULL"), nullable=True, index=True)
    customer_id = Column(ForeignKey("customers.id", ondelete="SET NULL"), nullable=True, index=True)
    carrier_id = Column(ForeignKey("carriers.id", ondelete="SET NULL"), nullable=True, index=True)
    order_id = Column(ForeignKey("orders.id", ondelete="SET NULL"), nullable=True, index=True)

    due_date = Column(DateTime(timezone=True), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True))
    priority = Column(String(10), nullable=False, index=True)
    assigned_to = Column(String(255))
    notes = Column(Text)
