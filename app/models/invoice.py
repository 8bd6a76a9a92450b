from sqlalchemy import Column, String, Date, ForeignKey, Text
from app.models.base import BaseModel


class Invoice(BaseModel):
    __tablename__ = "invoices"

    invoice_number = Column(String(64), unique=True, nullable=False, index=True)
    type = Column(String(20), nullable=False, index=True)

    customer_id = Column(ForeignKey("customers.id", ondelete="RESTRICT"), nullable=True, index=True)
    carrier_id = Column(ForeignKey("carriers.id", ondelete="RESTRICT"), nullable=True, index=True)
    order_id = Column(ForeignKey("orders.id", ondelete="RESTRICT"), nullable=True, index=True)
    dispatch_id = Column(ForeignKey("dispatches.id", ondelete="RESTRICT"), nullable=True, index=True)

    # decimal text, parsed when aggregated
    amount = Column(String(32), nullable=False)
    status = Column(String(20), nullable=False, index=True)
    due_date = Column(Date, nullable=False)
    paid_date = Column(Date)
    notes = Column(Text)
