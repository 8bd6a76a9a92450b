from sqlalchemy import Column, String, Integer
from app.models.base import Base


class NumberSequence(Base):
    """Per-prefix counter behind server-allocated order/quote/invoice numbers."""
    __tablename__ = "number_sequences"

    prefix = Column(String(16), primary_key=True)
    value = Column(Integer, nullable=False, default=0)
