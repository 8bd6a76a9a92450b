from sqlalchemy import Column, String, ForeignKey
from app.models.base import BaseModel


class Audit(BaseModel):
    __tablename__ = "audits"

    # cleared, not cascaded, when the user is deleted
    user_id = Column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    action = Column(String(20), nullable=False)
    endpoint = Column(String(255), nullable=False)
    payload_hash = Column(String(128), nullable=False)
