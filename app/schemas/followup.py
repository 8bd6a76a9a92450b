from datetime import datetime
from typing import Optional

from app.schemas.common import APIModel, EntityOut


class FollowUpCreate(APIModel):
    title: str
    description: Optional[str] = None
    type: str
    lead_id: Optional[int] = None
    customer_id: Optional[int] = None
    carrier_id: Optional[int] = None
    order_id: Optional[int] = None
    due_date: datetime
    completed: bool = False
    completed_at: Optional[datetime] = None
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None


class FollowUpUpdate(APIModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    lead_id: Optional[int] = None
    customer_id: Optional[int] = None
    carrier_id: Optional[int] = None
    order_id: Optional[int] = None
    due_date: Optional[datetime] = None
    completed: Optional[bool] = None
    completed_at: Optional[datetime] = None
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None


class FollowUpOut(EntityOut):
    title: str
    description: Optional[str] = None
    type: str
    lead_id: Optional[int] = None
    customer_id: Optional[int] = None
    carrier_id: Optional[int] = None
    order_id: Optional[int] = None
    due_date: datetime
    completed: bool
    completed_at: Optional[datetime] = None
    priority: str
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
