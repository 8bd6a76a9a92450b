from typing import List

from fastapi import APIRouter, Depends

from app.api.crud import build_crud_router
from app.core.security import get_current_user
from app.db.session import get_store
from app.db.store import EntityStore
from app.schemas.followup import FollowUpCreate, FollowUpUpdate, FollowUpOut
from app.services.entities import followup_service

router = APIRouter(tags=["followups"])


# registered ahead of /{entity_id} so "urgent" is not parsed as an id
@router.get("/api/followups/urgent", response_model=List[FollowUpOut])
async def urgent_followups(
    store: EntityStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    followups = await followup_service.list_urgent(store)
    return [FollowUpOut.model_validate(f) for f in followups]


router.include_router(build_crud_router(
    "/api/followups", ["followups"], followup_service,
    FollowUpCreate, FollowUpUpdate, FollowUpOut,
    filters=["priority", "completed", "lead_id", "customer_id", "carrier_id", "order_id"],
))
