from fastapi import APIRouter, Depends

from app.core.security import get_current_user
from app.db.session import get_store
from app.db.store import EntityStore
from app.schemas.dashboard import DashboardStats
from app.services.dashboard import compute_dashboard_stats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    store: EntityStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    return DashboardStats(**await compute_dashboard_stats(store))
