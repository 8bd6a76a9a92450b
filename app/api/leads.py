from app.api.crud import build_crud_router
from app.schemas.lead import LeadCreate, LeadUpdate, LeadOut
from app.services.entities import lead_service

router = build_crud_router(
    "/api/leads", ["leads"], lead_service,
    LeadCreate, LeadUpdate, LeadOut,
    filters=["status"],
)
