from app.api.crud import build_crud_router
from app.schemas.carrier import CarrierCreate, CarrierUpdate, CarrierOut
from app.services.entities import carrier_service

router = build_crud_router(
    "/api/carriers", ["carriers"], carrier_service,
    CarrierCreate, CarrierUpdate, CarrierOut,
)
