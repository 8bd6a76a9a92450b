from app.api.crud import build_crud_router
from app.schemas.customer import CustomerCreate, CustomerUpdate, CustomerOut
from app.services.entities import customer_service

router = build_crud_router(
    "/api/customers", ["customers"], customer_service,
    CustomerCreate, CustomerUpdate, CustomerOut,
)
