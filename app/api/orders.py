from app.api.crud import build_crud_router
from app.schemas.order import OrderCreate, OrderUpdate, OrderOut
from app.services.entities import order_service

router = build_crud_router(
    "/api/orders", ["orders"], order_service,
    OrderCreate, OrderUpdate, OrderOut,
    filters=["status", "customer_id", "lead_id"],
)
