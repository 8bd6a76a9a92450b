from fastapi import Depends
from starlette.responses import Response

from app.api.crud import build_crud_router
from app.core.security import get_current_user
from app.db.session import get_store
from app.db.store import EntityStore
from app.schemas.dispatch import DispatchCreate, DispatchUpdate, DispatchOut
from app.services.documents import render_rate_confirmation_pdf, resolve_rate_confirmation
from app.services.entities import dispatch_service

router = build_crud_router(
    "/api/dispatches", ["dispatches"], dispatch_service,
    DispatchCreate, DispatchUpdate, DispatchOut,
    filters=["status", "order_id", "carrier_id"],
)


@router.get("/{entity_id}/rate-confirmation", response_class=Response)
async def rate_confirmation_pdf(
    entity_id: int,
    store: EntityStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    dispatch, order, carrier = await resolve_rate_confirmation(store, entity_id)
    return Response(
        content=render_rate_confirmation_pdf(dispatch, order, carrier),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="rate-confirmation-{order.order_number}.pdf"'},
    )
