from fastapi import Depends
from starlette.responses import Response

from app.api.crud import build_crud_router
from app.core.security import get_current_user
from app.db.session import get_store
from app.db.store import EntityStore
from app.schemas.quote import QuoteCreate, QuoteUpdate, QuoteOut
from app.services.documents import render_quote_pdf, resolve_quote
from app.services.entities import quote_service

router = build_crud_router(
    "/api/quotes", ["quotes"], quote_service,
    QuoteCreate, QuoteUpdate, QuoteOut,
    filters=["status", "lead_id", "customer_id"],
)


@router.get("/{entity_id}/pdf", response_class=Response)
async def quote_pdf(
    entity_id: int,
    store: EntityStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    quote, party = await resolve_quote(store, entity_id)
    return Response(
        content=render_quote_pdf(quote, party),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="quote-{quote.quote_number}.pdf"'},
    )
