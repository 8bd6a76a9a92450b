from fastapi import Depends
from starlette.responses import Response

from app.api.crud import build_crud_router
from app.core.security import get_current_user
from app.db.session import get_store
from app.db.store import EntityStore
from app.schemas.invoice import InvoiceCreate, InvoiceUpdate, InvoiceOut
from app.services.documents import render_invoice_pdf, resolve_invoice
from app.services.entities import invoice_service

router = build_crud_router(
    "/api/invoices", ["invoices"], invoice_service,
    InvoiceCreate, InvoiceUpdate, InvoiceOut,
    filters=["status", "type", "customer_id", "carrier_id", "order_id", "dispatch_id"],
)


@router.get("/{entity_id}/pdf", response_class=Response)
async def invoice_pdf(
    entity_id: int,
    store: EntityStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    invoice, order, customer = await resolve_invoice(store, entity_id)
    return Response(
        content=render_invoice_pdf(invoice, order, customer),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="invoice-{invoice.invoice_number}.pdf"'},
    )
