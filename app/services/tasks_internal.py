import logging
from datetime import date
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from app.core.config import settings
from app.core.enums import InvoiceStatus, QuoteStatus
from app.core.metrics import lifecycle_sweep_updates
from app.db.session import Database
from app.db.store import EntityStore
from app.models.invoice import Invoice
from app.models.quote import Quote

logger = logging.getLogger(__name__)


async def sweep_lifecycle_async(
    session_factory: Optional[async_sessionmaker] = None,
    today: Optional[date] = None,
) -> Dict[str, int]:
    """Expire pending quotes past validUntil and mark sent invoices past dueDate overdue"""
    today = today or date.today()
    database = None
    if session_factory is None:
        database = Database(settings.DATABASE_URL)
        session_factory = database.session_factory

    try:
        async with session_factory() as db:
            store = EntityStore(db)
            expired = await store.update_where(
                Quote,
                [Quote.status == QuoteStatus.PENDING.value, Quote.valid_until < today],
                {"status": QuoteStatus.EXPIRED.value},
            )
            overdue = await store.update_where(
                Invoice,
                [Invoice.status == InvoiceStatus.SENT.value, Invoice.due_date < today],
                {"status": InvoiceStatus.OVERDUE.value},
            )
            await store.commit()
    finally:
        if database is not None:
            await database.dispose()

    lifecycle_sweep_updates.labels(kind="Quote", status=QuoteStatus.EXPIRED.value).inc(expired)
    lifecycle_sweep_updates.labels(kind="Invoice", status=InvoiceStatus.OVERDUE.value).inc(overdue)
    logger.info(f"Lifecycle sweep on {today}: {expired} quote(s) expired, {overdue} invoice(s) overdue")
    return {"quotes_expired": expired, "invoices_overdue": overdue}
