"""Create/read/update/delete for every brokerage entity kind.

Each write runs as one unit of work on the request's session: lifecycle
validation, number allocation, reference checks and the store write all happen
before a single commit, and any domain error rolls the transaction back.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from app.core.enums import FollowUpPriority, InvoiceStatus
from app.core.errors import INTEGRITY_ERRORS, BrokerageError, InvalidInput
from app.core.lifecycle import apply_on_create, apply_on_update
from app.core.metrics import integrity_violations
from app.db.store import EntityStore, kind_of
from app.models.base import utcnow
from app.models.carrier import Carrier
from app.models.customer import Customer
from app.models.dispatch import Dispatch
from app.models.followup import FollowUp
from app.models.invoice import Invoice
from app.models.lead import Lead
from app.models.order import Order
from app.models.quote import Quote
from app.services.integrity import check_references, release_dependents
from app.services.numbering import INVOICE_PREFIX, ORDER_PREFIX, QUOTE_PREFIX, allocate_number

logger = logging.getLogger(__name__)


class EntityService:
    def __init__(self, model, number_field: Optional[str] = None, number_prefix: Optional[str] = None):
        self.model = model
        self.number_field = number_field
        self.number_prefix = number_prefix

    @property
    def kind(self) -> str:
        return kind_of(self.model)

    def prepare(self, values: Dict[str, Any], current=None) -> Dict[str, Any]:
        """Kind-specific derived fields; ``current`` is None on create."""
        return values

    def _reject_null_required(self, changes: Dict[str, Any]) -> None:
        columns = self.model.__table__.columns
        for field, value in changes.items():
            if value is None and field in columns and not columns[field].nullable:
                raise InvalidInput(f"{self.kind}.{field} cannot be cleared", field=field)

    async def _fail(self, store: EntityStore, exc: BrokerageError) -> None:
        if isinstance(exc, INTEGRITY_ERRORS):
            integrity_violations.labels(kind=self.kind, error=exc.code).inc()
        await store.rollback()

    async def create(self, store: EntityStore, values: Dict[str, Any]):
        values = dict(values)
        try:
            apply_on_create(self.kind, values)
            self.prepare(values)
            self._reject_null_required({k: v for k, v in values.items() if k != self.number_field})
            await check_references(store, self.model, values)
            if self.number_field and not values.get(self.number_field):
                values[self.number_field] = await allocate_number(store, self.number_prefix)
            entity = await store.create(self.model, values)
            await store.commit()
        except BrokerageError as exc:
            await self._fail(store, exc)
            raise

        logger.info(f"Created {self.kind} {entity.id}")
        return entity

    async def get(self, store: EntityStore, entity_id: Any):
        return await store.get(self.model, entity_id)

    async def list(
        self,
        store: EntityStore,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Any]:
        return await store.list(self.model, filters=filters, limit=limit, offset=offset)

    async def update(self, store: EntityStore, entity_id: Any, changes: Dict[str, Any]):
        changes = dict(changes)
        try:
            current = await store.get(self.model, entity_id)
            self._reject_null_required(changes)
            apply_on_update(self.kind, current, changes)
            self.prepare(changes, current)
            await check_references(store, self.model, changes)
            entity = await store.update(self.model, entity_id, changes)
            await store.commit()
        except BrokerageError as exc:
            await self._fail(store, exc)
            raise

        logger.info(f"Updated {self.kind} {entity_id}: {sorted(changes)}")
        return entity

    async def delete(self, store: EntityStore, entity_id: Any) -> Dict[str, int]:
        try:
            await store.get(self.model, entity_id)
            cleared = await release_dependents(store, self.model, entity_id)
            await store.delete(self.model, entity_id)
            await store.commit()
        except BrokerageError as exc:
            await self._fail(store, exc)
            raise

        logger.info(f"Deleted {self.kind} {entity_id}")
        return cleared


class InvoiceService(EntityService):
    def prepare(self, values, current=None):
        if values.get("amount") is not None:
            values["amount"] = format(Decimal(values["amount"]), "f")

        paid_already = current is not None and current.paid_date is not None
        if values.get("status") == InvoiceStatus.PAID.value and values.get("paid_date") is None and not paid_already:
            values["paid_date"] = date.today()
        return values


class FollowUpService(EntityService):
    def prepare(self, values, current=None):
        if "completed" not in values:
            return values

        if values["completed"]:
            already_stamped = current is not None and current.completed and current.completed_at is not None
            if values.get("completed_at") is None and not already_stamped:
                values["completed_at"] = utcnow()
        else:
            values["completed_at"] = None
        return values

    async def list_urgent(self, store: EntityStore) -> List[FollowUp]:
        return await store.list(
            FollowUp,
            FollowUp.priority == FollowUpPriority.HIGH.value,
            FollowUp.completed.is_(False),
            order_by=[FollowUp.due_date, FollowUp.id],
        )


lead_service = EntityService(Lead)
customer_service = EntityService(Customer)
carrier_service = EntityService(Carrier)
order_service = EntityService(Order, "order_number", ORDER_PREFIX)
dispatch_service = EntityService(Dispatch)
quote_service = EntityService(Quote, "quote_number", QUOTE_PREFIX)
invoice_service = InvoiceService(Invoice, "invoice_number", INVOICE_PREFIX)
followup_service = FollowUpService(FollowUp)
