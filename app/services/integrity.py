"""Foreign-key rules between brokerage entities.

Each relationship declares what happens to its dependents when the referenced
row is deleted. ``RESTRICT`` blocks the delete while dependents exist;
``NULLIFY`` clears the dependents' reference in the same unit of work, so no
row is ever left pointing at a deleted id. The database foreign keys carry the
same ``ondelete`` rule.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from app.core.errors import DanglingReference, ReferencedByDependents
from app.db.store import EntityStore, kind_of
from app.models.audit import Audit
from app.models.carrier import Carrier
from app.models.customer import Customer
from app.models.dispatch import Dispatch
from app.models.followup import FollowUp
from app.models.invoice import Invoice
from app.models.lead import Lead
from app.models.order import Order
from app.models.quote import Quote
from app.models.user import User

logger = logging.getLogger(__name__)


class DeletePolicy(str, Enum):
    RESTRICT = "restrict"
    NULLIFY = "nullify"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Relationship:
    dependent: Any
    field: str
    target: Any
    on_delete: DeletePolicy

    @property
    def column(self):
        return getattr(self.dependent, self.field)


RELATIONSHIPS: List[Relationship] = [
    Relationship(Order, "customer_id", Customer, DeletePolicy.RESTRICT),
    Relationship(Order, "lead_id", Lead, DeletePolicy.NULLIFY),
    Relationship(Dispatch, "order_id", Order, DeletePolicy.RESTRICT),
    Relationship(Dispatch, "carrier_id", Carrier, DeletePolicy.RESTRICT),
    Relationship(Quote, "lead_id", Lead, DeletePolicy.NULLIFY),
    Relationship(Quote, "customer_id", Customer, DeletePolicy.RESTRICT),
    Relationship(Invoice, "customer_id", Customer, DeletePolicy.RESTRICT),
    Relationship(Invoice, "carrier_id", Carrier, DeletePolicy.RESTRICT),
    Relationship(Invoice, "order_id", Order, DeletePolicy.RESTRICT),
    Relationship(Invoice, "dispatch_id", Dispatch, DeletePolicy.RESTRICT),
    Relationship(FollowUp, "lead_id", Lead, DeletePolicy.NULLIFY),
    Relationship(FollowUp, "customer_id", Customer, DeletePolicy.NULLIFY),
    Relationship(FollowUp, "carrier_id", Carrier, DeletePolicy.NULLIFY),
    Relationship(FollowUp, "order_id", Order, DeletePolicy.NULLIFY),
    Relationship(Audit, "user_id", User, DeletePolicy.NULLIFY),
]


def references_from(model) -> List[Relationship]:
    return [rel for rel in RELATIONSHIPS if rel.dependent is model]


def references_to(model) -> List[Relationship]:
    return [rel for rel in RELATIONSHIPS if rel.target is model]


def delete_policy(dependent, field: str) -> DeletePolicy:
    for rel in RELATIONSHIPS:
        if rel.dependent is dependent and rel.field == field:
            return rel.on_delete
    raise KeyError(f"{kind_of(dependent)}.{field} is not a declared relationship")


async def check_references(store: EntityStore, model, values: Dict[str, Any]) -> None:
    """Fail with DanglingReference if any non-null foreign key in ``values`` points nowhere.

    Only keys present in ``values`` are checked, so partial updates that leave a
    reference untouched do not re-validate it.
    """
    for rel in references_from(model):
        if rel.field not in values:
            continue
        target_id = values[rel.field]
        if target_id is None:
            continue
        if not await store.exists(rel.target, target_id):
            raise DanglingReference(rel.field, target_id)


async def release_dependents(store: EntityStore, model, entity_id: Any) -> Dict[str, int]:
    """Apply every delete policy that targets ``model`` ahead of deleting ``entity_id``.

    All RESTRICT relationships are checked before any NULLIFY is applied, so a
    blocked delete leaves dependents untouched. Returns the number of cleared
    references per ``Dependent.field``.
    """
    relationships = references_to(model)

    for rel in relationships:
        if rel.on_delete is not DeletePolicy.RESTRICT:
            continue
        count = await store.count_where(rel.dependent, rel.column == entity_id)
        if count:
            raise ReferencedByDependents(kind_of(model), entity_id, kind_of(rel.dependent), count)

    cleared = {}
    for rel in relationships:
        if rel.on_delete is not DeletePolicy.NULLIFY:
            continue
        rows = await store.update_where(rel.dependent, [rel.column == entity_id], {rel.field: None})
        if rows:
            logger.info(f"Cleared {rows} {kind_of(rel.dependent)}.{rel.field} reference(s) to {kind_of(model)} {entity_id}")
            cleared[f"{kind_of(rel.dependent)}.{rel.field}"] = rows
    return cleared
