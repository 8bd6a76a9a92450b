"""Status vocabularies, creation defaults and transition rules per entity kind"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Type

from app.core.enums import (
    DispatchStatus,
    FollowUpPriority,
    InvoiceStatus,
    InvoiceType,
    LeadStatus,
    OrderStatus,
    QuoteStatus,
    UserRole,
)
from app.core.errors import InvalidStatus, InvalidTransition


@dataclass(frozen=True)
class Lifecycle:
    kind: str
    vocabulary: Type[Enum]
    default: Enum
    terminal: FrozenSet[Enum] = field(default_factory=frozenset)
    attribute: str = "status"

    @property
    def allowed(self) -> list:
        return [member.value for member in self.vocabulary]

    def coerce(self, value) -> str:
        try:
            return self.vocabulary(value).value
        except ValueError:
            raise InvalidStatus(self.kind, self.attribute, value, self.allowed)

    def initial(self, value: Optional[str] = None) -> str:
        if value is None:
            return self.default.value
        return self.coerce(value)

    def transition(self, current: Optional[str], value) -> str:
        new = self.coerce(value)
        if current is None or current == new:
            return new
        if current in {state.value for state in self.terminal}:
            raise InvalidTransition(self.kind, self.attribute, current, new)
        return new


LIFECYCLES: Dict[str, Lifecycle] = {
    "Lead": Lifecycle(
        "Lead", LeadStatus, LeadStatus.NEW,
        terminal=frozenset({LeadStatus.CONVERTED}),
    ),
    "Order": Lifecycle(
        "Order", OrderStatus, OrderStatus.NEEDS_TRUCK,
        terminal=frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    ),
    "Dispatch": Lifecycle(
        "Dispatch", DispatchStatus, DispatchStatus.ASSIGNED,
        terminal=frozenset({DispatchStatus.DELIVERED, DispatchStatus.CANCELLED}),
    ),
    "Quote": Lifecycle(
        "Quote", QuoteStatus, QuoteStatus.PENDING,
        terminal=frozenset({QuoteStatus.ACCEPTED, QuoteStatus.DECLINED}),
    ),
    "Invoice": Lifecycle(
        "Invoice", InvoiceStatus, InvoiceStatus.DRAFT,
        terminal=frozenset({InvoiceStatus.PAID, InvoiceStatus.VOID}),
    ),
}

# Closed vocabularies that are not lifecycles: any value may follow any other.
CHOICES: Dict[str, Dict[str, Lifecycle]] = {
    "Invoice": {
        "type": Lifecycle("Invoice", InvoiceType, InvoiceType.CUSTOMER, attribute="type"),
    },
    "FollowUp": {
        "priority": Lifecycle("FollowUp", FollowUpPriority, FollowUpPriority.MEDIUM, attribute="priority"),
    },
    "User": {
        "role": Lifecycle("User", UserRole, UserRole.USER, attribute="role"),
    },
}

# Dashboard metrics match these literal tokens.
ACTIVE_ORDER_STATUSES = (
    OrderStatus.DISPATCHED.value,
    OrderStatus.IN_TRANSIT.value,
    OrderStatus.NEEDS_TRUCK.value,
)
OPEN_INVOICE_STATUSES = (InvoiceStatus.SENT.value, InvoiceStatus.OVERDUE.value)


def apply_on_create(kind: str, values: dict) -> dict:
    """Fill defaults and validate every closed-vocabulary field of a new row."""
    lifecycle = LIFECYCLES.get(kind)
    if lifecycle is not None:
        values[lifecycle.attribute] = lifecycle.initial(values.get(lifecycle.attribute))

    for name, choice in CHOICES.get(kind, {}).items():
        values[name] = choice.initial(values.get(name))
    return values


def apply_on_update(kind: str, current, changes: dict) -> dict:
    """Validate the closed-vocabulary fields present in a partial update.

    ``current`` is the stored row; fields absent from ``changes`` are left alone.
    """
    lifecycle = LIFECYCLES.get(kind)
    if lifecycle is not None and lifecycle.attribute in changes:
        changes[lifecycle.attribute] = lifecycle.transition(
            getattr(current, lifecycle.attribute, None), changes[lifecycle.attribute]
        )

    for name, choice in CHOICES.get(kind, {}).items():
        if name in changes:
            changes[name] = choice.coerce(changes[name])
    return changes
