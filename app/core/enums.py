from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    BROKER = "broker"
    USER = "user"

    def __str__(self):
        return self.value


class LeadStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    CONVERTED = "converted"
    LOST = "lost"

    def __str__(self):
        return self.value


class OrderStatus(str, Enum):
    NEEDS_TRUCK = "needs_truck"
    DISPATCHED = "dispatched"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    def __str__(self):
        return self.value


class DispatchStatus(str, Enum):
    ASSIGNED = "assigned"
    EN_ROUTE = "en_route"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    def __str__(self):
        return self.value


class QuoteStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"

    def __str__(self):
        return self.value


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    VOID = "void"

    def __str__(self):
        return self.value


class InvoiceType(str, Enum):
    CUSTOMER = "customer"
    CARRIER = "carrier"

    def __str__(self):
        return self.value


class FollowUpPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self):
        return self.value


class AuditAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    LOGIN = "login"
    REGISTER = "register"

    def __str__(self):
        return self.value
