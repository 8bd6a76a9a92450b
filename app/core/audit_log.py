"""Audit trail writes for API actions"""
import logging
from typing import Any, Optional

from app.core.enums import AuditAction
from app.core.metrics import audit_logs_created
from app.db.store import EntityStore
from app.models.audit import Audit
from app.utils.hashing import payload_hash

logger = logging.getLogger(__name__)


async def log_audit(
    store: EntityStore,
    user_id: Optional[str],
    action: AuditAction,
    payload: Any = None,
    endpoint: Optional[str] = None,
) -> None:
    """Record one audit row in its own commit; failures are logged, never raised."""
    try:
        await store.create(Audit, {
            "user_id": user_id,
            "action": str(action),
            "endpoint": endpoint or str(action),
            "payload_hash": payload_hash(payload or {}),
        })
        await store.commit()
        audit_logs_created.labels(action=str(action)).inc()
    except Exception as e:
        logger.error(f"Audit logging failed for action {action}: {e}", exc_info=True)
        await store.rollback()


async def log_login(store: EntityStore, user_id: str, username: str) -> None:
    await log_audit(store, user_id, AuditAction.LOGIN, {"username": username})


async def log_register(store: EntityStore, user_id: str, username: str) -> None:
    await log_audit(store, user_id, AuditAction.REGISTER, {"username": username})
