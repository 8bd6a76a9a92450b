import logging
from functools import wraps
from typing import Callable

from app.core.audit_log import log_audit
from app.core.enums import AuditAction

logger = logging.getLogger(__name__)


def audit_log(action: AuditAction, endpoint_name: str) -> Callable:
    """Audit a route after it succeeds.

    The route must take ``store`` and ``current_user`` keyword arguments; the
    hashed payload is ``payload`` when present, else the path ids.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            result = await func(*args, **kwargs)

            store = kwargs.get("store")
            current_user = kwargs.get("current_user")
            if not store or not current_user:
                return result

            payload = kwargs.get("payload")
            if payload is None:
                payload = {k: v for k, v in kwargs.items() if k.endswith("_id")}
            await log_audit(store, current_user.id, action, payload, endpoint=endpoint_name)
            return result

        return wrapper
    return decorator
