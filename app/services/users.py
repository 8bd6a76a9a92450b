"""User accounts: registration, credential checks and profile management"""
import logging
from typing import Any, Dict, List, Optional

from app.core.errors import INTEGRITY_ERRORS, BrokerageError, InvalidInput
from app.core.lifecycle import apply_on_create, apply_on_update
from app.core.metrics import integrity_violations
from app.core.security import hash_password, verify_password
from app.db.store import EntityStore
from app.models.user import User
from app.services.integrity import release_dependents
from app.services.numbering import new_user_id

logger = logging.getLogger(__name__)


async def _fail(store: EntityStore, exc: BrokerageError) -> None:
    if isinstance(exc, INTEGRITY_ERRORS):
        integrity_violations.labels(kind="User", error=exc.code).inc()
    await store.rollback()


async def register_user(store: EntityStore, data: Dict[str, Any]) -> User:
    values = dict(data)
    values["password_hash"] = hash_password(values.pop("password"))
    values["id"] = new_user_id()
    try:
        apply_on_create("User", values)
        user = await store.create(User, values)
        await store.commit()
    except BrokerageError as exc:
        await _fail(store, exc)
        raise

    logger.info(f"Registered user {user.username} ({user.role})")
    return user


async def authenticate(store: EntityStore, username: str, password: str) -> Optional[User]:
    users = await store.list(User, User.username == username, limit=1)
    if not users or not verify_password(password, users[0].password_hash):
        logger.info(f"Failed login for {username}")
        return None
    return users[0]


async def list_users(store: EntityStore) -> List[User]:
    return await store.list(User, order_by=[User.created_at, User.id])


async def update_user(store: EntityStore, user_id: str, changes: Dict[str, Any]) -> User:
    changes = dict(changes)
    if changes.get("password"):
        changes["password_hash"] = hash_password(changes.pop("password"))
    else:
        changes.pop("password", None)
    try:
        if "email" in changes and changes["email"] is None:
            raise InvalidInput("User.email cannot be cleared", field="email")
        current = await store.get(User, user_id)
        apply_on_update("User", current, changes)
        user = await store.update(User, user_id, changes)
        await store.commit()
    except BrokerageError as exc:
        await _fail(store, exc)
        raise

    logger.info(f"Updated user {user_id}: {sorted(changes)}")
    return user


async def delete_user(store: EntityStore, user_id: str) -> Dict[str, int]:
    try:
        await store.get(User, user_id)
        cleared = await release_dependents(store, User, user_id)
        await store.delete(User, user_id)
        await store.commit()
    except BrokerageError as exc:
        await _fail(store, exc)
        raise

    logger.info(f"Deleted user {user_id}")
    return cleared
