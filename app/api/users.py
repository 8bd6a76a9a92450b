from typing import List

from fastapi import APIRouter, Depends

from app.core.auth_utils import check_role_change, check_user_access
from app.core.audit_decorator import audit_log
from app.core.enums import AuditAction
from app.core.rate_limit import check_rate_limit
from app.core.security import get_current_user, require_admin
from app.db.session import get_store
from app.db.store import EntityStore
from app.schemas.auth import UserOut, UserUpdate
from app.schemas.common import Deleted
from app.services.users import delete_user, list_users, update_user

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserOut])
async def get_users(
    store: EntityStore = Depends(get_store),
    current_user=Depends(require_admin),
):
    return [UserOut.model_validate(user) for user in await list_users(store)]


@router.put("/{user_id}", response_model=UserOut)
@audit_log(AuditAction.UPDATE, "update_user")
async def put_user(
    user_id: str,
    payload: UserUpdate,
    store: EntityStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    await check_rate_limit(current_user.id)
    changes = payload.model_dump(exclude_unset=True)
    check_user_access(user_id, current_user)
    check_role_change(changes, current_user)

    return UserOut.model_validate(await update_user(store, user_id, changes))


@router.delete("/{user_id}", response_model=Deleted)
@audit_log(AuditAction.DELETE, "delete_user")
async def remove_user(
    user_id: str,
    store: EntityStore = Depends(get_store),
    current_user=Depends(require_admin),
):
    await check_rate_limit(current_user.id)
    cleared = await delete_user(store, user_id)
    return Deleted(cleared_references=cleared)
