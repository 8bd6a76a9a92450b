from fastapi import APIRouter, Depends, HTTPException

from app.core.audit_log import log_login, log_register
from app.core.enums import UserRole
from app.core.errors import PermissionDenied
from app.core.security import (
    create_access_token,
    get_current_user,
    get_optional_user,
    oauth2_scheme,
    revoke_token,
)
from app.db.session import get_store
from app.db.store import EntityStore
from app.schemas.auth import LoginIn, RegisterIn, TokenOut, UserOut
from app.services.users import authenticate, register_user

router = APIRouter(prefix="/api", tags=["auth"])


def _token_response(user) -> TokenOut:
    token = create_access_token(user.id, user.role)
    return TokenOut(access_token=token, user=UserOut.model_validate(user))


@router.post("/register", response_model=TokenOut, status_code=201)
async def register(
    payload: RegisterIn,
    store: EntityStore = Depends(get_store),
    current_user=Depends(get_optional_user),
):
    requested_role = payload.role or UserRole.USER.value
    if requested_role != UserRole.USER.value and (current_user is None or current_user.role != UserRole.ADMIN.value):
        raise PermissionDenied("Only admins can register privileged accounts")

    user = await register_user(store, payload.model_dump(exclude_unset=True))
    # built first: a failed audit write rolls back and expires `user`
    response = _token_response(user)
    await log_register(store, response.user.id, response.user.username)
    return response


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn, store: EntityStore = Depends(get_store)):
    user = await authenticate(store, payload.username, payload.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    response = _token_response(user)
    await log_login(store, response.user.id, response.user.username)
    return response


@router.post("/logout")
async def logout(
    token: str = Depends(oauth2_scheme),
    current_user=Depends(get_current_user),
):
    revoked = await revoke_token(token)
    return {"message": "Logged out successfully", "revoked": revoked}


@router.get("/user", response_model=UserOut)
async def current_user_profile(current_user=Depends(get_current_user)):
    return UserOut.model_validate(current_user)
