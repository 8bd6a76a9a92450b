from datetime import datetime, timezone, timedelta
from typing import Callable, Optional
from jose import jwt, JWTError
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from passlib.context import CryptContext
from app.db.session import get_store
from app.db.store import EntityStore
from app.models.user import User
from app.core.config import settings
from app.core.enums import UserRole
from app.core.errors import PermissionDenied
from app.core.redis import get_redis
from app.utils.hashing import payload_hash

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception:
        return False


def create_access_token(subject: str, role: str, expires_minutes: Optional[int] = None) -> str:
    expires = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire_dt = datetime.now(timezone.utc) + timedelta(minutes=expires)
    to_encode = {"sub": str(subject), "role": role, "exp": expire_dt}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def _revoked_key(token: str) -> str:
    return f"revoked:{payload_hash({'token': token})}"


async def revoke_token(token: str) -> bool:
    """Deny ``token`` until it expires; a no-op without Redis."""
    redis = get_redis()
    if redis is None:
        return False
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return False
    ttl = int(claims["exp"] - datetime.now(timezone.utc).timestamp())
    if ttl > 0:
        await redis.set(_revoked_key(token), "1", ex=ttl)
    return True


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    store: EntityStore = Depends(get_store),
) -> User:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        user_id = payload.get("sub")
        if user_id is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    redis = get_redis()
    if redis is not None and await redis.get(_revoked_key(token)):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token revoked")

    user = await store.find(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


async def get_optional_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    store: EntityStore = Depends(get_store),
) -> Optional[User]:
    if not token:
        return None
    return await get_current_user(token, store)


def require_roles(*roles: UserRole) -> Callable:
    allowed = {str(role) for role in roles}

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise PermissionDenied(f"Requires role: {', '.join(sorted(allowed))}")
        return user

    return dependency


require_writer = require_roles(UserRole.ADMIN, UserRole.BROKER)
require_admin = require_roles(UserRole.ADMIN)
