import json
from typing import Optional
from app.core.redis import get_redis
from app.core.config import settings


def _key(scope: str, key: str) -> str:
    return f"idemp:{scope}:{key}"


async def get_idempotent(scope: str, key: Optional[str]):
    """Cached response body for ``key`` under ``scope``, or None."""
    redis = get_redis()
    if not key or redis is None:
        return None
    v = await redis.get(_key(scope, key))
    return json.loads(v) if v else None


async def set_idempotent(scope: str, key: Optional[str], value: dict):
    redis = get_redis()
    if not key or redis is None:
        return
    await redis.set(_key(scope, key), json.dumps(value, default=str), ex=settings.IDEMPOTENCY_TTL)
