import logging
from typing import Optional
from redis.asyncio import Redis
from app.core.config import settings
from app.core.metrics import redis_connected

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None


async def init_redis(url: Optional[str] = None) -> Optional[Redis]:
    """Connect to Redis if a URL is configured; rate limiting and idempotency are off without it."""
    global redis
    url = url or settings.REDIS_URL
    if not url:
        logger.info("REDIS_URL not set, rate limiting and idempotency replay disabled")
        redis_connected.set(0)
        return None
    try:
        client = Redis.from_url(url, decode_responses=False)
        await client.ping()
        redis = client
        redis_connected.set(1)
        logger.info("Connected to Redis")
        return redis
    except Exception as e:
        redis_connected.set(0)
        logger.error(f"Failed to connect to Redis: {e}")
        raise


async def close_redis():
    global redis
    if redis:
        await redis.close()
        redis = None
        redis_connected.set(0)


def set_redis(client: Optional[Redis]) -> None:
    global redis
    redis = client


def get_redis() -> Optional[Redis]:
    return redis
