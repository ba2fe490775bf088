import json
import redis
from redis.exceptions import RedisError

from seminar_booking.core.config import REDIS_URL
from seminar_booking.core.logging_config import get_logger

logger = get_logger()

_redis_client = None


def get_redis_client():
    global _redis_client

    if _redis_client is not None:
        return _redis_client

    if not REDIS_URL:
        return None

    try:
        client = redis.Redis.from_url(
            REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        client.ping()
        logger.info("Redis connected")
        _redis_client = client
        return _redis_client
    except RedisError as e:
        logger.warning(f"Redis unavailable: {e}")
        return None


# Cache misses and Redis outages both fall through to the database
def get_cache(key: str):
    client = get_redis_client()
    if not client:
        return None
    try:
        data = client.get(key)
        return json.loads(data) if data else None
    except RedisError as e:
        logger.warning(f"Redis read failed for {key}: {e}")
        return None


def set_cache(key: str, value, ttl: int = 60):
    client = get_redis_client()
    if not client:
        return
    try:
        client.setex(key, ttl, json.dumps(value, default=str))
    except RedisError as e:
        logger.warning(f"Redis write failed for {key}: {e}")


def delete_cache_prefix(prefix: str):
    client = get_redis_client()
    if not client:
        return
    try:
        for key in client.scan_iter(f"{prefix}*"):
            client.delete(key)
    except RedisError as e:
        logger.warning(f"Redis invalidation failed for {prefix}: {e}")
