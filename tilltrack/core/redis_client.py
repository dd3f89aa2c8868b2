"""
Redis client configuration for the Redis storage backend.
"""
import redis
import logging

from tilltrack.core.config import settings

logger = logging.getLogger(__name__)

# Create Redis client
redis_client = redis.Redis.from_url(
    settings.redis_url,
    db=settings.redis_db,
    decode_responses=True,
    socket_connect_timeout=5,
    socket_timeout=5,
    retry_on_timeout=True
)


def check_redis_connection(client=None) -> bool:
    """Check if Redis connection is working."""
    try:
        (client or redis_client).ping()
        return True
    except Exception as e:
        logger.error(f"Redis connection check failed: {e}")
        return False
