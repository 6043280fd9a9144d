from typing import Optional

from redis.asyncio import Redis

from app.platform.config import settings

_client: Optional[Redis] = None


def get_redis() -> Optional[Redis]:
    """Shared Redis client, or None when no REDIS_URL is configured."""
    global _client

    if not settings.REDIS_URL:
        return None

    if _client is None:
        _client = Redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
    return _client
