# backend/octo_mock/redis_client.py

from redis import Redis

from .config import settings


def create_redis_client(url: str | None) -> Redis | None:
    """Redis client for the capacity ledger, or None to keep it in memory."""
    if not url:
        return None
    return Redis.from_url(url, decode_responses=True)


redis_client = create_redis_client(settings.redis_url)
