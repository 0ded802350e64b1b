# backend/booking_api/redis_client.py

from redis import Redis

from .config import settings

# None when REDIS_URL is not configured: event emission is skipped.
redis_client: Redis | None = (
    Redis.from_url(settings.redis_url, decode_responses=True)
    if settings.redis_url
    else None
)
