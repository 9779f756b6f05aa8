import redis

from .config import settings

redis_client = redis.Redis(
    host=settings.REDIS_HOST,
    port=settings.REDIS_PORT,
    password=settings.REDIS_PASSWORD,
    decode_responses=True   # bytes to strings
)


def get_redis() -> redis.Redis:
    return redis_client
