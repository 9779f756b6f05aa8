import json
from typing import Any, Callable, Optional

import redis
from loguru import logger

from ..config import settings

KEY_PREFIX = "timeline"
LEADERBOARD_SOURCE_KEY = f"{KEY_PREFIX}:leaderboard:source"
METADATA_KEY = f"{KEY_PREFIX}:metadata"
GLOSSARY_KEY = f"{KEY_PREFIX}:glossary"
PRESIGNED_URL_KEY_PREFIX = f"{KEY_PREFIX}:presigned_url"


def presigned_url_key(image_key: str) -> str:
    return f"{PRESIGNED_URL_KEY_PREFIX}:{image_key}"


def get_json(cache: redis.Redis, key: str) -> Optional[Any]:
    """Cached JSON value for ``key``; an unreachable cache counts as a miss."""
    try:
        raw = cache.get(key)
    except redis.RedisError as e:
        logger.warning(f"Cache read failed for {key}: {e}")
        return None
    if raw is None:
        logger.debug(f"Cache miss for {key}")
        return None
    logger.debug(f"Cache hit for {key}")
    return json.loads(raw)


def set_json(cache: redis.Redis, key: str, value: Any, ttl: Optional[int] = None) -> None:
    try:
        cache.setex(key, ttl or settings.CACHE_TTL, json.dumps(value))
    except redis.RedisError as e:
        logger.warning(f"Cache write failed for {key}: {e}")


def cached_json(cache: redis.Redis, key: str, load: Callable[[], Any], ttl: Optional[int] = None) -> Any:
    value = get_json(cache, key)
    if value is None:
        value = load()
        set_json(cache, key, value, ttl)
    return value


def clear_prefix(cache: redis.Redis, prefix: str = KEY_PREFIX) -> int:
    """Delete every key under ``prefix``; returns how many went."""
    deleted = 0
    cursor = 0
    while True:
        cursor, keys = cache.scan(cursor, match=f"{prefix}:*", count=100)
        if keys:
            deleted += cache.delete(*keys)
        if cursor == 0:
            break
    return deleted
