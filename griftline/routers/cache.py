import redis
from fastapi import APIRouter, Depends
from loguru import logger

from ..redis_client import get_redis
from ..services.cache import clear_prefix

router = APIRouter(prefix="/cache", tags=["Cache Management"])


@router.post("/clear-timeline")
async def clear_timeline_cache(cache: redis.Redis = Depends(get_redis)):
    """Clear only timeline-related cache"""
    try:
        deleted = clear_prefix(cache)
    except redis.RedisError as e:
        logger.error(f"Clearing timeline cache failed: {e}")
        return {"ok": False, "deleted": 0, "error": str(e)}
    return {"ok": True, "deleted": deleted}


@router.get("/stats")
async def get_cache_stats(cache: redis.Redis = Depends(get_redis)):
    """Get cache statistics"""
    try:
        info = cache.info()
    except redis.RedisError as e:
        logger.error(f"Reading cache stats failed: {e}")
        return {"ok": False, "error": str(e)}
    return {
        "ok": True,
        "used_memory": info.get("used_memory_human"),
        "connected_clients": info.get("connected_clients"),
        "total_commands_processed": info.get("total_commands_processed"),
    }
