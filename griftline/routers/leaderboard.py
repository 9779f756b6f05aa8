from typing import Literal

import redis
from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from ..config import settings
from ..db import get_db
from ..models.entry_model import LeaderboardPage
from ..redis_client import get_redis
from ..services.assets import resolve_entry_images
from ..services.leaderboard import get_entries_for_leaderboard

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get("/", response_model=LeaderboardPage)
async def leaderboard(
    dateRange: str = Query(default="all", description="'all', a year like '2022', or 'start:end'"),
    sortBy: Literal["date", "amount"] = Query(default="amount"),
    sortDir: Literal["asc", "desc"] = Query(default="desc"),
    page: int = Query(default=1, ge=1),
    pageSize: int = Query(default=settings.LEADERBOARD_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Database = Depends(get_db),
    cache: redis.Redis = Depends(get_redis),
):
    result = get_entries_for_leaderboard(
        db,
        cache,
        date_range=dateRange,
        sort_by=sortBy,
        sort_dir=sortDir,
        page=page,
        page_size=pageSize,
    )
    resolve_entry_images(result.entries, cache)
    return result
