"""
Leaderboard of entries that carry a scam amount.

The whole scam-amount subset is small enough to hold in memory, so it is
fetched once (through the Redis cache), then filtered by date range, sorted
and sliced here rather than paginated in the store.
"""

import datetime

import redis
from loguru import logger
from pymongo.database import Database

from ..config import settings
from ..db import ENTRIES
from ..errors import InvalidQuery
from ..models.entry_model import Entry, LeaderboardPage
from ..models.leaderboard_model import DateRange
from .cache import LEADERBOARD_SOURCE_KEY, cached_json
from .entries import store_errors
from .metadata import get_metadata

SCAM_AMOUNT_QUERY = {"scamAmountDetails.hasScamAmount": True}


@store_errors
def _load_scam_entries(db: Database) -> list[dict]:
    return list(db[ENTRIES].find(SCAM_AMOUNT_QUERY, {"_id": 0}))


def _amount(doc: dict) -> float:
    return float((doc.get("scamAmountDetails") or {}).get("total") or 0)


def _day(doc: dict) -> datetime.date:
    return datetime.date.fromisoformat(doc["date"])


def sort_entries(docs: list[dict], sort_by: str, sort_dir: str) -> list[dict]:
    """Sort by date or numeric total; ties keep id ascending either way."""
    if sort_by not in ("date", "amount"):
        raise InvalidQuery(f"Unknown leaderboard sort: {sort_by}")
    if sort_dir not in ("asc", "desc"):
        raise InvalidQuery(f"Unknown sort direction: {sort_dir}")
    key = _amount if sort_by == "amount" else _day
    by_id = sorted(docs, key=lambda d: d["id"])
    # sorted() is stable under reverse=True, so the id order survives ties
    return sorted(by_id, key=key, reverse=sort_dir == "desc")


def get_entries_for_leaderboard(
    db: Database,
    cache: redis.Redis,
    date_range: str = "all",
    sort_by: str = "amount",
    sort_dir: str = "desc",
    page: int = 1,
    page_size: int | None = None,
) -> LeaderboardPage:
    if page_size is None:
        page_size = settings.LEADERBOARD_PAGE_SIZE
    if page < 1 or page_size < 1:
        raise InvalidQuery("Page and page size must be positive")
    rng = DateRange.parse(date_range)

    docs = cached_json(cache, LEADERBOARD_SOURCE_KEY, lambda: _load_scam_entries(db))
    # guard against documents cached before their amount flag was cleared
    docs = [d for d in docs if (d.get("scamAmountDetails") or {}).get("hasScamAmount")]
    filtered = [d for d in docs if rng.contains(_day(d))]
    ordered = sort_entries(filtered, sort_by, sort_dir)

    if rng.is_all:
        metadata = get_metadata(db, cache)
        scam_total = metadata.griftTotal or sum(_amount(d) for d in filtered)
    else:
        scam_total = sum(_amount(d) for d in filtered)

    start = (page - 1) * page_size
    page_docs = ordered[start:start + page_size]
    logger.debug(
        f"Leaderboard range={date_range} sort={sort_by}/{sort_dir} page={page}: "
        f"{len(page_docs)} of {len(filtered)}"
    )
    return LeaderboardPage(
        entries=[Entry.model_validate({**d, "_key": d["id"]}) for d in page_docs],
        totalCount=len(filtered),
        scamTotal=scam_total,
        page=page,
        pageSize=page_size,
    )
