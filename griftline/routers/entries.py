from typing import Literal

import redis
from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from ..config import settings
from ..db import get_db
from ..models.entry_model import AllEntriesPage, EntriesPage, Entry, EntryDetail
from ..models.filter_model import FilterSelection
from ..redis_client import get_redis
from ..services import entries as store
from ..services.assets import resolve_entry_images
from ..services.glossary import get_glossary, referenced_terms

router = APIRouter(prefix="/entries", tags=["Entries"])


@router.get("/", response_model=EntriesPage)
async def list_entries(
    theme: str | None = Query(default=None),
    tech: str | None = Query(default=None),
    blockchain: str | None = Query(default=None),
    starred: bool = Query(default=False),
    collection: str | None = Query(default=None),
    sort: Literal["asc", "desc"] = Query(default="desc"),
    cursor: str | None = Query(default=None, description="id of the last entry already seen"),
    limit: int | None = Query(default=None, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Database = Depends(get_db),
    cache: redis.Redis = Depends(get_redis),
):
    """
    One page of timeline entries for a filter selection.
    Pass the ``nextCursor`` of a page as ``cursor`` to get the following one.
    """
    selection = FilterSelection.from_params(
        theme=theme,
        tech=tech,
        blockchain=blockchain,
        starred=starred,
        collection=collection,
        sort=sort,
    )
    page = store.get_filtered_entries(db, selection, cursor=cursor, page_size=limit)
    resolve_entry_images(page.entries, cache)
    return page


@router.get("/all", response_model=AllEntriesPage)
async def list_all_entries(
    cursor: str | None = Query(default=None),
    direction: Literal["next", "prev"] = Query(default="next"),
    db: Database = Depends(get_db),
    cache: redis.Redis = Depends(get_redis),
):
    """Newest-first linear browsing without client-side scrolling."""
    page = store.get_all_entries(db, cursor=cursor, direction=direction)
    resolve_entry_images(page.entries, cache)
    return page


@router.get("/by-readable-id/{readable_id}", response_model=Entry)
async def get_entry_by_readable_id(
    readable_id: str,
    db: Database = Depends(get_db),
    cache: redis.Redis = Depends(get_redis),
):
    entry = store.get_entry_by_readable_id(db, readable_id)
    resolve_entry_images([entry], cache)
    return entry


@router.get("/{entry_id}", response_model=EntryDetail)
async def get_entry(
    entry_id: str,
    db: Database = Depends(get_db),
    cache: redis.Redis = Depends(get_redis),
):
    """Single entry with the glossary terms its body refers to."""
    entry = store.get_entry(db, entry_id)
    resolve_entry_images([entry], cache)
    glossary = referenced_terms(entry.body, get_glossary(db, cache))
    return EntryDetail(**entry.model_dump(by_alias=True), glossary=glossary)
