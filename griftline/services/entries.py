"""
Paginated retrieval of timeline entries from MongoDB.

Entries are ordered by ``date`` and then ``id``; the ``id`` of the last
entry on a page is the only cursor. The cursor document is looked up so the
next page can start strictly after its (date, id) position.
"""

import functools
from typing import Optional

from loguru import logger
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..config import settings
from ..db import ENTRIES
from ..errors import InvalidQuery, NotFound, TransientFetchError
from ..models.entry_model import AllEntriesPage, EntriesPage, Entry
from ..models.filter_model import FilterSelection, StoreQuery
from .query_builder import build_query

PROJECTION = {"_id": 0}


def store_errors(fn):
    """Surface driver failures as TransientFetchError."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"{fn.__name__} failed: {e}")
            raise TransientFetchError(f"Entry store unavailable: {e}") from e

    return wrapper


def _to_entry(doc: dict) -> Entry:
    doc["_key"] = doc["id"]
    return Entry.model_validate(doc)


def _combine(*conditions: dict) -> dict:
    conditions = [c for c in conditions if c]
    if not conditions:
        return {}
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": list(conditions)}


def _cursor_date(db: Database, cursor: str) -> str:
    doc = db[ENTRIES].find_one({"id": cursor}, {"_id": 0, "id": 1, "date": 1})
    if not doc:
        raise NotFound(f"Cursor entry not found: {cursor}")
    return doc["date"]


def _after(cursor: str, cursor_date: str, date_direction: int) -> dict:
    """Everything strictly after the cursor when ties sort by id ascending."""
    op = "$lt" if date_direction == DESCENDING else "$gt"
    return {"$or": [
        {"date": {op: cursor_date}},
        {"date": cursor_date, "id": {"$gt": cursor}},
    ]}


def _before(cursor: str, cursor_date: str, date_direction: int) -> dict:
    op = "$gt" if date_direction == DESCENDING else "$lt"
    return {"$or": [
        {"date": {op: cursor_date}},
        {"date": cursor_date, "id": {"$lt": cursor}},
    ]}


def _check_page_size(page_size: int) -> None:
    if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
        raise InvalidQuery(
            f"Page size must be between 1 and {settings.MAX_PAGE_SIZE}, got {page_size}"
        )


@store_errors
def get_entries(
    db: Database,
    query: StoreQuery,
    cursor: Optional[str] = None,
    page_size: Optional[int] = None,
) -> EntriesPage:
    """
    Return up to ``page_size`` entries strictly after ``cursor``.

    Without a cursor the page starts at the beginning of the sort order.
    ``nextCursor`` is set only when the page came back full.
    """
    if page_size is None:
        page_size = settings.ENTRIES_PAGE_SIZE
    _check_page_size(page_size)

    date_direction = query.sort[0][1]
    position = {}
    if cursor:
        position = _after(cursor, _cursor_date(db, cursor), date_direction)

    docs = list(
        db[ENTRIES]
        .find(_combine(query.match, position), PROJECTION)
        .sort(query.sort)
        .limit(page_size)
    )
    entries = [_to_entry(d) for d in docs]
    has_next = len(entries) == page_size
    logger.debug(f"get_entries match={query.match} cursor={cursor} -> {len(entries)}")
    return EntriesPage(
        entries=entries,
        hasNext=has_next,
        nextCursor=entries[-1].key if has_next else None,
    )


@store_errors
def get_all_entries(
    db: Database,
    cursor: Optional[str] = None,
    direction: str = "next",
    page_size: Optional[int] = None,
) -> AllEntriesPage:
    """
    Linear newest-first browsing, one small page per request.

    ``next`` walks towards older entries, ``prev`` towards newer ones; the
    page is always returned newest first.
    """
    if page_size is None:
        page_size = settings.ALL_ENTRIES_PAGE_SIZE
    _check_page_size(page_size)
    if direction not in ("next", "prev"):
        raise InvalidQuery(f"Unknown paging direction: {direction}")
    if direction == "prev" and not cursor:
        raise InvalidQuery("Paging backwards requires a cursor")

    col = db[ENTRIES]
    if direction == "next":
        position = _after(cursor, _cursor_date(db, cursor), DESCENDING) if cursor else {}
        sort = [("date", DESCENDING), ("id", ASCENDING)]
    else:
        position = _before(cursor, _cursor_date(db, cursor), DESCENDING)
        sort = [("date", ASCENDING), ("id", DESCENDING)]

    # one extra document tells whether another page exists this way
    docs = list(col.find(position, PROJECTION).sort(sort).limit(page_size + 1))
    more = len(docs) > page_size
    docs = docs[:page_size]
    if direction == "prev":
        docs.reverse()

    entries = [_to_entry(d) for d in docs]
    # the cursor entry itself lies on the side we came from
    has_next = bool(entries) and (more if direction == "next" else True)
    has_prev = bool(entries) and (more if direction == "prev" else cursor is not None)
    return AllEntriesPage(
        entries=entries,
        hasNext=has_next,
        hasPrev=has_prev,
        nextCursor=entries[-1].key if has_next else None,
        prevCursor=entries[0].key if has_prev else None,
    )


@store_errors
def get_entry(db: Database, entry_id: str) -> Entry:
    doc = db[ENTRIES].find_one({"id": entry_id}, PROJECTION)
    if not doc:
        raise NotFound(f"Entry not found: {entry_id}")
    return _to_entry(doc)


@store_errors
def get_entry_by_readable_id(db: Database, readable_id: str) -> Entry:
    doc = db[ENTRIES].find_one({"readableId": readable_id}, PROJECTION)
    if not doc:
        raise NotFound(f"Entry not found: {readable_id}")
    return _to_entry(doc)


def resolve_readable_id(db: Database, readable_id: str) -> str:
    return get_entry_by_readable_id(db, readable_id).id


def get_filtered_entries(
    db: Database,
    selection: FilterSelection,
    cursor: Optional[str] = None,
    page_size: Optional[int] = None,
) -> EntriesPage:
    """Build the query for ``selection`` and fetch one page of it."""
    return get_entries(db, build_query(selection), cursor=cursor, page_size=page_size)
