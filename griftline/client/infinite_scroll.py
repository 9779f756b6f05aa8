"""
Infinite scroll over the timeline.

The controller owns the display list and cursor for one filter selection.
Every fetch is tagged with the generation it was started in; a filter change
starts a new generation, so a fetch that resolves afterwards is dropped
instead of being merged into the new list.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from loguru import logger

from ..errors import TransientFetchError
from ..models.filter_model import FilterSelection

FetchPage = Callable[[FilterSelection, Optional[str], int], Awaitable[Any]]


class ScrollState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    EXHAUSTED = "exhausted"
    ERROR = "error"


def _entry_id(entry: Any) -> str:
    if isinstance(entry, dict):
        return entry.get("_key") or entry["id"]
    return entry.id


class InfiniteScrollController:

    def __init__(
        self,
        fetch_page: FetchPage,
        page_size: int = 20,
        selection: Optional[FilterSelection] = None,
    ):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._fetch_page = fetch_page
        self.page_size = page_size
        self.selection = selection or FilterSelection()
        self.state = ScrollState.IDLE
        self.cursor: Optional[str] = None
        self.generation = 0
        self.last_error: Optional[Exception] = None
        self._entries: List[Any] = []
        self._seen: set[str] = set()

    @property
    def entries(self) -> List[Any]:
        return list(self._entries)

    async def on_sentinel_visible(self) -> None:
        """The end-of-list sentinel scrolled into view."""
        if self.state in (ScrollState.FETCHING, ScrollState.EXHAUSTED):
            return
        await self._fetch_next()

    async def change_filters(self, selection: FilterSelection) -> None:
        """Reset to the first page of a new selection and fetch it."""
        self.generation += 1
        self.selection = selection
        self._entries = []
        self._seen = set()
        self.cursor = None
        self.last_error = None
        self.state = ScrollState.IDLE
        await self._fetch_next()

    async def _fetch_next(self) -> None:
        generation = self.generation
        self.state = ScrollState.FETCHING
        try:
            result = await self._fetch_page(self.selection, self.cursor, self.page_size)
        except Exception as e:
            if generation != self.generation:
                logger.debug(f"Dropping error from superseded fetch (generation {generation})")
                return
            logger.warning(f"Fetching next page failed: {e}")
            self.last_error = e
            self.state = ScrollState.ERROR
            # transient failures wait for the next trigger, anything else is the caller's bug
            if not isinstance(e, TransientFetchError):
                raise
            return

        if generation != self.generation:
            logger.debug(f"Dropping result from superseded fetch (generation {generation})")
            return

        page = result["entries"] if isinstance(result, dict) else getattr(result, "entries", result)
        self._append(page)
        if len(page) < self.page_size:
            self.state = ScrollState.EXHAUSTED
        else:
            self.state = ScrollState.IDLE

    def _append(self, page: List[Any]) -> None:
        for entry in page:
            key = _entry_id(entry)
            if key in self._seen:
                continue
            self._seen.add(key)
            self._entries.append(entry)
        if page:
            self.cursor = _entry_id(page[-1])

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "cursor": self.cursor,
            "count": len(self._entries),
            "generation": self.generation,
        }
