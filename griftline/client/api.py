"""
HTTP client for the timeline API.

Wraps the read endpoints with httpx and turns HTTP failures back into the
timeline error types. Nothing is retried; callers decide when to try again.
"""

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from ..config import settings
from ..errors import InvalidQuery, NotFound, TransientFetchError
from ..models.filter_model import FilterSelection


def selection_params(selection: FilterSelection) -> Dict[str, Any]:
    params: Dict[str, Any] = {"sort": selection.sort}
    if selection.category:
        params[selection.category.kind] = selection.category.value
    if selection.starred:
        params["starred"] = "true"
    if selection.collection:
        params["collection"] = selection.collection
    return params


class TimelineAPIClient:
    """
    Async client for the timeline API.

    ``fetch_entries`` has the signature the infinite scroll controller
    expects, so a bound method can be passed straight in.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.API_TIMEOUT
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )
        logger.info(f"Initialized TimelineAPIClient with base_url: {self.base_url}")

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TimelineAPIClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            resp = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"GET {path} failed: {e}")
            raise TransientFetchError(f"Request to {path} failed: {e}") from e

        detail = self._detail(resp)
        if resp.status_code == 400:
            raise InvalidQuery(detail)
        if resp.status_code == 404:
            raise NotFound(detail)
        if resp.status_code >= 400:
            logger.error(f"GET {path} returned {resp.status_code}: {detail}")
            raise TransientFetchError(detail)
        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"GET {path} returned a non-JSON body: {resp.text[:200]}")
            raise TransientFetchError(f"Unreadable response from {path}") from e

    @staticmethod
    def _detail(resp: httpx.Response) -> str:
        if resp.status_code < 400:
            return ""
        try:
            return str(resp.json().get("detail", resp.text))
        except ValueError:
            return resp.text

    async def get_entries_page(
        self,
        selection: FilterSelection,
        cursor: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = selection_params(selection)
        if cursor:
            params["cursor"] = cursor
        if page_size:
            params["limit"] = page_size
        return await self._get("/entries/", params)

    async def fetch_entries(
        self,
        selection: FilterSelection,
        cursor: Optional[str],
        page_size: int,
    ) -> List[Dict[str, Any]]:
        page = await self.get_entries_page(selection, cursor, page_size)
        return page["entries"]

    async def get_all_entries(self, cursor: Optional[str] = None, direction: str = "next") -> Dict[str, Any]:
        params: Dict[str, Any] = {"direction": direction}
        if cursor:
            params["cursor"] = cursor
        return await self._get("/entries/all", params)

    async def get_entry(self, entry_id: str) -> Dict[str, Any]:
        return await self._get(f"/entries/{entry_id}")

    async def get_entry_by_readable_id(self, readable_id: str) -> Dict[str, Any]:
        return await self._get(f"/entries/by-readable-id/{readable_id}")

    async def get_leaderboard(
        self,
        date_range: str = "all",
        sort_by: str = "amount",
        sort_dir: str = "desc",
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "dateRange": date_range,
            "sortBy": sort_by,
            "sortDir": sort_dir,
            "page": page,
        }
        if page_size:
            params["pageSize"] = page_size
        return await self._get("/leaderboard/", params)
