import httpx
from loguru import logger

from ..config import settings
from ..errors import InvalidQuery, TransientFetchError
from ..models.filter_model import FilterSelection


def facet_filters(selection: FilterSelection) -> list[str]:
    """Facet filters for the hosted index, one category at most."""
    if selection.category and selection.starred:
        raise InvalidQuery("Category filter and starred cannot be combined")
    facets = []
    if selection.category:
        facets.append(f"filters.{selection.category.kind}:{selection.category.value}")
    if selection.starred:
        facets.append("starred:true")
    if selection.collection:
        facets.append(f"collection:{selection.collection}")
    return facets


def _error_message(resp: httpx.Response) -> str:
    try:
        return str(resp.json().get("message", resp.text))
    except ValueError:
        return resp.text


async def search_entries(
    query: str,
    selection: FilterSelection | None = None,
    page: int = 0,
    hits_per_page: int = 20,
    client: httpx.AsyncClient | None = None,
) -> dict:
    if not settings.SEARCH_APP_ID or not settings.SEARCH_API_KEY:
        raise TransientFetchError("Search is not configured")

    url = f"https://{settings.SEARCH_APP_ID}-dsn.algolia.net/1/indexes/{settings.SEARCH_INDEX}/query"
    headers = {
        "X-Algolia-Application-Id": settings.SEARCH_APP_ID,
        "X-Algolia-API-Key": settings.SEARCH_API_KEY,
        "Content-Type": "application/json",
    }
    payload = {
        "query": query,
        "page": page,
        "hitsPerPage": hits_per_page,
        "facetFilters": facet_filters(selection or FilterSelection()),
    }

    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=settings.API_TIMEOUT)
    try:
        resp = await client.post(url, headers=headers, json=payload)
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        if 400 <= status < 500:
            # the index rejected the request; retrying will not help
            message = _error_message(e.response)
            logger.warning(f"Search rejected with {status}: {message}")
            raise InvalidQuery(f"Search rejected: {message}") from e
        logger.error(f"Search request failed: {e}")
        raise TransientFetchError(f"Search unavailable: {e}") from e
    except httpx.HTTPError as e:
        logger.error(f"Search request failed: {e}")
        raise TransientFetchError(f"Search unavailable: {e}") from e
    finally:
        if owns_client:
            await client.aclose()

    body = resp.json()
    return {
        "hits": body.get("hits", []),
        "nbHits": body.get("nbHits", 0),
        "page": body.get("page", page),
        "nbPages": body.get("nbPages", 0),
    }
