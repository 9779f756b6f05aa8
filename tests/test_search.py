import json

import httpx
import pytest

from griftline.config import settings
from griftline.errors import InvalidQuery, TransientFetchError
from griftline.models.filter_model import CategoryFilter, FilterSelection
from griftline.services.search import facet_filters, search_entries


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setattr(settings, "SEARCH_APP_ID", "app")
    monkeypatch.setattr(settings, "SEARCH_API_KEY", "KEY")
    monkeypatch.setattr(settings, "SEARCH_INDEX", "entries")


def test_facet_filters():
    selection = FilterSelection(category=CategoryFilter(kind="blockchain", value="solana"), collection="ftx")
    assert facet_filters(selection) == ["filters.blockchain:solana", "collection:ftx"]
    assert facet_filters(FilterSelection(starred=True)) == ["starred:true"]
    with pytest.raises(InvalidQuery):
        facet_filters(FilterSelection(category=CategoryFilter(kind="tech", value="nft"), starred=True))


@pytest.mark.asyncio
async def test_search_posts_query(configured):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"hits": [{"objectID": "2022-01-01-0"}], "nbHits": 1, "page": 0, "nbPages": 1})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await search_entries("bridge hack", FilterSelection(starred=True), client=client)

    assert seen["url"] == "https://app-dsn.algolia.net/1/indexes/entries/query"
    assert seen["headers"]["X-Algolia-API-Key"] == "KEY"
    assert seen["body"]["query"] == "bridge hack"
    assert seen["body"]["facetFilters"] == ["starred:true"]
    assert result["nbHits"] == 1


@pytest.mark.asyncio
async def test_search_failure_is_transient(configured):
    def handler(request):
        return httpx.Response(502)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(TransientFetchError):
            await search_entries("x", client=client)


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 403])
async def test_search_rejection_is_invalid_query(configured, status):
    def handler(request):
        return httpx.Response(status, json={"message": "Invalid filter syntax", "status": status})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(InvalidQuery) as exc_info:
            await search_entries("x", client=client)
    assert "Invalid filter syntax" in exc_info.value.message


@pytest.mark.asyncio
async def test_search_unconfigured(monkeypatch):
    monkeypatch.setattr(settings, "SEARCH_APP_ID", None)
    with pytest.raises(TransientFetchError):
        await search_entries("x")


def test_search_route_rejects_two_categories(client):
    resp = client.get("/search/", params={"q": "x", "theme": "hack", "tech": "nft"})
    assert resp.status_code == 400
