from fastapi import APIRouter, Query

from ..models.filter_model import FilterSelection
from ..services.search import search_entries

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("/", response_model=dict)
async def search(
    q: str = Query(..., min_length=1),
    theme: str | None = Query(default=None),
    tech: str | None = Query(default=None),
    blockchain: str | None = Query(default=None),
    starred: bool = Query(default=False),
    collection: str | None = Query(default=None),
    page: int = Query(default=0, ge=0),
):
    selection = FilterSelection.from_params(
        theme=theme, tech=tech, blockchain=blockchain, starred=starred, collection=collection
    )
    return await search_entries(q, selection, page=page)
