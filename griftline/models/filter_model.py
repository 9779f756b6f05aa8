from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel

from ..errors import InvalidQuery

CATEGORY_KINDS = ("theme", "tech", "blockchain")

SortDirection = Literal["asc", "desc"]


class CategoryFilter(BaseModel):
    kind: str  # 'theme' | 'tech' | 'blockchain'
    value: str


class FilterSelection(BaseModel):
    category: Optional[CategoryFilter] = None
    starred: bool = False
    collection: Optional[str] = None
    sort: SortDirection = "desc"

    @classmethod
    def from_params(
        cls,
        theme: str | None = None,
        tech: str | None = None,
        blockchain: str | None = None,
        starred: bool = False,
        collection: str | None = None,
        sort: SortDirection = "desc",
    ) -> "FilterSelection":
        """Build a selection from flat query-string parameters."""
        given = {
            kind: value
            for kind, value in (("theme", theme), ("tech", tech), ("blockchain", blockchain))
            if value
        }
        if len(given) > 1:
            raise InvalidQuery(
                f"Only one filter category may be active, got: {', '.join(sorted(given))}"
            )
        category = None
        if given:
            kind, value = given.popitem()
            category = CategoryFilter(kind=kind, value=value)
        return cls(
            category=category,
            starred=starred,
            collection=collection or None,
            sort=sort,
        )


class StoreQuery(BaseModel):
    match: Dict[str, Any]
    sort: List[Tuple[str, int]]
    direction: SortDirection
