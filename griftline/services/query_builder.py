from pymongo import ASCENDING, DESCENDING

from ..errors import InvalidQuery
from ..models.filter_model import CATEGORY_KINDS, FilterSelection, StoreQuery


def build_query(selection: FilterSelection) -> StoreQuery:
    """
    Translate a filter selection into the single store query that serves it.

    The entries collection is indexed for one equality filter next to the
    date sort, so at most one of category / starred may be set. Collection
    is an independent axis and combines with either.
    """
    category = selection.category
    if category is not None and selection.starred:
        raise InvalidQuery("Category filter and starred cannot be combined")

    match: dict = {}
    if category is not None:
        if category.kind not in CATEGORY_KINDS:
            raise InvalidQuery(f"Unknown filter category: {category.kind}")
        if not category.value.strip():
            raise InvalidQuery(f"Empty value for filter category: {category.kind}")
        match[f"filters.{category.kind}"] = category.value.strip()
    elif selection.starred:
        match["starred"] = True

    if selection.collection:
        match["collection"] = selection.collection

    direction = DESCENDING if selection.sort == "desc" else ASCENDING
    return StoreQuery(
        match=match,
        sort=[("date", direction), ("id", ASCENDING)],
        direction=selection.sort,
    )
