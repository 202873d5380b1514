"""
Marketplace search filters.

Listings are fetched newest-first from Supabase and narrowed here with a chain
of predicates, one per filter panel section. Each step is skipped when its
selection is empty, so the default SearchFilters returns every row unchanged.
"""
from fastapi import Query
from typing import List, Optional, Iterable, Literal
from looply.modules.items.schemas import (
    SearchFilters, ItemMode, ItemCondition, SortOption, DEFAULT_PRICE_RANGE
)

CATEGORIES = [
    "Fashion", "Electronics", "Books", "Home & Garden", "Sports",
    "Toys & Games", "Art & Crafts", "Music", "Automotive", "Other"
]
MODES = ["gift", "barter", "sell", "buy"]
CONDITIONS = ["new", "excellent", "good", "fair", "poor"]
OWNER_TYPES = ["user", "ngo"]
SORT_OPTIONS = ["newest", "oldest", "price-low", "price-high", "distance"]


def search_filters_from_query(
    query: str = "",
    categories: List[str] = Query(default=[]),
    modes: List[ItemMode] = Query(default=[]),
    condition: List[ItemCondition] = Query(default=[]),
    owner_types: List[Literal["user", "ngo"]] = Query(default=[]),
    price_min: float = DEFAULT_PRICE_RANGE[0],
    price_max: float = DEFAULT_PRICE_RANGE[1],
    sort_by: SortOption = "newest",
    max_distance: Optional[float] = 50,
) -> SearchFilters:
    """Dependency building SearchFilters from repeated query parameters (?modes=sell&modes=gift)"""
    return SearchFilters(
        query=query,
        categories=categories,
        modes=modes,
        condition=condition,
        owner_types=owner_types,
        price_range=(price_min, price_max),
        sort_by=sort_by,
        max_distance=max_distance,
    )


def _matches_query(item: dict, query: str) -> bool:
    needle = query.lower()
    if needle in (item.get("title") or "").lower():
        return True
    if needle in (item.get("description") or "").lower():
        return True
    return any(needle in tag.lower() for tag in item.get("tags") or [])


def _owner_role(item: dict) -> Optional[str]:
    owner = item.get("owner") or {}
    return owner.get("role")


def apply_filters(items: Iterable[dict], filters: Optional[SearchFilters]) -> List[dict]:
    filtered = list(items)
    if filters is None:
        return filtered

    query = (filters.query or "").strip()
    if query:
        filtered = [item for item in filtered if _matches_query(item, query)]

    if filters.categories:
        filtered = [item for item in filtered if item.get("category") in filters.categories]

    if filters.modes:
        filtered = [item for item in filtered if item.get("mode") in filters.modes]

    if filters.condition:
        filtered = [item for item in filtered if item.get("condition") in filters.condition]

    if filters.owner_types:
        filtered = [item for item in filtered if _owner_role(item) in filters.owner_types]

    low, high = filters.price_range
    if (low, high) != DEFAULT_PRICE_RANGE:
        # priceless listings (gift, barter, buy) are not constrained by the slider
        filtered = [
            item for item in filtered
            if item.get("price") is None or low <= float(item["price"]) <= high
        ]

    return filtered


def sort_items(items: List[dict], sort_by: str = "newest") -> List[dict]:
    if sort_by == "oldest":
        return sorted(items, key=lambda x: x.get("created_at") or "")
    if sort_by in ("price-low", "price-high"):
        priced = [i for i in items if i.get("price") is not None]
        unpriced = [i for i in items if i.get("price") is None]
        priced.sort(key=lambda x: float(x["price"]), reverse=sort_by == "price-high")
        return priced + unpriced
    # newest, and distance until listings carry coordinates
    return sorted(items, key=lambda x: x.get("created_at") or "", reverse=True)
