"""Sort strings in the CMS "field:direction" format."""

from typing import Literal

SortDirection = Literal["asc", "desc"]

NEWEST_FIRST = "createdAt:desc"
OLDEST_FIRST = "createdAt:asc"
PRICE_LOW_TO_HIGH = "price:asc"
PRICE_HIGH_TO_LOW = "price:desc"
ALPHABETICAL = "title:asc"

# UI sort option -> sort string
LISTING_SORT_OPTIONS: dict[str, str] = {
    "price-low-high": PRICE_LOW_TO_HIGH,
    "price-high-low": PRICE_HIGH_TO_LOW,
    "newest": NEWEST_FIRST,
    "oldest": OLDEST_FIRST,
    "alphabetical": ALPHABETICAL,
}


def create_sort(field: str, direction: SortDirection = "asc") -> str:
    return f"{field}:{direction}"


def convert_sort(sort_option: str | None) -> str:
    """Map a UI sort option to a sort string. Unknown options sort newest first."""
    return LISTING_SORT_OPTIONS.get(sort_option or "", NEWEST_FIRST)
