"""Fluent builder for Strapi REST query parameters.

Nested filter/populate trees are flattened into the bracket notation Strapi
parses, e.g. {"filters": {"slug": {"$eq": "cars"}}} -> filters[slug][$eq]=cars.
Lists use indices: {"sort": ["price:asc"]} -> sort[0]=price:asc.
"""

from typing import Any
from urllib.parse import quote


def flatten_query(query: dict, prefix: str = "") -> list[tuple[str, str]]:
    """
    Flatten a nested query dict into (key, value) pairs in bracket notation.

    Args:
        query (dict): The nested query.
        prefix (str): Key prefix of the current nesting level.

    Returns:
        list[tuple[str, str]]: Ordered pairs, ready to be passed as httpx params.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        full_key = f"{prefix}[{key}]" if prefix else str(key)
        pairs.extend(_flatten_value(full_key, value))
    return pairs


def _flatten_value(key: str, value: Any) -> list[tuple[str, str]]:
    if value is None:
        return []
    if isinstance(value, dict):
        return flatten_query(value, prefix=key)
    if isinstance(value, (list, tuple)):
        pairs = []
        for index, item in enumerate(value):
            pairs.extend(_flatten_value(f"{key}[{index}]", item))
        return pairs
    if isinstance(value, bool):
        return [(key, "true" if value else "false")]
    return [(key, str(value))]


def stringify_query(query: dict) -> str:
    """Render a nested query as a query string, encoding values only."""
    return "&".join(f"{key}={quote(value, safe=':')}" for key, value in flatten_query(query))


class StrapiQueryBuilder:
    """
    Collects filters, sort, pagination and populate settings and renders them
    as Strapi query parameters. All setters return the builder.
    """

    def __init__(self) -> None:
        self._where: dict[str, Any] = {}
        self._sort: list[str] = []
        self._pagination: dict[str, int] = {}
        self._populate: dict[str, Any] = {}

    def where(self, filters: dict[str, Any]) -> "StrapiQueryBuilder":
        """Merge filters into the where clause. Keys given again replace earlier ones."""
        self._where = {**self._where, **filters}
        return self

    def sort(self, field: str) -> "StrapiQueryBuilder":
        """Add a sort string such as "createdAt:desc"."""
        self._sort.append(field)
        return self

    def paginate(self, page: int, page_size: int) -> "StrapiQueryBuilder":
        self._pagination = {"page": page, "pageSize": page_size}
        return self

    def populate(self, fields: list[str] | dict[str, Any]) -> "StrapiQueryBuilder":
        """Populate relations, either by name or with a nested populate config."""
        if isinstance(fields, dict):
            self._populate = {**self._populate, **fields}
        else:
            for field in fields:
                self._populate[field] = True
        return self

    def to_dict(self) -> dict[str, Any]:
        query: dict[str, Any] = {}
        if self._pagination:
            query["pagination"] = dict(self._pagination)
        if self._sort:
            query["sort"] = list(self._sort)
        if self._where:
            query["filters"] = self._where
        if self._populate:
            query["populate"] = self._populate
        return query

    def build_params(self) -> list[tuple[str, str]]:
        return flatten_query(self.to_dict())

    def build(self) -> str:
        return stringify_query(self.to_dict())

    ##########################################
    ############### PRESETS ##################
    ##########################################

    @staticmethod
    def listing_populate() -> dict[str, Any]:
        return {
            "categories": {"populate": ["attributes", "categories", "parent"]},
            "images": True,
            "product_attribute_values": {"populate": ["attribute"]},
        }

    @staticmethod
    def category_populate() -> dict[str, Any]:
        return {
            "categories": {"populate": ["attributes", "categories"]},
            "attributes": True,
            "parent": True,
        }

    @classmethod
    def for_listing_by_id(cls) -> "StrapiQueryBuilder":
        return cls().populate(cls.listing_populate())

    @classmethod
    def for_listing_by_slug(cls, slug: str) -> "StrapiQueryBuilder":
        return cls().where({"slug": {"$eq": slug}}).populate(cls.listing_populate())

    @classmethod
    def for_category_by_slug(cls, slug: str) -> "StrapiQueryBuilder":
        return cls().where({"slug": {"$eq": slug}}).populate(cls.category_populate())
