"""Filter tree templates in the Strapi operator syntax ($eq, $in, $or, ...)."""

from typing import Any


def eq(field: str, value: Any) -> dict:
    return {field: {"$eq": value}}


def ne(field: str, value: Any) -> dict:
    return {field: {"$ne": value}}


def contains(field: str, value: str) -> dict:
    return {field: {"$contains": value}}


def containsi(field: str, value: str) -> dict:
    return {field: {"$containsi": value}}


def gt(field: str, value: Any) -> dict:
    return {field: {"$gt": value}}


def gte(field: str, value: Any) -> dict:
    return {field: {"$gte": value}}


def lt(field: str, value: Any) -> dict:
    return {field: {"$lt": value}}


def lte(field: str, value: Any) -> dict:
    return {field: {"$lte": value}}


def is_in(field: str, values: list) -> dict:
    return {field: {"$in": list(values)}}


def not_in(field: str, values: list) -> dict:
    return {field: {"$notIn": list(values)}}


def between(field: str, minimum: Any, maximum: Any) -> dict:
    return {field: {"$gte": minimum, "$lte": maximum}}


def any_of(*conditions: dict) -> dict:
    return {"$or": list(conditions)}


def all_of(*conditions: dict) -> dict:
    return {"$and": list(conditions)}


def price_range(minimum: float | int | None = None, maximum: float | int | None = None) -> dict:
    """Price bounds; a missing bound is left open and no bounds give an empty filter."""
    bounds = {}
    if minimum is not None:
        bounds["$gte"] = minimum
    if maximum is not None:
        bounds["$lte"] = maximum
    return {"price": bounds} if bounds else {}


def by_category_slug(category_slug: str) -> dict:
    return {"categories": {"slug": {"$eq": category_slug}}}


def by_categories(category_slugs: list[str]) -> dict:
    """Match listings in any of the given categories."""
    if not category_slugs:
        return {}
    if len(category_slugs) == 1:
        return by_category_slug(category_slugs[0])
    return any_of(*[by_category_slug(slug) for slug in category_slugs])


def by_attribute_value(attribute_name: str, value: str) -> dict:
    """Match listings having value for the attribute called attribute_name."""
    return {
        "product_attribute_values": {
            "attribute": {"name": {"$eq": attribute_name}},
            "value": {"$eq": value},
        }
    }
