"""Tests for Strapi filter templates and sort strings."""

import pytest

from shared.query import filters
from shared.query.sort import LISTING_SORT_OPTIONS, convert_sort, create_sort


@pytest.mark.unit
def test_operator_templates():
    assert filters.eq("slug", "cars") == {"slug": {"$eq": "cars"}}
    assert filters.ne("status", "SOLD") == {"status": {"$ne": "SOLD"}}
    assert filters.containsi("title", "golf") == {"title": {"$containsi": "golf"}}
    assert filters.is_in("slug", ("a", "b")) == {"slug": {"$in": ["a", "b"]}}
    assert filters.not_in("slug", ["a"]) == {"slug": {"$notIn": ["a"]}}
    assert filters.between("price", 1, 9) == {"price": {"$gte": 1, "$lte": 9}}


@pytest.mark.unit
def test_combinators():
    a, b = filters.eq("x", 1), filters.eq("y", 2)
    assert filters.any_of(a, b) == {"$or": [a, b]}
    assert filters.all_of(a, b) == {"$and": [a, b]}


@pytest.mark.unit
def test_price_range_leaves_missing_bound_open():
    assert filters.price_range(100, 500) == {"price": {"$gte": 100, "$lte": 500}}
    assert filters.price_range(maximum=500) == {"price": {"$lte": 500}}
    assert filters.price_range(0, None) == {"price": {"$gte": 0}}
    assert filters.price_range() == {}


@pytest.mark.unit
def test_by_categories():
    assert filters.by_categories([]) == {}
    assert filters.by_categories(["cars"]) == {"categories": {"slug": {"$eq": "cars"}}}
    assert filters.by_categories(["cars", "bikes"]) == {
        "$or": [
            {"categories": {"slug": {"$eq": "cars"}}},
            {"categories": {"slug": {"$eq": "bikes"}}},
        ]
    }


@pytest.mark.unit
def test_by_attribute_value():
    assert filters.by_attribute_value("color", "red") == {
        "product_attribute_values": {
            "attribute": {"name": {"$eq": "color"}},
            "value": {"$eq": "red"},
        }
    }


@pytest.mark.unit
def test_create_sort():
    assert create_sort("price") == "price:asc"
    assert create_sort("createdAt", "desc") == "createdAt:desc"


@pytest.mark.unit
def test_convert_sort_is_total():
    for option, expected in LISTING_SORT_OPTIONS.items():
        assert convert_sort(option) == expected
    assert convert_sort(None) == "createdAt:desc"
    assert convert_sort("") == "createdAt:desc"
    assert convert_sort("unknown") == "createdAt:desc"
