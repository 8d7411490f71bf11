"""Tests for the Strapi CMS client against a mocked transport."""

import json

import httpx
import pytest

from shared.clients.cms.strapi.CMSClientStrapi import CMSClientStrapi
from shared.helper.errors import NotFoundError, TransportError
from shared.models.listing import ListingStatus, ListingType
from shared.models.query import AttributeFilter, ListingFilterParams, PriceRange
from tests.utils.factories import strapi_attribute, strapi_category, strapi_list, strapi_listing


def make_transport(handler, seen: list | None = None) -> httpx.MockTransport:
    """MockTransport that records every request before answering it."""
    def _handle(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return handler(request)
    return httpx.MockTransport(_handle)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_category_by_slug_filters_by_slug(helper_config):
    seen = []
    category = strapi_category(2, "cars", "Cars", attributes=[strapi_attribute(11, "color", "select", options=["red"])])
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json=strapi_list([category])), seen))

    result = await client.do_fetch_category_by_slug("cars")

    assert result.slug == "cars"
    assert result.attributes[0].options == ["red"]
    assert seen[0].url.path == "/api/categories"
    assert seen[0].url.params["filters[slug][$eq]"] == "cars"
    assert seen[0].headers["Authorization"] == "Bearer test-token"
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_category_by_slug_raises_not_found(helper_config):
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json={"data": [], "meta": {}})))

    with pytest.raises(NotFoundError) as exc_info:
        await client.do_fetch_category_by_slug("ghost")

    assert str(exc_info.value) == "Category with slug 'ghost' not found"
    assert exc_info.value.slug == "ghost"
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_listing_by_slug_raises_not_found(helper_config):
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json={"data": []})))

    with pytest.raises(NotFoundError, match="Listing with slug 'vw-golf' not found"):
        await client.do_fetch_listing_by_slug("vw-golf")
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_non_success_status_raises_transport_error(helper_config):
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(500, text="upstream exploded")))

    with pytest.raises(TransportError) as exc_info:
        await client.do_fetch_listings(ListingFilterParams())

    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "upstream exploded"
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_pagination_falls_back_to_single_page(helper_config):
    listings = [strapi_listing(1, "vw-golf", "VW Golf", 9500), strapi_listing(2, "bmw-3", "BMW 3", 12000)]
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json={"data": listings})))

    result = await client.do_fetch_listings(ListingFilterParams())

    assert result.pagination.model_dump() == {"page": 1, "page_size": 2, "page_count": 1, "total": 2}
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_listing_is_parsed(helper_config):
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json=strapi_list([strapi_listing(1, "vw-golf", "VW Golf", 9500)]))))

    listing = (await client.do_fetch_listings(ListingFilterParams())).listings[0]

    assert listing.engine == "Strapi"
    assert listing.id == "1"
    assert listing.document_id == "lst-vw-golf"
    assert listing.price == 9500
    assert listing.status == ListingStatus.ACTIVE
    assert listing.type == ListingType.SALE
    assert listing.images[0].url == "http://cms.test/uploads/car.jpg"
    assert listing.categories[0].parent_slug == "vehicles"
    assert listing.attribute_values[0].attribute_name == "color"
    assert listing.attribute_values[0].value == "red"
    assert listing.created_at.year == 2024
    assert listing.created_at.utcoffset().total_seconds() == 0
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_root_categories_follows_pagination(helper_config):
    pages = {
        "1": strapi_list([strapi_category(1, "vehicles", "Vehicles")], page=1, page_count=2, total=2),
        "2": strapi_list([strapi_category(5, "furniture", "Furniture")], page=2, page_count=2, total=2),
    }
    seen = []
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json=pages[request.url.params["pagination[page]"]]), seen))

    categories = await client.do_fetch_root_categories()

    assert [category.slug for category in categories] == ["vehicles", "furniture"]
    assert len(seen) == 2
    assert seen[0].url.params["filters[parent][id][$null]"] == "true"
    assert seen[0].url.params["pagination[pageSize]"] == "25"
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_category_parent_and_children_are_parsed(helper_config):
    payload = strapi_category(
        2,
        "cars",
        "Cars",
        parent={"id": 1, "documentId": "cat-vehicles", "slug": "vehicles", "name": "Vehicles"},
        categories=[strapi_category(4, "suv", "SUV")],
    )
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json=strapi_list([payload]))))

    category = await client.do_fetch_category_by_slug("cars")

    assert category.parent.slug == "vehicles"
    assert [child.slug for child in category.categories] == ["suv"]
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_listing_status_sends_data_wrapper(helper_config):
    seen = []
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json={"data": strapi_listing(1, "vw-golf", "VW Golf", status="sold")}), seen))

    listing = await client.do_update_listing_status("lst-vw-golf", ListingStatus.SOLD)

    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/api/listings/lst-vw-golf"
    assert json.loads(seen[0].read()) == {"data": {"status": "SOLD"}}
    assert listing.status == ListingStatus.SOLD
    await client.close()


@pytest.mark.unit
def test_build_attribute_conditions_groups_or_values(helper_config):
    client = CMSClientStrapi(helper_config=helper_config)
    attribute_filters = [
        AttributeFilter(attribute="color", value="red", operator="or"),
        AttributeFilter(attribute="color", value="blue", operator="or"),
        AttributeFilter(attribute="fuel", value="diesel", operator="and"),
    ]

    conditions = client.build_attribute_conditions(attribute_filters)

    assert conditions == [
        {"$or": [
            {"product_attribute_values": {"attribute": {"name": {"$eq": "color"}}, "value": {"$eq": "red"}}},
            {"product_attribute_values": {"attribute": {"name": {"$eq": "color"}}, "value": {"$eq": "blue"}}},
        ]},
        {"product_attribute_values": {"attribute": {"name": {"$eq": "fuel"}}, "value": {"$eq": "diesel"}}},
    ]


@pytest.mark.unit
def test_build_attribute_conditions_single_or_value_is_not_wrapped(helper_config):
    client = CMSClientStrapi(helper_config=helper_config)

    conditions = client.build_attribute_conditions([AttributeFilter(attribute="color", value="red", operator="or")])

    assert conditions == [{"product_attribute_values": {"attribute": {"name": {"$eq": "color"}}, "value": {"$eq": "red"}}}]


@pytest.mark.unit
def test_build_listing_filters_combines_everything(helper_config):
    client = CMSClientStrapi(helper_config=helper_config)
    params = ListingFilterParams(
        category="vehicles",
        sub_categories=["cars"],
        search="golf",
        address="Berlin",
        price=PriceRange(gte=100, lte=500),
    )

    assert client.build_listing_filters(params) == [
        {"categories": {"slug": {"$eq": "vehicles"}}},
        {"categories": {"slug": {"$eq": "cars"}}},
        {"$or": [{"title": {"$containsi": "golf"}}, {"description": {"$containsi": "golf"}}]},
        {"address": {"$containsi": "Berlin"}},
        {"price": {"$gte": 100, "$lte": 500}},
    ]


@pytest.mark.unit
def test_get_listings_params_without_filters(helper_config):
    client = CMSClientStrapi(helper_config=helper_config)

    params = client.get_listings_params(ListingFilterParams(page=2, page_size=10, sort="price:asc"))

    assert params[:3] == [("pagination[page]", "2"), ("pagination[pageSize]", "10"), ("sort[0]", "price:asc")]
    assert not any(key.startswith("filters") for key, _ in params)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_listing_posts_data_wrapper(helper_config):
    seen = []
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(201, json={"data": strapi_listing(3, "vw-polo", "VW Polo", 7000)}), seen))

    listing = await client.do_create_listing({"title": "VW Polo", "price": 7000})

    assert seen[0].method == "POST"
    assert seen[0].url.path == "/api/listings"
    assert json.loads(seen[0].read()) == {"data": {"title": "VW Polo", "price": 7000}}
    assert listing.slug == "vw-polo"
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_listing_puts_data_wrapper(helper_config):
    seen = []
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json={"data": strapi_listing(3, "vw-polo", "VW Polo", 6500)}), seen))

    listing = await client.do_update_listing("lst-vw-polo", {"price": 6500})

    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/api/listings/lst-vw-polo"
    assert json.loads(seen[0].read()) == {"data": {"price": 6500}}
    assert listing.price == 6500
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_listing(helper_config):
    seen = []
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(204), seen))

    assert await client.do_delete_listing("lst-vw-polo") is None

    assert seen[0].method == "DELETE"
    assert seen[0].url.path == "/api/listings/lst-vw-polo"
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_listing_raises_transport_error(helper_config):
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(404, text="Not Found")))

    with pytest.raises(TransportError) as exc_info:
        await client.do_delete_listing("lst-ghost")

    assert exc_info.value.status_code == 404
    assert exc_info.value.url == "http://cms.test/api/listings/lst-ghost"
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_listing_by_id(helper_config):
    seen = []
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json={"data": strapi_listing(1, "vw-golf", "VW Golf", 9500)}), seen))

    listing = await client.do_fetch_listing_by_id("lst-vw-golf")

    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/listings/lst-vw-golf"
    assert seen[0].url.params["populate[images]"] == "true"
    assert listing.title == "VW Golf"
    await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_category_by_id(helper_config):
    seen = []
    payload = strapi_category(2, "cars", "Cars", categories=[strapi_category(4, "suv", "SUV")])
    client = CMSClientStrapi(helper_config=helper_config)
    await client.boot(transport=make_transport(lambda request: httpx.Response(200, json={"data": payload}), seen))

    category = await client.do_fetch_category_by_id("cat-cars")

    assert seen[0].url.path == "/api/categories/cat-cars"
    assert seen[0].url.params["populate[parent]"] == "true"
    assert category.slug == "cars"
    assert [child.slug for child in category.categories] == ["suv"]
    await client.close()
