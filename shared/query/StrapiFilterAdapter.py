"""Converts FilterManager state into Strapi listing query parameters."""

from shared.models.filter import FilterDefinition
from shared.models.query import AttributeFilter, ListingFilterParams, PriceRange
from shared.query.FilterManager import (
    ADDRESS,
    CATEGORY,
    PRICE_RANGE,
    SEARCH,
    SORT,
    SUBCATEGORIES,
    SUBCATEGORY,
    FilterManager,
)
from shared.query.sort import convert_sort


def to_strapi_query(
    filter_manager: FilterManager,
    page: int = 1,
    page_size: int = 20,
    include_price_range: bool = True,
) -> ListingFilterParams:
    """
    Translate the active filters into listing query parameters.

    A single subcategory becomes a one-element sub_categories list because the
    backend only accepts a list. Attribute filters on a multi-select value emit
    one "or" entry per selected option; distinct attributes combine with "and".

    Args:
        filter_manager (FilterManager): The filters to translate.
        page (int): Requested page.
        page_size (int): Requested page size.
        include_price_range (bool): Translate the price_range filter into price bounds.
            When False the price range is dropped.

    Returns:
        ListingFilterParams: Parameters with unset keys left as None.
    """
    params = ListingFilterParams(page=page, page_size=page_size)
    attribute_filters: list[AttributeFilter] = []

    for filter_id, definition in filter_manager.get_filters().items():
        if filter_id == SORT:
            params.sort = convert_sort(str(definition.value))
        elif filter_id == SEARCH:
            params.search = str(definition.value)
        elif filter_id == ADDRESS:
            params.address = str(definition.value)
        elif filter_id == CATEGORY:
            params.category = str(definition.value)
        elif filter_id == SUBCATEGORY:
            params.sub_categories = [str(definition.value)]
        elif filter_id == SUBCATEGORIES:
            params.sub_categories = list(definition.value)
        elif filter_id == PRICE_RANGE:
            if include_price_range:
                minimum, maximum = definition.value
                params.price = PriceRange(gte=minimum, lte=maximum)
        elif definition.is_attribute_filter:
            attribute_filters.extend(_to_attribute_filters(definition))

    if attribute_filters:
        params.attribute_filters = attribute_filters
    return params


def _to_attribute_filters(definition: FilterDefinition) -> list[AttributeFilter]:
    if definition.value_type == "multi-select" or isinstance(definition.value, list):
        return [
            AttributeFilter(attribute=definition.field, value=str(value), operator="or")
            for value in definition.value
        ]
    operator = "or" if definition.operator == "or" else "and"
    return [AttributeFilter(attribute=definition.field, value=_stringify(definition.value), operator=operator)]


def _stringify(value) -> str:
    # booleans are stored by the CMS as "true"/"false"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
