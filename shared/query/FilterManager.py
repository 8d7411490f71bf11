"""Keyed collection of the search/browse constraints selected by a user."""

from datetime import date, datetime

import pytz

from shared.models.attribute import AttributeValue
from shared.models.filter import FilterDefinition, FilterOperator, FilterValue, FilterValueType

# Largest integer a JavaScript client can represent exactly; upper bound of an open price range.
MAX_SAFE_INTEGER = 2**53 - 1

# reserved filter ids, every other id is an attribute documentId
CATEGORY = "category"
SUBCATEGORY = "subcategory"
SUBCATEGORIES = "subcategories"
PRICE_RANGE = "price_range"
SORT = "sort"
SEARCH = "search"
ADDRESS = "address"
RESERVED_FILTER_IDS = (CATEGORY, SUBCATEGORY, SUBCATEGORIES, PRICE_RANGE, SORT, SEARCH, ADDRESS)


class FilterManager:
    """
    Holds the active filters as a mapping of filter id -> FilterDefinition.

    Every setter returns the manager so calls can be chained. Setting an empty
    value removes the filter instead of storing an empty entry.

    The manager is meant to be owned by a single request or session; add,
    remove and update are not atomic as a set, so it must not be shared between
    threads without a lock.
    """

    def __init__(self) -> None:
        self._filters: dict[str, FilterDefinition] = {}

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_filters(self) -> dict[str, FilterDefinition]:
        """Returns a copy; changes to it do not affect the manager."""
        return dict(self._filters)

    def get_filter(self, filter_id: str) -> FilterDefinition | None:
        return self._filters.get(filter_id)

    def __len__(self) -> int:
        return len(self._filters)

    def __contains__(self, filter_id: str) -> bool:
        return filter_id in self._filters

    ##########################################
    ############### MUTATION #################
    ##########################################

    def add_filter(self, filter_id: str, definition: FilterDefinition) -> "FilterManager":
        self._filters[filter_id] = definition
        return self

    def remove_filter(self, filter_id: str) -> "FilterManager":
        self._filters.pop(filter_id, None)
        return self

    def update_filter(self, filter_id: str, updates: dict) -> "FilterManager":
        """Merge updates into an existing filter. Unknown ids are ignored."""
        existing = self._filters.get(filter_id)
        if existing is not None:
            self._filters[filter_id] = existing.model_copy(update=updates)
        return self

    def clear_filters(self) -> "FilterManager":
        self._filters.clear()
        return self

    ##########################################
    ########### ATTRIBUTE FILTERS ############
    ##########################################

    def add_attribute_filter(
        self,
        attribute_document_id: str,
        attribute_name: str,
        value: AttributeValue,
        operator: FilterOperator = "eq",
    ) -> "FilterManager":
        """
        Add or replace the filter for one category attribute.

        The filter is keyed by the attribute documentId, so there is at most one
        active filter per attribute no matter how often the same control fires.

        Args:
            attribute_document_id (str): documentId of the attribute, used as filter id.
            attribute_name (str): Attribute name the backend filters on.
            value (AttributeValue): Selected value. None, "" and [] remove the filter.
            operator (FilterOperator): Comparison operator, "eq" by default.

        Returns:
            FilterManager: self
        """
        if value is None or value == "" or (isinstance(value, (list, tuple)) and len(value) == 0):
            return self.remove_filter(attribute_document_id)

        value_type, filter_value = self._tag_value(value)
        return self.add_filter(
            attribute_document_id,
            FilterDefinition(
                field=attribute_name,
                operator=operator,
                value=filter_value,
                value_type=value_type,
                is_attribute_filter=True,
            ),
        )

    @staticmethod
    def _tag_value(value: AttributeValue) -> tuple[FilterValueType, FilterValue]:
        # bool before number, bool is an int subclass
        if isinstance(value, bool):
            return "boolean", value
        if isinstance(value, (int, float)):
            return "number", value
        if isinstance(value, (datetime, date)):
            return "date", to_iso_string(value)
        if isinstance(value, (list, tuple)):
            return "multi-select", [str(v) for v in value]
        return "text", str(value)

    ##########################################
    ############ RESERVED FILTERS ############
    ##########################################

    def set_category_filter(self, category_slug: str | None) -> "FilterManager":
        if category_slug:
            return self.add_filter(CATEGORY, FilterDefinition(field="category", operator="eq", value=category_slug))
        return self.remove_filter(CATEGORY)

    def set_subcategory_filter(self, subcategory_slug: str | None) -> "FilterManager":
        if subcategory_slug:
            return self.add_filter(SUBCATEGORY, FilterDefinition(field="subcategory", operator="eq", value=subcategory_slug))
        return self.remove_filter(SUBCATEGORY)

    def set_subcategories_filter(self, subcategory_slugs: list[str] | None) -> "FilterManager":
        if subcategory_slugs:
            return self.add_filter(
                SUBCATEGORIES,
                FilterDefinition(field="subcategories", operator="in", value=list(subcategory_slugs)),
            )
        return self.remove_filter(SUBCATEGORIES)

    def set_price_range_filter(self, minimum: float | int | None, maximum: float | int | None) -> "FilterManager":
        """Store a price range. A missing bound is replaced by 0 or MAX_SAFE_INTEGER; no bounds clears it."""
        if minimum is not None or maximum is not None:
            return self.add_filter(
                PRICE_RANGE,
                FilterDefinition(
                    field="price",
                    operator="between",
                    value=[minimum if minimum is not None else 0, maximum if maximum is not None else MAX_SAFE_INTEGER],
                    value_type="number",
                ),
            )
        return self.remove_filter(PRICE_RANGE)

    def set_sort_filter(self, sort_option: str | None) -> "FilterManager":
        if sort_option:
            return self.add_filter(SORT, FilterDefinition(field="sort", operator="eq", value=sort_option))
        return self.remove_filter(SORT)

    def set_search_filter(self, search_term: str | None) -> "FilterManager":
        term = search_term.strip() if search_term else ""
        if term:
            return self.add_filter(SEARCH, FilterDefinition(field="search", operator="contains", value=term))
        return self.remove_filter(SEARCH)

    def set_address_filter(self, address: str | None) -> "FilterManager":
        address = address.strip() if address else ""
        if address:
            return self.add_filter(ADDRESS, FilterDefinition(field="address", operator="containsi", value=address))
        return self.remove_filter(ADDRESS)

    def apply_initial_filters(
        self,
        category_slug: str | None = None,
        subcategory_slug: str | None = None,
        subcategory_slugs: list[str] | None = None,
        search: str | None = None,
        address: str | None = None,
        sort_option: str | None = None,
        price_min: float | int | None = None,
        price_max: float | int | None = None,
        attribute_values: dict[str, tuple[str, AttributeValue]] | None = None,
    ) -> "FilterManager":
        """
        Hydrate the manager from request/URL parameters. Only given values are applied.

        Args:
            attribute_values (dict[str, tuple[str, AttributeValue]] | None): documentId -> (attribute name, value).
        """
        if category_slug:
            self.set_category_filter(category_slug)
        if subcategory_slug:
            self.set_subcategory_filter(subcategory_slug)
        if subcategory_slugs:
            self.set_subcategories_filter(subcategory_slugs)
        if search:
            self.set_search_filter(search)
        if address:
            self.set_address_filter(address)
        if sort_option:
            self.set_sort_filter(sort_option)
        if price_min is not None or price_max is not None:
            self.set_price_range_filter(price_min, price_max)
        for document_id, (attribute_name, value) in (attribute_values or {}).items():
            self.add_attribute_filter(document_id, attribute_name, value)
        return self


def to_iso_string(value: datetime | date) -> str:
    """Serialize a date/datetime as a UTC ISO-8601 string with milliseconds, e.g. 2024-05-01T10:00:00.000Z."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    value = value.astimezone(pytz.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
