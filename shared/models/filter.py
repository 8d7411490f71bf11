"""Filter definitions held by the FilterManager."""

from typing import Literal

from pydantic import BaseModel

FilterOperator = Literal[
    "eq",
    "ne",
    "lt",
    "lte",
    "gt",
    "gte",
    "in",
    "notIn",
    "contains",
    "notContains",
    "containsi",
    "notContainsi",
    "null",
    "notNull",
    "between",
    "or",
    "and",
]

FilterValueType = Literal["text", "number", "boolean", "date", "multi-select"]

FilterValue = str | int | float | bool | list[str] | list[int | float] | None


class FilterDefinition(BaseModel):
    """
    A single active constraint.

    value_type tags the shape of value: "multi-select" values are lists,
    "date" values are ISO-8601 strings, "number" values are int/float (or a
    [min, max] pair for the price range) and "text" values are strings.
    """
    field: str
    operator: FilterOperator
    value: FilterValue
    value_type: FilterValueType | None = None
    is_attribute_filter: bool = False
