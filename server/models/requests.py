from pydantic import BaseModel, Field

from shared.models.attribute import AttributeValue
from shared.models.filter import FilterOperator


class AttributeFilterRequest(BaseModel):
    document_id: str
    name: str
    value: AttributeValue = None
    operator: FilterOperator = "eq"


class ListingSearchRequest(BaseModel):
    category: str | None = None
    subcategory: str | None = None
    subcategories: list[str] | None = None
    search: str | None = None
    address: str | None = None
    sort: str | None = None
    price_min: float | None = None
    price_max: float | None = None
    attributes: list[AttributeFilterRequest] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class AttributeValidationRequest(BaseModel):
    category_slugs: list[str]
    values: dict[str, AttributeValue] = Field(default_factory=dict)
