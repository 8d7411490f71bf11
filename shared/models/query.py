"""Backend query parameters produced by the Strapi filter adapter."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AttributeFilter(BaseModel):
    attribute: str
    value: str
    operator: Literal["and", "or"] = "and"


class PriceRange(BaseModel):
    gte: float | int | None = None
    lte: float | int | None = None


class ListingFilterParams(BaseModel):
    """
    Plain parameter object ready to be turned into a listings request.

    Unset keys are left out of to_query_dict(), so an empty attribute filter
    list or a cleared category never reaches the backend.
    """
    model_config = ConfigDict(populate_by_name=True)

    page: int = 1
    page_size: int = Field(default=20, alias="pageSize")
    sort: str | None = None
    search: str | None = None
    address: str | None = None
    category: str | None = None
    sub_categories: list[str] | None = Field(default=None, alias="subCategories")
    attribute_filters: list[AttributeFilter] | None = Field(default=None, alias="attributeFilters")
    price: PriceRange | None = None

    def to_query_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
