"""Generic marketplace listing models, backend-independent."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from shared.models.category import CategoryDetails


class ListingStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DRAFT = "DRAFT"
    SOLD = "SOLD"
    ARCHIVED = "ARCHIVED"


class ListingType(str, Enum):
    RENT = "rent"
    SALE = "sale"
    FREE = "free"


class ListingImage(BaseModel):
    id: str
    url: str
    name: str | None = None
    alternative_text: str | None = None
    width: int | None = None
    height: int | None = None


class CategoryRef(BaseModel):
    """A category as it is embedded in a listing, with its parent slug if populated."""
    id: str
    document_id: str
    slug: str
    name: str
    parent_slug: str | None = None


class ListingAttributeValue(BaseModel):
    attribute_document_id: str | None = None
    attribute_name: str
    value: str | None = None


class Listing(BaseModel):
    """
    Represents a single marketplace listing, as returned by a CMS client.
    """
    engine: str
    id: str
    document_id: str
    title: str
    description: str | None = None
    price: float | None = None
    address: str | None = None
    slug: str
    status: ListingStatus = ListingStatus.ACTIVE
    type: ListingType = ListingType.SALE
    images: list[ListingImage] = Field(default_factory=list)
    categories: list[CategoryRef] = Field(default_factory=list)
    attribute_values: list[ListingAttributeValue] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Pagination(BaseModel):
    page: int = 1
    page_size: int = 0
    page_count: int = 1
    total: int = 0


class ListingsListResponse(BaseModel):
    """
    Represents the response from a CMS when fetching a page of listings.
    """
    engine: str
    listings: list[Listing] = Field(default_factory=list)
    pagination: Pagination


class CategoriesListResponse(BaseModel):
    """
    Represents the response from a CMS when fetching a page of categories.
    """
    engine: str
    categories: list[CategoryDetails] = Field(default_factory=list)
    pagination: Pagination
