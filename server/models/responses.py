from pydantic import BaseModel

from shared.models.listing import Listing, Pagination


class ListingSearchResponse(BaseModel):
    listings: list[Listing]
    pagination: Pagination
    query: dict


class AttributeValidationResponse(BaseModel):
    valid: bool
    errors: dict[str, str]
