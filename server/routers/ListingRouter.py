from fastapi import APIRouter, Request

from shared.models.listing import Listing
from server.models.requests import AttributeValidationRequest, ListingSearchRequest
from server.models.responses import AttributeValidationResponse, ListingSearchResponse

router = APIRouter(prefix="/listings", tags=["listings"])


@router.post("/search")
async def search_listings(request: Request, body: ListingSearchRequest) -> ListingSearchResponse:
    """Search listings with category, text, price and attribute filters.

    Args:
        request (Request): FastAPI request (provides app.state.listing_query_service).
        body (ListingSearchRequest): JSON body with the filters and pagination.

    Returns:
        ListingSearchResponse: Matching listings, pagination and the query sent to the CMS.
    """
    listing_query_service = request.app.state.listing_query_service
    return await listing_query_service.search(body)


@router.post("/attributes/validate")
async def validate_listing_attributes(request: Request, body: AttributeValidationRequest) -> AttributeValidationResponse:
    listing_query_service = request.app.state.listing_query_service
    return await listing_query_service.validate_attributes(body)


@router.get("/{slug}")
async def get_listing(request: Request, slug: str) -> Listing:
    listing_query_service = request.app.state.listing_query_service
    return await listing_query_service.get_listing_by_slug(slug)
