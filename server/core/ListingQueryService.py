from services.category.CategoryService import CategoryService
from shared.attributes.attribute_utils import validate_attribute_value
from shared.clients.cms.CMSClientInterface import CMSClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.listing import Listing
from shared.query.FilterManager import FilterManager
from shared.query.StrapiFilterAdapter import to_strapi_query
from server.models.requests import AttributeValidationRequest, ListingSearchRequest
from server.models.responses import AttributeValidationResponse, ListingSearchResponse


class ListingQueryService:
    """Handles listing searches: request -> FilterManager -> query params -> CMS."""

    def __init__(
        self,
        helper_config: HelperConfig,
        cms_client: CMSClientInterface,
        category_service: CategoryService,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._cms_client = cms_client
        self._category_service = category_service
        # the price range filter is only forwarded to the CMS when enabled
        self._include_price_range = helper_config.get_bool_val("LISTINGS_INCLUDE_PRICE_RANGE", default=True)

    ##########################################
    ############### CORE #####################
    ##########################################

    def build_filter_manager(self, request: ListingSearchRequest) -> FilterManager:
        """Build a request-scoped FilterManager from a search request."""
        filter_manager = FilterManager().apply_initial_filters(
            category_slug=request.category,
            subcategory_slug=request.subcategory,
            subcategory_slugs=request.subcategories,
            search=request.search,
            address=request.address,
            sort_option=request.sort,
            price_min=request.price_min,
            price_max=request.price_max,
        )
        for attribute in request.attributes:
            filter_manager.add_attribute_filter(attribute.document_id, attribute.name, attribute.value, attribute.operator)
        return filter_manager

    async def search(self, request: ListingSearchRequest) -> ListingSearchResponse:
        """Search listings matching the request filters.

        Args:
            request (ListingSearchRequest): Filters and pagination.

        Returns:
            ListingSearchResponse: The listings page and the query sent to the CMS.
        """
        filter_manager = self.build_filter_manager(request)
        params = to_strapi_query(
            filter_manager,
            page=request.page,
            page_size=request.page_size,
            include_price_range=self._include_price_range,
        )
        self.logging.info("ListingQueryService.search: %d active filter(s), page=%d", len(filter_manager), request.page)

        listings_list_response = await self._cms_client.do_fetch_listings(params)

        self.logging.info("ListingQueryService.search: returning %d listing(s) of %d.", len(listings_list_response.listings), listings_list_response.pagination.total)
        return ListingSearchResponse(
            listings=listings_list_response.listings,
            pagination=listings_list_response.pagination,
            query=params.to_query_dict(),
        )

    async def get_listing_by_slug(self, slug: str) -> Listing:
        return await self._cms_client.do_fetch_listing_by_slug(slug)

    async def validate_attributes(self, request: AttributeValidationRequest) -> AttributeValidationResponse:
        """
        Validate attribute values entered for a listing against the attributes of its categories.

        Values are checked as sent: a missing attribute counts as empty, type defaults are not filled in.
        """
        definitions = await self._category_service.get_attributes_for_categories(request.category_slugs)
        errors: dict[str, str] = {}
        for definition in definitions:
            error = validate_attribute_value(request.values.get(definition.document_id), definition)
            if error:
                errors[definition.document_id] = error
        return AttributeValidationResponse(valid=not errors, errors=errors)
