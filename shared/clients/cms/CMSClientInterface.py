from abc import abstractmethod

from shared.helper.HelperConfig import HelperConfig
from shared.helper.errors import NotFoundError
from shared.clients.ClientInterface import ClientInterface
from shared.models.category import CategoryDetails
from shared.models.listing import CategoriesListResponse, Listing, ListingsListResponse, ListingStatus
from shared.models.query import ListingFilterParams


class CMSClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "cms"
        """
        return "cms"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_categories(self) -> str:
        """
        Returns the endpoint path for category listing requests (e.g. "/api/categories").
        """
        pass

    @abstractmethod
    def _get_endpoint_category_details(self, category_id: str) -> str:
        """
        Returns the endpoint path for a single category (e.g. "/api/categories/{id}").
        """
        pass

    @abstractmethod
    def _get_endpoint_listings(self) -> str:
        """
        Returns the endpoint path for listing requests (e.g. "/api/listings").
        """
        pass

    @abstractmethod
    def _get_endpoint_listing_details(self, listing_id: str) -> str:
        """
        Returns the endpoint path for a single listing (e.g. "/api/listings/{documentId}").
        """
        pass

    ##########################################
    ############ PARAMS BUILDER ##############
    ##########################################

    @abstractmethod
    def get_categories_params(self, page: int = 1, page_size: int | None = None, sort: str | None = None, filters: dict | None = None) -> list[tuple[str, str]]:
        """
        Builds the query parameters for a category list request, including the populate settings
        needed to read children and attributes.

        Args:
            page (int): Requested page.
            page_size (int | None): Requested page size, the client default if None.
            sort (str | None): Sort string in "field:direction" format.
            filters (dict | None): Backend filter tree.

        Returns:
            list[tuple[str, str]]: Query parameters.
        """
        pass

    @abstractmethod
    def get_category_by_slug_params(self, slug: str) -> list[tuple[str, str]]:
        """
        Builds the query parameters for looking up one category by slug. The lookup is a filtered
        list query since the backend indexes categories by id.
        """
        pass

    @abstractmethod
    def get_category_details_params(self) -> list[tuple[str, str]]:
        """
        Builds the query parameters for a single category request.
        """
        pass

    @abstractmethod
    def get_listings_params(self, params: ListingFilterParams) -> list[tuple[str, str]]:
        """
        Builds the query parameters for a listing search from adapter output.

        Args:
            params (ListingFilterParams): Pagination, sort and filters produced by the filter adapter.

        Returns:
            list[tuple[str, str]]: Query parameters.
        """
        pass

    @abstractmethod
    def get_listing_by_slug_params(self, slug: str) -> list[tuple[str, str]]:
        """
        Builds the query parameters for looking up one listing by slug.
        """
        pass

    @abstractmethod
    def get_listing_details_params(self) -> list[tuple[str, str]]:
        """
        Builds the query parameters for a single listing request.
        """
        pass

    @abstractmethod
    def get_listing_payload(self, data: dict) -> dict:
        """
        Wraps listing fields into the request body the backend expects on create/update.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    ############# CATEGORY REQUESTS ##############
    async def do_fetch_categories(self, page: int = 1, page_size: int | None = None, sort: str | None = None, filters: dict | None = None) -> CategoriesListResponse:
        """
        Fetches one page of categories from the cms backend.

        Returns:
            CategoriesListResponse: The categories and pagination info.

        Raises:
            TransportError: If the backend answers with a non-2xx status.
        """
        response = await self.do_request_json(
            method="GET",
            endpoint=self._get_endpoint_categories(),
            params=self.get_categories_params(page=page, page_size=page_size, sort=sort, filters=filters),
        )
        return self._parse_endpoint_categories(response)

    async def do_fetch_root_categories(self) -> list[CategoryDetails]:
        """
        Fetches all categories without a parent, following pagination until the last page.

        Returns:
            list[CategoryDetails]: The root categories with their children.
        """
        categories: list[CategoryDetails] = []
        page = 1
        while True:
            categories_list_response = await self.do_fetch_categories(page=page, filters=self.get_root_categories_filter())
            categories.extend(categories_list_response.categories)
            pagination = categories_list_response.pagination
            self.logging.debug("Fetched root categories page %d of %d from %s, total so far: %d of %d", page, pagination.page_count, self._get_engine_name(), len(categories), pagination.total)
            if page >= pagination.page_count:
                break
            page += 1
        return categories

    @abstractmethod
    def get_root_categories_filter(self) -> dict:
        """
        Returns the filter tree selecting categories without a parent.
        """
        pass

    async def do_fetch_category_by_slug(self, slug: str) -> CategoryDetails:
        """
        Fetches one category with its direct children and attributes.

        Args:
            slug (str): The category slug.

        Returns:
            CategoryDetails: The first match.

        Raises:
            NotFoundError: If no category has the slug.
            TransportError: If the backend answers with a non-2xx status.
        """
        response = await self.do_request_json(
            method="GET",
            endpoint=self._get_endpoint_categories(),
            params=self.get_category_by_slug_params(slug),
        )
        categories_list_response = self._parse_endpoint_categories(response)
        if not categories_list_response.categories:
            raise NotFoundError("category", slug)
        return categories_list_response.categories[0]

    async def do_fetch_category_by_id(self, category_id: str) -> CategoryDetails:
        response = await self.do_request_json(
            method="GET",
            endpoint=self._get_endpoint_category_details(category_id),
            params=self.get_category_details_params(),
        )
        return self._parse_endpoint_category(self._extract_single_item(response))

    ############# LISTING REQUESTS ##############
    async def do_fetch_listings(self, params: ListingFilterParams) -> ListingsListResponse:
        """
        Fetches one page of listings matching the given filter parameters.

        Args:
            params (ListingFilterParams): Output of the filter adapter.

        Returns:
            ListingsListResponse: The listings and pagination info.

        Raises:
            TransportError: If the backend answers with a non-2xx status.
        """
        response = await self.do_request_json(
            method="GET",
            endpoint=self._get_endpoint_listings(),
            params=self.get_listings_params(params),
        )
        listings_list_response = self._parse_endpoint_listings(response)
        self.logging.debug("Fetched %d listing(s) from %s, page %d of %d", len(listings_list_response.listings), self._get_engine_name(), listings_list_response.pagination.page, listings_list_response.pagination.page_count)
        return listings_list_response

    async def do_fetch_listing_by_id(self, listing_id: str) -> Listing:
        response = await self.do_request_json(
            method="GET",
            endpoint=self._get_endpoint_listing_details(listing_id),
            params=self.get_listing_details_params(),
        )
        return self._parse_endpoint_listing(self._extract_single_item(response))

    async def do_fetch_listing_by_slug(self, slug: str) -> Listing:
        """
        Fetches one listing by slug.

        Raises:
            NotFoundError: If no listing has the slug.
            TransportError: If the backend answers with a non-2xx status.
        """
        response = await self.do_request_json(
            method="GET",
            endpoint=self._get_endpoint_listings(),
            params=self.get_listing_by_slug_params(slug),
        )
        listings_list_response = self._parse_endpoint_listings(response)
        if not listings_list_response.listings:
            raise NotFoundError("listing", slug)
        return listings_list_response.listings[0]

    async def do_create_listing(self, data: dict) -> Listing:
        response = await self.do_request_json(
            method="POST",
            endpoint=self._get_endpoint_listings(),
            json=self.get_listing_payload(data),
        )
        listing = self._parse_endpoint_listing(self._extract_single_item(response))
        self.logging.info("Created listing '%s' (%s) in %s", listing.title, listing.document_id, self._get_engine_name())
        return listing

    async def do_update_listing(self, listing_id: str, data: dict) -> Listing:
        response = await self.do_request_json(
            method="PUT",
            endpoint=self._get_endpoint_listing_details(listing_id),
            json=self.get_listing_payload(data),
        )
        return self._parse_endpoint_listing(self._extract_single_item(response))

    async def do_update_listing_status(self, listing_id: str, status: ListingStatus) -> Listing:
        """Move a listing to another lifecycle status (e.g. ACTIVE -> SOLD)."""
        self.logging.info("Setting status of listing %s to %s", listing_id, status.value)
        return await self.do_update_listing(listing_id, {"status": status.value})

    async def do_delete_listing(self, listing_id: str) -> None:
        """Hard-delete a listing in the backend."""
        await self.do_request_json(
            method="DELETE",
            endpoint=self._get_endpoint_listing_details(listing_id),
        )
        self.logging.info("Deleted listing %s from %s", listing_id, self._get_engine_name())

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _extract_single_item(self, response: dict) -> dict:
        """
        Returns the raw item of a single-object response.
        """
        pass

    @abstractmethod
    def _parse_endpoint_categories(self, response: dict) -> CategoriesListResponse:
        """
        Parses the response of the category list endpoint.

        Args:
            response (dict): The raw response.

        Returns:
            CategoriesListResponse: The parsed categories and pagination info.
        """
        pass

    @abstractmethod
    def _parse_endpoint_category(self, response: dict) -> CategoryDetails:
        """
        Parses one raw category, including nested children and attributes.
        """
        pass

    @abstractmethod
    def _parse_endpoint_listings(self, response: dict) -> ListingsListResponse:
        """
        Parses the response of the listing list endpoint.
        """
        pass

    @abstractmethod
    def _parse_endpoint_listing(self, response: dict) -> Listing:
        """
        Parses one raw listing.
        """
        pass
