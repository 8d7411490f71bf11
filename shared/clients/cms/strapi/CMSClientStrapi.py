from datetime import datetime

from shared.clients.cms.CMSClientInterface import CMSClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.attribute import AttributeDefinition
from shared.models.category import CategoryDetails
from shared.models.config import EnvConfig
from shared.models.listing import (
    CategoriesListResponse,
    CategoryRef,
    Listing,
    ListingAttributeValue,
    ListingImage,
    ListingsListResponse,
    ListingStatus,
    ListingType,
    Pagination,
)
from shared.models.query import AttributeFilter, ListingFilterParams
from shared.query import filters as strapi_filters
from shared.query.StrapiQueryBuilder import StrapiQueryBuilder


class CMSClientStrapi(CMSClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._api_token = self.get_config_val("API_TOKEN", default="", val_type="string")
        self._default_page_size = int(self.get_config_val("DEFAULT_PAGE_SIZE", default=25, val_type="number"))

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Strapi"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=None),
            EnvConfig(env_key="API_TOKEN", val_type="string", default=""),
            EnvConfig(env_key="DEFAULT_PAGE_SIZE", val_type="number", default=25),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._api_token:
            return {"Authorization": f"Bearer {self._api_token}"}
        else:
            return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/_health"

    def _get_endpoint_categories(self) -> str:
        return "/api/categories"

    def _get_endpoint_category_details(self, category_id: str) -> str:
        return f"/api/categories/{category_id}"

    def _get_endpoint_listings(self) -> str:
        return "/api/listings"

    def _get_endpoint_listing_details(self, listing_id: str) -> str:
        return f"/api/listings/{listing_id}"

    def get_image_url(self, url: str | None) -> str:
        """Return an absolute URL for an uploaded file; relative upload paths are served by the CMS host."""
        if not url:
            return ""
        if url.startswith("http"):
            return url
        return f"{self._base_url.rstrip('/')}{url}"

    ##########################################
    ############ PARAMS BUILDER ##############
    ##########################################

    def get_categories_params(self, page: int = 1, page_size: int | None = None, sort: str | None = None, filters: dict | None = None) -> list[tuple[str, str]]:
        builder = StrapiQueryBuilder().paginate(page, page_size or self._default_page_size).populate(StrapiQueryBuilder.category_populate())
        if sort:
            builder.sort(sort)
        if filters:
            builder.where(filters)
        return builder.build_params()

    def get_root_categories_filter(self) -> dict:
        return {"parent": {"id": {"$null": True}}}

    def get_category_by_slug_params(self, slug: str) -> list[tuple[str, str]]:
        return StrapiQueryBuilder.for_category_by_slug(slug).build_params()

    def get_category_details_params(self) -> list[tuple[str, str]]:
        return StrapiQueryBuilder().populate(StrapiQueryBuilder.category_populate()).build_params()

    def get_listings_params(self, params: ListingFilterParams) -> list[tuple[str, str]]:
        builder = StrapiQueryBuilder().paginate(params.page, params.page_size).populate(StrapiQueryBuilder.listing_populate())
        if params.sort:
            builder.sort(params.sort)
        conditions = self.build_listing_filters(params)
        if conditions:
            builder.where({"$and": conditions})
        return builder.build_params()

    def get_listing_by_slug_params(self, slug: str) -> list[tuple[str, str]]:
        return StrapiQueryBuilder.for_listing_by_slug(slug).build_params()

    def get_listing_details_params(self) -> list[tuple[str, str]]:
        return StrapiQueryBuilder.for_listing_by_id().build_params()

    def get_listing_payload(self, data: dict) -> dict:
        return {"data": data}

    def build_listing_filters(self, params: ListingFilterParams) -> list[dict]:
        """
        Builds the conditions combined with $and for a listing search.

        Args:
            params (ListingFilterParams): Output of the filter adapter.

        Returns:
            list[dict]: The filter conditions, empty if nothing is filtered.
        """
        conditions: list[dict] = []
        if params.category:
            conditions.append(strapi_filters.by_category_slug(params.category))
        if params.sub_categories:
            conditions.append(strapi_filters.by_categories(params.sub_categories))
        if params.search:
            conditions.append(strapi_filters.any_of(
                strapi_filters.containsi("title", params.search),
                strapi_filters.containsi("description", params.search),
            ))
        if params.address:
            conditions.append(strapi_filters.containsi("address", params.address))
        if params.price:
            price = strapi_filters.price_range(params.price.gte, params.price.lte)
            if price:
                conditions.append(price)
        if params.attribute_filters:
            conditions.extend(self.build_attribute_conditions(params.attribute_filters))
        return conditions

    def build_attribute_conditions(self, attribute_filters: list[AttributeFilter]) -> list[dict]:
        """
        Groups attribute filters by attribute name.

        Several values of one attribute with operator "or" become a single $or clause, so a
        listing matches if it has any of them. Emitting them as separate conditions would AND
        them together and match nothing. Other values are emitted one condition each.
        The operator of a group is the one of its last filter.
        """
        groups: dict[str, dict] = {}
        for attribute_filter in attribute_filters:
            group = groups.setdefault(attribute_filter.attribute, {"values": [], "operator": attribute_filter.operator})
            group["values"].append(attribute_filter.value)
            group["operator"] = attribute_filter.operator

        conditions: list[dict] = []
        for attribute_name, group in groups.items():
            if group["operator"] == "or" and len(group["values"]) > 1:
                conditions.append(strapi_filters.any_of(*[strapi_filters.by_attribute_value(attribute_name, value) for value in group["values"]]))
            else:
                conditions.extend(strapi_filters.by_attribute_value(attribute_name, value) for value in group["values"])
        return conditions

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _extract_single_item(self, response: dict) -> dict:
        return response.get("data") or {}

    def _parse_pagination(self, response: dict, item_count: int) -> Pagination:
        """
        Reads meta.pagination. Responses without it are treated as a single page holding all items.
        """
        pagination = (response.get("meta") or {}).get("pagination")
        if not pagination:
            return Pagination(page=1, page_size=item_count, page_count=1, total=item_count)
        return Pagination(
            page=pagination.get("page", 1),
            page_size=pagination.get("pageSize", item_count),
            page_count=pagination.get("pageCount", 1),
            total=pagination.get("total", item_count),
        )

    ############### LIST RESPONSES ###############
    def _parse_endpoint_categories(self, response: dict) -> CategoriesListResponse:
        categories = [self._parse_endpoint_category(item) for item in response.get("data") or []]
        return CategoriesListResponse(
            engine=self._get_engine_name(),
            categories=categories,
            pagination=self._parse_pagination(response, len(categories)),
        )

    def _parse_endpoint_listings(self, response: dict) -> ListingsListResponse:
        listings = [self._parse_endpoint_listing(item) for item in response.get("data") or []]
        return ListingsListResponse(
            engine=self._get_engine_name(),
            listings=listings,
            pagination=self._parse_pagination(response, len(listings)),
        )

    ############### GET RESPONSES ###############
    def _parse_endpoint_category(self, response: dict) -> CategoryDetails:
        parent = response.get("parent")
        return CategoryDetails(
                #base
                engine=self._get_engine_name(),
                id=str(response.get("id")),
                document_id=response.get("documentId") or "",

                #details
                slug=response.get("slug") or "",
                name=response.get("name") or "",
                parent=self._parse_endpoint_category(parent) if parent else None,
                categories=[self._parse_endpoint_category(child) for child in response.get("categories") or []],
                attributes=[self._parse_attribute(attribute) for attribute in response.get("attributes") or []],
            )

    def _parse_attribute(self, response: dict) -> AttributeDefinition:
        return AttributeDefinition(
                id=str(response.get("id")),
                document_id=response.get("documentId") or "",
                name=response.get("name") or "",
                type=response.get("type") or "text",
                required=bool(response.get("required")),
                options=response.get("options") or [],
                metadata=response.get("metadata") or {},
            )

    def _parse_endpoint_listing(self, response: dict) -> Listing:
        return Listing(
                #base
                engine=self._get_engine_name(),
                id=str(response.get("id")),
                document_id=response.get("documentId") or "",

                #details
                title=response.get("title") or "",
                description=response.get("description"),
                price=response.get("price"),
                address=response.get("address"),
                slug=response.get("slug") or "",
                status=ListingStatus(str(response.get("status") or "ACTIVE").upper()),
                type=ListingType(str(response.get("type") or "sale").lower()),
                images=[self._parse_image(image) for image in response.get("images") or []],
                categories=[self._parse_category_ref(category) for category in response.get("categories") or []],
                attribute_values=[self._parse_attribute_value(value) for value in response.get("product_attribute_values") or []],
                created_at=datetime.fromisoformat(response["createdAt"].replace("Z", "+00:00")) if response.get("createdAt") else None,
                updated_at=datetime.fromisoformat(response["updatedAt"].replace("Z", "+00:00")) if response.get("updatedAt") else None,
            )

    def _parse_image(self, response: dict) -> ListingImage:
        return ListingImage(
                id=str(response.get("id")),
                url=self.get_image_url(response.get("url")),
                name=response.get("name"),
                alternative_text=response.get("alternativeText"),
                width=response.get("width"),
                height=response.get("height"),
            )

    def _parse_category_ref(self, response: dict) -> CategoryRef:
        parent = response.get("parent") or {}
        return CategoryRef(
                id=str(response.get("id")),
                document_id=response.get("documentId") or "",
                slug=response.get("slug") or "",
                name=response.get("name") or "",
                parent_slug=parent.get("slug"),
            )

    def _parse_attribute_value(self, response: dict) -> ListingAttributeValue:
        attribute = response.get("attribute") or {}
        value = response.get("value")
        return ListingAttributeValue(
                attribute_document_id=attribute.get("documentId"),
                attribute_name=attribute.get("name") or "",
                value=str(value) if value is not None else None,
            )
