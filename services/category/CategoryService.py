from shared.clients.cms.CMSClientInterface import CMSClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.attribute import AttributeDefinition
from shared.models.category import CategoryDetails, CategoryNode, CategoryPath


class CategoryService:
    """Loads categories from the CMS and normalizes them into CategoryNode trees."""

    def __init__(self, helper_config: HelperConfig, cms_client: CMSClientInterface) -> None:
        self.logging = helper_config.get_logger()
        self._cms_client = cms_client

    ##########################################
    ############### CORE #####################
    ##########################################

    async def get_root_categories(self) -> list[CategoryNode]:
        """
        Fetches the top-level categories with their children.

        Returns:
            list[CategoryNode]: Root nodes at level 0.
        """
        categories = await self._cms_client.do_fetch_root_categories()
        self.logging.debug("Loaded %d root categories.", len(categories))
        return [self.transform_category_to_node(category, 0) for category in categories]

    async def get_category_by_slug(self, slug: str) -> CategoryNode:
        """
        Fetches one category with its direct children and attributes.

        Raises:
            NotFoundError: If no category has the slug.
            TransportError: If the CMS request fails.
        """
        category = await self._cms_client.do_fetch_category_by_slug(slug)
        return self.transform_category_to_node(category, 0)

    async def get_category_path(self, slug: str) -> CategoryPath:
        """
        Resolves the root-to-leaf path of a category by following parent references.

        The CMS only populates the direct parent, so each ancestor is looked up by slug.
        Levels are set from the position in the path.

        Raises:
            NotFoundError: If the category or one of its ancestors does not exist.
        """
        chain: list[CategoryDetails] = []
        visited: set[str] = set()
        category = await self._cms_client.do_fetch_category_by_slug(slug)
        while category is not None and category.slug not in visited:
            visited.add(category.slug)
            chain.insert(0, category)
            category = await self._cms_client.do_fetch_category_by_slug(category.parent.slug) if category.parent else None

        nodes = [self.transform_category_to_node(details, level) for level, details in enumerate(chain)]
        return CategoryPath(nodes=nodes, depth=len(nodes))

    async def get_attributes_for_categories(self, slugs: list[str]) -> list[AttributeDefinition]:
        """
        Collects the own attributes of several categories, once per documentId.

        The first category providing an attribute wins; order of first appearance is kept.
        A failing lookup aborts the whole call.

        Args:
            slugs (list[str]): Category slugs, e.g. the selected category and subcategory.

        Returns:
            list[AttributeDefinition]: The merged attributes.
        """
        attributes: dict[str, AttributeDefinition] = {}
        for slug in slugs:
            category = await self.get_category_by_slug(slug)
            for attribute in category.attributes:
                if attribute.document_id not in attributes:
                    attributes[attribute.document_id] = attribute
        return list(attributes.values())

    ##########################################
    ############# TRANSFORM ##################
    ##########################################

    def transform_category_to_node(self, category: CategoryDetails, level: int = 0) -> CategoryNode:
        return CategoryNode(
            id=category.id,
            document_id=category.document_id,
            slug=category.slug,
            name=category.name,
            level=level,
            children=[self.transform_category_to_node(child, level + 1) for child in category.categories],
            attributes=[attribute.model_copy() for attribute in category.attributes],
        )
