from fastapi import APIRouter, Query, Request

from shared.models.attribute import AttributeDefinition
from shared.models.category import CategoryNode, CategoryPath

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
async def list_root_categories(request: Request) -> list[CategoryNode]:
    """Return the top-level categories with their direct children."""
    category_service = request.app.state.category_service
    return await category_service.get_root_categories()


@router.get("/attributes")
async def get_category_attributes(
    request: Request,
    slugs: list[str] = Query(default=[]),
) -> list[AttributeDefinition]:
    """Return the merged attribute definitions of the given categories.

    Args:
        request (Request): FastAPI request (provides app.state.category_service).
        slugs (list[str]): Category slugs, repeated query parameter.

    Returns:
        list[AttributeDefinition]: One definition per attribute documentId.
    """
    category_service = request.app.state.category_service
    return await category_service.get_attributes_for_categories(slugs)


@router.get("/{slug}")
async def get_category(request: Request, slug: str) -> CategoryNode:
    category_service = request.app.state.category_service
    return await category_service.get_category_by_slug(slug)


@router.get("/{slug}/path")
async def get_category_path(request: Request, slug: str) -> CategoryPath:
    category_service = request.app.state.category_service
    return await category_service.get_category_path(slug)
