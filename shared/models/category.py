"""Normalized category tree models."""

from pydantic import BaseModel, Field

from shared.models.attribute import AttributeDefinition


class CategoryDetails(BaseModel):
    """
    A category as delivered by a CMS client, before normalization.

    Children are nested under categories. parent is only populated one level
    deep, so its own parent is usually unknown.
    """
    engine: str
    id: str
    document_id: str
    slug: str
    name: str
    parent: "CategoryDetails | None" = None
    categories: list["CategoryDetails"] = Field(default_factory=list)
    attributes: list[AttributeDefinition] = Field(default_factory=list)


class CategoryNode(BaseModel):
    """
    A category in the normalized tree. The root level is 0 and each child sits
    one level below its parent. Only the category's own attributes are stored;
    attributes inherited along a selection path are resolved by CategoryService.
    """
    id: str
    document_id: str
    slug: str
    name: str
    level: int = 0
    children: list["CategoryNode"] = Field(default_factory=list)
    attributes: list[AttributeDefinition] = Field(default_factory=list)


class CategoryPath(BaseModel):
    nodes: list[CategoryNode] = Field(default_factory=list)
    depth: int = 0


class CategorySelection(BaseModel):
    """Primary category, optional subcategory and the root-to-leaf path between them."""
    primary: CategoryNode | None = None
    subcategory: CategoryNode | None = None
    path: list[CategoryNode] = Field(default_factory=list)


class CategorySelectionState(BaseModel):
    selection: CategorySelection = Field(default_factory=CategorySelection)
    is_loading: bool = False
    error: str | None = None
