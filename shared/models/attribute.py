"""Category attribute models, backend-independent.

Hierarchy:
  AttributeDefinition: one category-scoped custom field as delivered by the CMS.
  AttributeState: a definition paired with the value currently entered for it.
  AttributeFormData: flat shape submitted with a listing.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class AttributeType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    SELECT = "select"
    MULTI_SELECT = "multi-select"


AttributeValue = str | list[str] | bool | int | float | datetime | date | None


class AttributeDefinition(BaseModel):
    """
    Describes one typed custom field attached to a category.

    For select and multi-select attributes the options list holds the allowed
    values. The metadata mapping carries optional constraints such as
    minimum, maximum, step, minLength and maxLength.
    """
    id: str
    document_id: str
    name: str
    type: AttributeType | str
    required: bool = False
    options: list[str] = Field(default_factory=list)
    metadata: dict[str, str | int | float | bool | None] = Field(default_factory=dict)


class AttributeState(BaseModel):
    definition: AttributeDefinition
    value: AttributeValue = None
    error: str | None = None


class AttributeFormData(BaseModel):
    attribute_document_id: str
    attribute_name: str
    value: AttributeValue = None
