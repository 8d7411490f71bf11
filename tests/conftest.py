"""Shared pytest fixtures and configuration."""

import logging
import os

import pytest

# Set test environment variables
os.environ.setdefault("CMS_ENGINE", "strapi")
os.environ.setdefault("CMS_STRAPI_BASE_URL", "http://cms.test")
os.environ.setdefault("CMS_STRAPI_API_TOKEN", "test-token")
os.environ.setdefault("CMS_STRAPI_DEFAULT_PAGE_SIZE", "25")
os.environ.setdefault("LOG_LEVEL", "info")

from shared.helper.HelperConfig import HelperConfig
from shared.models.attribute import AttributeDefinition
from shared.models.category import CategoryDetails, CategoryNode


@pytest.fixture
def helper_config():
    """HelperConfig backed by a plain test logger."""
    return HelperConfig(logger=logging.getLogger("marketplace_cms_bridge.tests"))


@pytest.fixture
def color_attribute():
    return AttributeDefinition(
        id="11",
        document_id="attr-color",
        name="color",
        type="select",
        required=True,
        options=["red", "blue", "green"],
    )


@pytest.fixture
def mileage_attribute():
    return AttributeDefinition(
        id="12",
        document_id="attr-mileage",
        name="mileage",
        type="number",
        metadata={"minimum": 0, "maximum": 500000},
    )


@pytest.fixture
def features_attribute():
    return AttributeDefinition(
        id="13",
        document_id="attr-features",
        name="features",
        type="multi-select",
        options=["abs", "gps", "heated-seats"],
    )


@pytest.fixture
def vehicles_node(color_attribute):
    """Primary category with two subcategories."""
    return CategoryNode(
        id="1",
        document_id="cat-vehicles",
        slug="vehicles",
        name="Vehicles",
        level=0,
        attributes=[color_attribute],
        children=[
            CategoryNode(id="2", document_id="cat-cars", slug="cars", name="Cars", level=1),
            CategoryNode(id="3", document_id="cat-bikes", slug="bikes", name="Bikes", level=1),
        ],
    )


@pytest.fixture
def cars_details(color_attribute, mileage_attribute):
    """Category as parsed from the CMS, with a parent reference and one child."""
    return CategoryDetails(
        engine="Strapi",
        id="2",
        document_id="cat-cars",
        slug="cars",
        name="Cars",
        parent=CategoryDetails(engine="Strapi", id="1", document_id="cat-vehicles", slug="vehicles", name="Vehicles"),
        categories=[
            CategoryDetails(engine="Strapi", id="4", document_id="cat-suv", slug="suv", name="SUV"),
        ],
        attributes=[color_attribute, mileage_attribute],
    )
