"""Tests for the category endpoints."""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from server.routers.CategoryRouter import router as category_router
from server.routers.error_handlers import register_exception_handlers
from shared.helper.errors import NotFoundError, TransportError
from shared.models.category import CategoryPath


@pytest.fixture
def category_service():
    service = Mock()
    service.get_root_categories = AsyncMock()
    service.get_category_by_slug = AsyncMock()
    service.get_category_path = AsyncMock()
    service.get_attributes_for_categories = AsyncMock()
    return service


@pytest.fixture
def client(category_service):
    app = FastAPI()
    app.include_router(category_router)
    register_exception_handlers(app)
    app.state.category_service = category_service
    return TestClient(app)


@pytest.mark.unit
def test_list_root_categories(client, category_service, vehicles_node):
    category_service.get_root_categories.return_value = [vehicles_node]

    response = client.get("/categories")

    assert response.status_code == 200
    body = response.json()
    assert body[0]["slug"] == "vehicles"
    assert [child["level"] for child in body[0]["children"]] == [1, 1]


@pytest.mark.unit
def test_get_category_not_found_returns_404(client, category_service):
    category_service.get_category_by_slug.side_effect = NotFoundError("category", "ghost")

    response = client.get("/categories/ghost")

    assert response.status_code == 404
    assert response.json() == {"detail": "Category with slug 'ghost' not found"}


@pytest.mark.unit
def test_transport_error_returns_502(client, category_service):
    category_service.get_category_by_slug.side_effect = TransportError(503, "maintenance", "http://cms.test/api/categories")

    response = client.get("/categories/cars")

    assert response.status_code == 502
    assert response.json() == {"detail": "CMS request failed with status 503"}


@pytest.mark.unit
def test_get_category_path(client, category_service, vehicles_node):
    category_service.get_category_path.return_value = CategoryPath(nodes=[vehicles_node], depth=1)

    response = client.get("/categories/vehicles/path")

    assert response.status_code == 200
    assert response.json()["depth"] == 1
    category_service.get_category_path.assert_awaited_once_with("vehicles")


@pytest.mark.unit
def test_get_category_attributes(client, category_service, color_attribute):
    category_service.get_attributes_for_categories.return_value = [color_attribute]

    response = client.get("/categories/attributes", params=[("slugs", "vehicles"), ("slugs", "cars")])

    assert response.status_code == 200
    assert response.json()[0]["document_id"] == "attr-color"
    category_service.get_attributes_for_categories.assert_awaited_once_with(["vehicles", "cars"])
