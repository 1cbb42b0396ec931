"""
Animal Catalog Backend — Category Endpoint Tests
==================================================

What:  /api/categories and /api/category/* through the full app stack.
How:   HTTPX AsyncClient over ASGITransport, in-memory SQLite per test.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest


class TestListCategories:

    @pytest.mark.asyncio
    async def test_empty_store_is_not_found(self, test_client):
        response = await test_client.get("/api/categories")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == "No categories found"

    @pytest.mark.asyncio
    async def test_lists_created_categories(self, test_client, create_category):
        await create_category("Reptiles")
        await create_category("Birds")

        response = await test_client.get("/api/categories")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Reptiles", "Birds"]


class TestCreateCategory:

    @pytest.mark.asyncio
    async def test_create_returns_record(self, test_client):
        response = await test_client.post("/api/category", json={"name": "Mammals"})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Mammals"
        assert set(body) == {"id", "name", "createdAt", "updatedAt"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"name": ""}, {"name": "   "}])
    async def test_missing_name_persists_nothing(self, test_client, payload):
        response = await test_client.post("/api/category", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Category name is required"
        assert (await test_client.get("/api/categories")).status_code == 404

    @pytest.mark.asyncio
    async def test_no_body_is_bad_request(self, test_client):
        response = await test_client.post("/api/category")
        assert response.status_code == 400


class TestGetCategory:

    @pytest.mark.asyncio
    async def test_category_with_animals(self, test_client, create_category, create_animal):
        category = await create_category("Reptiles")
        await create_animal(category["id"], name="Iguana")
        await create_animal(category["id"], name="Gecko", filename="gecko.jpg")

        response = await test_client.get(f"/api/category/{category['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["category"]["id"] == category["id"]
        assert [a["name"] for a in body["animals"]] == ["Iguana", "Gecko"]
        assert all(a["category"]["name"] == "Reptiles" for a in body["animals"])

    @pytest.mark.asyncio
    async def test_category_without_animals(self, test_client, create_category):
        category = await create_category("Fish")

        response = await test_client.get(f"/api/category/{category['id']}")

        assert response.status_code == 200
        assert response.json()["animals"] == []

    @pytest.mark.asyncio
    async def test_unknown_id(self, test_client):
        response = await test_client.get(f"/api/category/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Category not found"

    @pytest.mark.asyncio
    async def test_malformed_id_never_reaches_store(self, test_client):
        with patch("animal_catalog.routes.categories.category_service") as mock_service:
            mock_service.get_category_with_animals = AsyncMock()

            response = await test_client.get("/api/category/not-an-id")

            mock_service.get_category_with_animals.assert_not_awaited()

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid category ID format"


class TestUpdateCategory:

    @pytest.mark.asyncio
    async def test_rename(self, test_client, create_category):
        category = await create_category("Reptile")

        response = await test_client.put(f"/api/category/{category['id']}", json={"name": "Reptiles"})

        assert response.status_code == 200
        assert response.json()["name"] == "Reptiles"
        assert response.json()["id"] == category["id"]

        listed = await test_client.get("/api/categories")
        assert [c["name"] for c in listed.json()] == ["Reptiles"]

    @pytest.mark.asyncio
    async def test_missing_name(self, test_client, create_category):
        category = await create_category("Reptiles")

        response = await test_client.put(f"/api/category/{category['id']}", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Category name is required to update"

    @pytest.mark.asyncio
    async def test_malformed_id_is_checked_first(self, test_client):
        response = await test_client.put("/api/category/123", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid category ID format"

    @pytest.mark.asyncio
    async def test_unknown_id(self, test_client):
        response = await test_client.put(f"/api/category/{uuid4()}", json={"name": "Birds"})
        assert response.status_code == 404


class TestDeleteCategory:

    @pytest.mark.asyncio
    async def test_delete(self, test_client, create_category):
        category = await create_category("Reptiles")

        response = await test_client.delete(f"/api/category/{category['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Category deleted successfully"}
        assert (await test_client.get(f"/api/category/{category['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client, create_category):
        category = await create_category("Reptiles")
        await test_client.delete(f"/api/category/{category['id']}")

        response = await test_client.delete(f"/api/category/{category['id']}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_animals_are_orphaned(self, test_client, create_category, create_animal):
        category = await create_category("Reptiles")
        created = await create_animal(category["id"])
        animal_id = created.json()["animal"]["id"]

        await test_client.delete(f"/api/category/{category['id']}")

        animals = (await test_client.get("/api/animals")).json()
        assert [a["id"] for a in animals] == [animal_id]
        assert animals[0]["category"] is None

    @pytest.mark.asyncio
    async def test_malformed_id(self, test_client):
        response = await test_client.delete("/api/category/xyz")
        assert response.status_code == 400
