"""
Animal Catalog Backend — Service Unit Tests
=============================================

What:  CategoryService and AnimalService branches that do not need a real
       database: not-found handling, error wrapping, image cleanup.
How:   Uses the mock AsyncSession from conftest and patches file_service.
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from animal_catalog.exceptions import DatabaseError, NotFoundError
from animal_catalog.services.animal_service import AnimalService
from animal_catalog.services.category_service import CategoryService
from animal_catalog.services.file_service import ImageUpload
from animal_catalog.validators import AnimalCreate, CategoryUpdate


def _result_with(items):
    result = MagicMock()
    result.scalars.return_value.all.return_value = items
    result.scalars.return_value.first.return_value = items[0] if items else None
    return result


class TestCategoryService:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_list_categories_empty_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with([])

        with pytest.raises(NotFoundError, match="No categories found"):
            await self.service.list_categories(mock_db_session)

    @pytest.mark.asyncio
    async def test_list_categories_returns_responses(self, mock_db_session, sample_category):
        mock_db_session.execute.return_value = _result_with([sample_category])

        result = await self.service.list_categories(mock_db_session)

        assert [c.name for c in result] == ["Reptiles"]
        assert result[0].id == sample_category.id

    @pytest.mark.asyncio
    async def test_list_categories_wraps_driver_errors(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(DatabaseError):
            await self.service.list_categories(mock_db_session)

    @pytest.mark.asyncio
    async def test_get_category_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError, match="Category not found"):
            await self.service.get_category_with_animals(mock_db_session, uuid4())
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_category_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.update_category(
                mock_db_session, CategoryUpdate(category_id=uuid4(), name="Birds")
            )
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_category_overwrites_name(self, mock_db_session, sample_category):
        mock_db_session.get.return_value = sample_category

        result = await self.service.update_category(
            mock_db_session, CategoryUpdate(category_id=sample_category.id, name="Lizards")
        )

        assert result.name == "Lizards"
        assert sample_category.name == "Lizards"
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_category_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.delete_category(mock_db_session, uuid4())
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_category_returns_message(self, mock_db_session, sample_category):
        mock_db_session.get.return_value = sample_category

        result = await self.service.delete_category(mock_db_session, sample_category.id)

        assert result.message == "Category deleted successfully"
        mock_db_session.delete.assert_awaited_once_with(sample_category)


class TestAnimalService:

    def setup_method(self):
        self.service = AnimalService()
        self.upload = ImageUpload(filename="iguana.jpg", content=b"\xff\xd8\xff\xd9")

    @pytest.mark.asyncio
    async def test_create_animal_unknown_category_stores_nothing(self, mock_db_session):
        mock_db_session.get.return_value = None

        with patch("animal_catalog.services.animal_service.file_service") as mock_file:
            mock_file.store_image = AsyncMock()

            with pytest.raises(NotFoundError, match="Category not found"):
                await self.service.create_animal(
                    mock_db_session, AnimalCreate(category_id=uuid4(), name="Iguana"), self.upload
                )

            mock_file.store_image.assert_not_awaited()
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_animal_insert_failure_removes_image(self, mock_db_session, sample_category):
        mock_db_session.get.return_value = sample_category
        mock_db_session.flush.side_effect = SQLAlchemyError("insert failed")

        with patch("animal_catalog.services.animal_service.file_service") as mock_file:
            mock_file.store_image = AsyncMock(
                return_value=("/tmp/uploads/animals/1-iguana.jpg", "/uploads/animals/1-iguana.jpg")
            )
            mock_file.cleanup_file = AsyncMock()

            with pytest.raises(DatabaseError):
                await self.service.create_animal(
                    mock_db_session,
                    AnimalCreate(category_id=sample_category.id, name="Iguana"),
                    self.upload,
                )

            mock_file.cleanup_file.assert_awaited_once_with("/tmp/uploads/animals/1-iguana.jpg")

    @pytest.mark.asyncio
    async def test_delete_animal_is_silent_for_missing_id(self, mock_db_session):
        result = MagicMock()
        result.rowcount = 0
        mock_db_session.execute.return_value = result

        response = await self.service.delete_animal(mock_db_session, uuid4())

        assert response.message == "Animal deleted successfully"
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_by_category_id_empty_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with([])

        with pytest.raises(NotFoundError, match="No animals found in this category"):
            await self.service.list_animals_by_category_id(mock_db_session, uuid4())

    @pytest.mark.asyncio
    async def test_list_by_category_name_unknown_category(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with([])

        with pytest.raises(NotFoundError, match="Category not found"):
            await self.service.list_animals_by_category_name(mock_db_session, "Dragons")
        assert mock_db_session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_list_animals_empty_is_not_an_error(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with([])

        assert await self.service.list_animals(mock_db_session) == []
