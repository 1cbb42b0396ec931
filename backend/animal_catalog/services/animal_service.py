"""
Animal Catalog Backend — Animal Service
=========================================

What:  Persistence operations behind the animal endpoints.
How:   Every read populates `Animal.category` with selectinload. Creation
       checks the category, stores the image, then inserts the animal.
Who:   Called by routes/animals.py.

Create Flow (POST /api/animal/category/{categoryId}):
    ┌─────────────┐    ┌──────────────┐    ┌────────────┐    ┌──────────┐
    │ Validators  │───▶│ Category     │───▶│ Store      │───▶│ Insert   │
    │ (route)     │    │ exists?      │    │ image      │    │ animal   │
    └─────────────┘    └──────────────┘    └────────────┘    └──────────┘
    On insert failure the stored image is removed again.

Empty collections:
    Listing by category id or category name raises NotFoundError when no
    animal matches. The unfiltered list returns an empty list.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from animal_catalog.exceptions import DatabaseError, NotFoundError
from animal_catalog.models import Animal, Category
from animal_catalog.schemas.animal import AnimalCreatedResponse, AnimalResponse
from animal_catalog.schemas.common import MessageResponse
from animal_catalog.services.file_service import ImageUpload, file_service
from animal_catalog.validators import AnimalCreate

logger = logging.getLogger(__name__)

NO_ANIMALS_IN_CATEGORY = "No animals found in this category"


def _populated_animals():
    return (
        select(Animal)
        .options(selectinload(Animal.category))
        .order_by(Animal.created_at, Animal.id)
    )


class AnimalService:
    """Business logic layer for animal operations."""

    async def _fetch(self, db: AsyncSession, query, operation: str) -> List[Animal]:
        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error %s: %s", operation, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Error {operation}",
                context={"error_type": type(e).__name__},
            )

    async def list_animals(self, db: AsyncSession) -> List[AnimalResponse]:
        """Return every animal with its category populated."""
        animals = await self._fetch(db, _populated_animals(), "fetching animals")
        logger.info("Fetched %d animals", len(animals))
        return [AnimalResponse.model_validate(a) for a in animals]

    async def create_animal(
        self,
        db: AsyncSession,
        data: AnimalCreate,
        image: ImageUpload,
    ) -> AnimalCreatedResponse:
        """
        Create an animal in an existing category.

        Args:
            db: Async database session
            data: Validated category id and name
            image: Uploaded image (size already checked)

        Raises:
            NotFoundError: the category does not exist (→ 404); nothing is
                stored or inserted
            FileStorageError: the image could not be written (→ 500)
            DatabaseError: the insert failed (→ 500); the image is removed
        """
        logger.info("Adding animal '%s' to category %s", data.name, data.category_id)
        try:
            category = await db.get(Category, data.category_id)
        except SQLAlchemyError as e:
            logger.error("Database error looking up category %s: %s", data.category_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Internal server error while adding animal.",
                context={"category_id": str(data.category_id)},
            )

        if category is None:
            logger.info("Category with ID %s not found", data.category_id)
            raise NotFoundError(resource="category", message="Category not found")

        absolute_path, image_url = await file_service.store_image(image.filename, image.content)

        try:
            animal = Animal(name=data.name, image=image_url, category=category)
            db.add(animal)
            await db.flush()
        except SQLAlchemyError as e:
            await file_service.cleanup_file(absolute_path)
            logger.error("Database error adding animal: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Internal server error while adding animal.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Animal added: %s (%s)", animal.id, animal.name)
        return AnimalCreatedResponse(
            message="Animal added successfully.",
            animal=AnimalResponse.model_validate(animal),
        )

    async def delete_animal(self, db: AsyncSession, animal_id: UUID) -> MessageResponse:
        """
        Delete an animal by ID. A missing ID is not an error; the stored
        image file is left on disk.
        """
        logger.info("Deleting animal with ID: %s", animal_id)
        try:
            result = await db.execute(delete(Animal).where(Animal.id == animal_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting animal %s: %s", animal_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Error deleting animal",
                context={"animal_id": str(animal_id)},
            )

        logger.info("Animal delete for %s removed %d row(s)", animal_id, result.rowcount or 0)
        return MessageResponse(message="Animal deleted successfully")

    async def list_animals_by_category_id(
        self, db: AsyncSession, category_id: UUID
    ) -> List[AnimalResponse]:
        """
        Animals whose reference equals `category_id` exactly.

        Raises:
            NotFoundError: no animal matches (→ 404)
        """
        logger.info("Fetching animals for category ID: %s", category_id)
        animals = await self._fetch(
            db,
            _populated_animals().where(Animal.category_id == category_id),
            "fetching animals by category ID",
        )
        if not animals:
            raise NotFoundError(resource="animal", message=NO_ANIMALS_IN_CATEGORY)

        logger.info("Fetched %d animals for category %s", len(animals), category_id)
        return [AnimalResponse.model_validate(a) for a in animals]

    async def list_animals_by_category_name(
        self, db: AsyncSession, category_name: str
    ) -> List[AnimalResponse]:
        """
        Resolve the category by exact name, then list its animals.

        Raises:
            NotFoundError: no category has that name, or it has no animals (→ 404)
        """
        logger.info("Fetching animals for category name: %s", category_name)
        try:
            result = await db.execute(
                select(Category)
                .where(Category.name == category_name)
                .order_by(Category.created_at, Category.id)
                .limit(1)
            )
            category = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Database error looking up category '%s': %s", category_name, str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching animals by category name",
                context={"category_name": category_name},
            )

        if category is None:
            logger.info("Category named '%s' not found", category_name)
            raise NotFoundError(resource="category", message="Category not found")

        animals = await self._fetch(
            db,
            _populated_animals().where(Animal.category_id == category.id),
            "fetching animals by category name",
        )
        if not animals:
            raise NotFoundError(resource="animal", message=NO_ANIMALS_IN_CATEGORY)

        logger.info("Fetched %d animals for category '%s'", len(animals), category_name)
        return [AnimalResponse.model_validate(a) for a in animals]


# ── Singleton Instance ────────────────────────────────────────────────────
animal_service = AnimalService()
