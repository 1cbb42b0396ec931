"""
Animal Catalog Backend — Category Service
===========================================

What:  Persistence operations behind the category endpoints.
How:   Each method runs at most two sequential queries on the request's
       AsyncSession and returns response models. Missing records raise
       NotFoundError; SQLAlchemy failures are wrapped in DatabaseError.
Who:   Called by routes/categories.py.

Empty collections:
    list_categories() raises NotFoundError when there are no categories at
    all, instead of returning an empty list. Existing clients depend on
    that 404, so it stays until the API is versioned.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from animal_catalog.exceptions import DatabaseError, NotFoundError
from animal_catalog.models import Animal, Category
from animal_catalog.schemas.animal import AnimalResponse, CategoryDetailResponse
from animal_catalog.schemas.category import CategoryResponse
from animal_catalog.schemas.common import MessageResponse
from animal_catalog.validators import CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Business logic layer for category operations.

    Stateless: the session is passed into every call, so one instance is
    shared by all requests.
    """

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        """
        Return every category, oldest first.

        Raises:
            NotFoundError: there are no categories (→ 404)
        """
        logger.info("Fetching all categories")
        try:
            result = await db.execute(select(Category).order_by(Category.created_at, Category.id))
            categories = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching categories",
                context={"error_type": type(e).__name__},
            )

        if not categories:
            logger.info("No categories found")
            raise NotFoundError(resource="category", message="No categories found")

        logger.info("Fetched %d categories", len(categories))
        return [CategoryResponse.model_validate(c) for c in categories]

    async def get_category_with_animals(
        self, db: AsyncSession, category_id: UUID
    ) -> CategoryDetailResponse:
        """
        Fetch a category and every animal that references it.

        Query plan:
            1. SELECT category by primary key
            2. SELECT animals WHERE category_id = :id (+ selectin on categories)

        Raises:
            NotFoundError: category does not exist (→ 404)
        """
        logger.info("Fetching category with ID: %s", category_id)
        try:
            category = await db.get(Category, category_id)
            if category is None:
                logger.info("Category with ID %s not found", category_id)
                raise NotFoundError(resource="category", message="Category not found")

            result = await db.execute(
                select(Animal)
                .options(selectinload(Animal.category))
                .where(Animal.category_id == category_id)
                .order_by(Animal.created_at, Animal.id)
            )
            animals = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error fetching category %s: %s", category_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching category and animals",
                context={"category_id": str(category_id)},
            )

        logger.info(
            "Category and associated animals fetched: %s, %d animals found",
            category.name,
            len(animals),
        )
        return CategoryDetailResponse(
            category=CategoryResponse.model_validate(category),
            animals=[AnimalResponse.model_validate(a) for a in animals],
        )

    async def create_category(self, db: AsyncSession, name: str) -> CategoryResponse:
        """Insert a new category; `name` is already validated."""
        logger.info("Adding new category: %s", name)
        try:
            category = Category(name=name)
            db.add(category)
            await db.flush()  # Assigns the UUID and timestamps
        except SQLAlchemyError as e:
            logger.error("Database error adding category: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error adding category",
                context={"error_type": type(e).__name__},
            )

        logger.info("Category added: %s", category.id)
        return CategoryResponse.model_validate(category)

    async def update_category(self, db: AsyncSession, update: CategoryUpdate) -> CategoryResponse:
        """
        Overwrite the name of an existing category.

        Raises:
            NotFoundError: category does not exist (→ 404)
        """
        logger.info("Updating category with ID: %s", update.category_id)
        try:
            category = await db.get(Category, update.category_id)
            if category is None:
                logger.info("Category with ID %s not found", update.category_id)
                raise NotFoundError(resource="category", message="Category not found")

            category.name = update.name
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating category %s: %s", update.category_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Error updating category",
                context={"category_id": str(update.category_id)},
            )

        logger.info("Category updated: %s -> %s", category.id, category.name)
        return CategoryResponse.model_validate(category)

    async def delete_category(self, db: AsyncSession, category_id: UUID) -> MessageResponse:
        """
        Delete a category. Animals referencing it are left untouched.

        Raises:
            NotFoundError: category does not exist (→ 404)
        """
        logger.info("Deleting category with ID: %s", category_id)
        try:
            category = await db.get(Category, category_id)
            if category is None:
                logger.info("Category with ID %s not found", category_id)
                raise NotFoundError(resource="category", message="Category not found")

            await db.delete(category)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting category %s: %s", category_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Error deleting category",
                context={"category_id": str(category_id)},
            )

        logger.info("Category deleted: %s", category_id)
        return MessageResponse(message="Category deleted successfully")


# ── Singleton Instance ────────────────────────────────────────────────────
category_service = CategoryService()
