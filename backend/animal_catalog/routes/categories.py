"""
Animal Catalog Backend — Category Route Handlers
==================================================

What:  CRUD endpoints for categories.
How:   Validate path/body input with animal_catalog.validators, delegate to
       CategoryService, return response models.

Route Inventory:
    GET    /api/categories                 list (404 when empty)
    POST   /api/category                   create
    GET    /api/category/{category_id}     category + its animals
    PUT    /api/category/{category_id}     rename
    DELETE /api/category/{category_id}     delete (animals are not touched)

Path identifiers are taken as plain strings so that a malformed ID is
answered with our 400 "Invalid category ID format" instead of a schema error.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from animal_catalog.database import get_db_session
from animal_catalog.schemas.animal import CategoryDetailResponse
from animal_catalog.schemas.category import CategoryPayload, CategoryResponse
from animal_catalog.schemas.common import ErrorResponse, MessageResponse
from animal_catalog.services.category_service import category_service
from animal_catalog.validators import (
    parse_id,
    validate_create_category,
    validate_update_category,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Categories"])


@router.get(
    "/categories",
    response_model=List[CategoryResponse],
    responses={404: {"description": "No categories exist", "model": ErrorResponse}},
    summary="List all categories",
)
async def list_categories(db: AsyncSession = Depends(get_db_session)) -> List[CategoryResponse]:
    return await category_service.list_categories(db)


@router.post(
    "/category",
    status_code=201,
    response_model=CategoryResponse,
    responses={400: {"description": "Missing name", "model": ErrorResponse}},
    summary="Create a category",
)
async def create_category(
    payload: Optional[CategoryPayload] = None,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    name = validate_create_category(payload.name if payload else None)
    return await category_service.create_category(db, name)


@router.get(
    "/category/{category_id}",
    response_model=CategoryDetailResponse,
    responses={
        400: {"description": "Malformed category ID", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Get a category and its animals",
)
async def get_category(
    category_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryDetailResponse:
    """Returns {"category": ..., "animals": [...]} with each animal's category populated."""
    return await category_service.get_category_with_animals(db, parse_id(category_id))


@router.put(
    "/category/{category_id}",
    response_model=CategoryResponse,
    responses={
        400: {"description": "Malformed category ID or missing name", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Rename a category",
)
async def update_category(
    category_id: str,
    payload: Optional[CategoryPayload] = None,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    update = validate_update_category(category_id, payload.name if payload else None)
    return await category_service.update_category(db, update)


@router.delete(
    "/category/{category_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Malformed category ID", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Delete a category",
    description="Deletes the category only. Animals that reference it are kept as they are.",
)
async def delete_category(
    category_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await category_service.delete_category(db, parse_id(category_id))
