"""
Animal Catalog Backend — Animal Route Handlers
================================================

What:  Endpoints for listing, creating and deleting animals.
How:   Multipart create goes through the animal_image_upload dependency
       (size limit) before the handler; everything else validates the path
       and delegates to AnimalService.

Route Inventory:
    GET    /api/animals                                   list, category populated
    POST   /api/animal/category/{category_id}             create (multipart: name, image)
    DELETE /api/animals/{animal_id}                       delete, no existence check
    GET    /api/animals/category/{category_id}            by category id (404 when empty)
    GET    /api/animals/category/name/{category_name}     by category name (404 when empty)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Form
from sqlalchemy.ext.asyncio import AsyncSession

from animal_catalog.database import get_db_session
from animal_catalog.dependencies import animal_image_upload
from animal_catalog.schemas.animal import AnimalCreatedResponse, AnimalResponse
from animal_catalog.schemas.common import ErrorResponse, MessageResponse
from animal_catalog.services.animal_service import animal_service
from animal_catalog.services.file_service import ImageUpload
from animal_catalog.validators import parse_id, validate_create_animal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Animals"])


@router.get(
    "/animals",
    response_model=List[AnimalResponse],
    summary="List all animals",
)
async def list_animals(db: AsyncSession = Depends(get_db_session)) -> List[AnimalResponse]:
    return await animal_service.list_animals(db)


@router.post(
    "/animal/category/{category_id}",
    status_code=201,
    response_model=AnimalCreatedResponse,
    responses={
        400: {"description": "Missing/invalid category ID, name or image; image too large", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Create an animal in a category",
    description=(
        "Multipart form with a `name` field and a single `image` file (max 5MB). "
        "The image is served afterwards from the URL returned in `animal.image`."
    ),
)
async def create_animal(
    category_id: str,
    name: Optional[str] = Form(default=None, description="Animal name"),
    image: Optional[ImageUpload] = Depends(animal_image_upload),
    db: AsyncSession = Depends(get_db_session),
) -> AnimalCreatedResponse:
    data = validate_create_animal(category_id, name, has_image=image is not None)
    return await animal_service.create_animal(db, data, image)


@router.delete(
    "/animals/{animal_id}",
    response_model=MessageResponse,
    responses={400: {"description": "Malformed animal ID", "model": ErrorResponse}},
    summary="Delete an animal",
    description="Succeeds whether or not an animal with this ID exists.",
)
async def delete_animal(
    animal_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    parsed_id = parse_id(animal_id, resource="animal", field="id")
    return await animal_service.delete_animal(db, parsed_id)


@router.get(
    "/animals/category/{category_id}",
    response_model=List[AnimalResponse],
    responses={
        400: {"description": "Malformed category ID", "model": ErrorResponse},
        404: {"description": "No animals in this category", "model": ErrorResponse},
    },
    summary="List animals by category ID",
)
async def list_animals_by_category_id(
    category_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[AnimalResponse]:
    return await animal_service.list_animals_by_category_id(db, parse_id(category_id))


@router.get(
    "/animals/category/name/{category_name}",
    response_model=List[AnimalResponse],
    responses={404: {"description": "Category not found or has no animals", "model": ErrorResponse}},
    summary="List animals by category name",
)
async def list_animals_by_category_name(
    category_name: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[AnimalResponse]:
    return await animal_service.list_animals_by_category_name(db, category_name)
