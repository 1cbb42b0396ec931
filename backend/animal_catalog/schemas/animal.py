"""
Animal Catalog Backend — Animal Response Schemas
==================================================

What:  Pydantic models for animal responses.
How:   `category` is the populated reference: the full category record, or
       null when the category was deleted after the animal was created.

The create-animal request is multipart (form field `name`, file field
`image`), so it has no body model; see routes/animals.py.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from animal_catalog.schemas.category import CategoryResponse


class AnimalResponse(BaseModel):
    """Full representation of an animal with its category populated."""
    id: uuid.UUID = Field(description="Unique animal identifier")
    name: str = Field(description="Animal name")
    image: Optional[str] = Field(
        default=None,
        description="Server-relative URL of the uploaded image",
    )
    category: Optional[CategoryResponse] = Field(
        default=None,
        description="Populated category (null if the category no longer exists)",
    )
    created_at: datetime = Field(serialization_alias="createdAt", description="Creation time (UTC)")
    updated_at: datetime = Field(serialization_alias="updatedAt", description="Last update time (UTC)")

    model_config = {"from_attributes": True}


class AnimalCreatedResponse(BaseModel):
    """Returned by POST /api/animal/category/{categoryId} with HTTP 201."""
    message: str = Field(default="Animal added successfully.")
    animal: AnimalResponse


class CategoryDetailResponse(BaseModel):
    """
    What:  A category together with every animal that references it.
    Who:   Returned by GET /api/category/{categoryId}.
    """
    category: CategoryResponse
    animals: List[AnimalResponse]
