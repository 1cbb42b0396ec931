"""
Animal Catalog Backend — Category Request/Response Schemas
============================================================

What:  Pydantic models defining the category part of the API contract.
How:   FastAPI validates request bodies against the *Payload models and
       serializes responses through the *Response models (camelCase keys).

Request payloads accept a missing or empty `name` on purpose: the
operation-specific validators in `animal_catalog.validators` turn that into
a 400 with a readable message instead of FastAPI's generic schema error.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CategoryPayload(BaseModel):
    """Body of POST /api/category and PUT /api/category/{categoryId}."""
    name: Optional[str] = Field(default=None, description="Category name (required, non-empty)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CategoryResponse(BaseModel):
    """
    What:  Full representation of a category.
    Who:   Returned by list/create/update, embedded in populated animals.
    """
    id: uuid.UUID = Field(description="Unique category identifier")
    name: str = Field(description="Category name")
    created_at: datetime = Field(serialization_alias="createdAt", description="Creation time (UTC)")
    updated_at: datetime = Field(serialization_alias="updatedAt", description="Last update time (UTC)")

    model_config = {"from_attributes": True}
