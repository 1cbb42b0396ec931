"""
Animal Catalog Backend — Animal SQLAlchemy Model
==================================================

What:  ORM model representing the `animals` table.
Who:   Used by AnimalService for create/list/delete and by CategoryService
       when a category is returned together with its animals.

Reference semantics:
    `category_id` is a plain indexed UUID column with NO foreign-key
    constraint. The reference is checked once, when the animal is created.
    Deleting the category afterwards leaves the animal as it is (orphaned);
    the populated `category` then resolves to None.

Populate:
    `Animal.category` is a many-to-one relationship joined through
    `foreign(Animal.category_id) == Category.id`. It is lazy="raise", so every
    query that serializes animals must request it with selectinload().
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from animal_catalog.database import Base
from animal_catalog.models.category import Category, utcnow


class Animal(Base):
    """
    Leaf entity belonging to one category, optionally with an uploaded image.

    Lifecycle:
        1. Created by POST /api/animal/category/{categoryId} (multipart)
        2. Never updated
        3. Deleted by DELETE /api/animals/{id}
    """

    __tablename__ = "animals"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Server-relative URL, e.g. /uploads/animals/1718000000000000000-iguana.png
    image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    category_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        nullable=True,
        index=True,
    )

    category: Mapped[Optional[Category]] = relationship(
        Category,
        primaryjoin="foreign(Animal.category_id) == Category.id",
        lazy="raise",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Animal(id={self.id}, name='{self.name}', category_id={self.category_id})>"
