"""
Animal Catalog Backend — Category SQLAlchemy Model
====================================================

What:  ORM model representing the `categories` table.
How:   Inherits from the declarative Base; Alembic reads this for migrations.
Who:   Used by CategoryService and AnimalService (name lookups, existence checks).

Table Design:
    - UUID primary key generated on insert
    - name: required, non-empty (enforced by validators before insert)
    - created_at / updated_at: UTC, set automatically on insert / update

There is deliberately no relationship to animals here: deleting a category
must not touch the animals that reference it.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from animal_catalog.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """
    Top-level grouping for animals.

    Lifecycle:
        1. Created by POST /api/category
        2. Renamed by PUT /api/category/{id} (name is the only mutable field)
        3. Deleted by DELETE /api/category/{id}; referencing animals survive
    """

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Exact-match lookups by name back GET /api/animals/category/name/{name}
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Python-side defaults keep the values on the instance after flush,
    # so no refresh round-trip is needed before serialization
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
        return f"<Category(id={self.id}, name='{self.name}')>"
