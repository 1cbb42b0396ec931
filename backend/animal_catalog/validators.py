"""
Animal Catalog Backend — Request Validation
=============================================

What:  One validation function per operation, plus the identifier check
       shared by every route that takes an ID in its path.
How:   Each function either returns cleaned values or raises ValidationError,
       which the global handler turns into HTTP 400. Validation always runs
       before the store is touched.
Who:   Called by route handlers (routes/categories.py, routes/animals.py).

Identifier format:
    Store identifiers are UUIDs. Both the hyphenated 36-character form and
    the bare 32-hex-digit form are accepted; anything else is rejected.
"""

import re
import uuid
from dataclasses import dataclass
from typing import Optional

from animal_catalog.exceptions import ValidationError

_UUID_PATTERN = re.compile(
    r"^(?:[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
    r"|[0-9a-fA-F]{32})$"
)


# Validated inputs handed to the services

@dataclass(frozen=True)
class CategoryUpdate:
    category_id: uuid.UUID
    name: str


@dataclass(frozen=True)
class AnimalCreate:
    category_id: uuid.UUID
    name: str


def is_valid_id(value: Optional[str]) -> bool:
    """True when `value` is in the store's identifier format."""
    return bool(value) and _UUID_PATTERN.match(value) is not None


def parse_id(value: Optional[str], resource: str = "category", field: str = "categoryId") -> uuid.UUID:
    """
    Validate a path identifier and convert it to a UUID.

    Raises:
        ValidationError("Invalid <resource> ID format") for malformed values
    """
    if not is_valid_id(value):
        raise ValidationError(
            message=f"Invalid {resource} ID format",
            field=field,
            context={"value": value},
        )
    return uuid.UUID(value)


def clean_name(name: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; None and blank strings become None."""
    if name is None:
        return None
    stripped = name.strip()
    return stripped or None


# ── Category operations ───────────────────────────────────────────────────

def validate_create_category(name: Optional[str]) -> str:
    cleaned = clean_name(name)
    if cleaned is None:
        raise ValidationError(message="Category name is required", field="name")
    return cleaned


def validate_update_category(category_id: Optional[str], name: Optional[str]) -> CategoryUpdate:
    """ID format is checked first, then the new name."""
    parsed_id = parse_id(category_id)
    cleaned = clean_name(name)
    if cleaned is None:
        raise ValidationError(message="Category name is required to update", field="name")
    return CategoryUpdate(category_id=parsed_id, name=cleaned)


# ── Animal operations ─────────────────────────────────────────────────────

def validate_create_animal(category_id: Optional[str], name: Optional[str], has_image: bool) -> AnimalCreate:
    """
    Checks, in order: category id present, category id format, name present,
    image present. The category's existence is checked afterwards by the
    service, since it needs the store.
    """
    if not category_id or not category_id.strip():
        raise ValidationError(message="Missing Category Id", field="categoryId")
    parsed_id = parse_id(category_id.strip())

    cleaned = clean_name(name)
    if cleaned is None:
        raise ValidationError(message="Animal name is required", field="name")

    if not has_image:
        raise ValidationError(message="Animal image is required", field="image")

    return AnimalCreate(category_id=parsed_id, name=cleaned)
