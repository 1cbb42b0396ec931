# Models package init
"""
Animal Catalog Backend — ORM Models
=====================================

Importing this package registers every table on Base.metadata
(used by Alembic and by the test suite's create_all).
"""

from animal_catalog.models.category import Category
from animal_catalog.models.animal import Animal

__all__ = ["Category", "Animal"]
