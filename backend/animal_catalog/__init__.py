"""
Animal Catalog Backend — Application Package
==============================================

REST API for a two-level catalog: categories, and animals that belong to
them (with an uploaded image each).

Architecture:
    ┌─────────────────────────────────────┐
    │     Routes + Validators (API)       │  ← HTTP concerns, 400s
    ├─────────────────────────────────────┤
    │   Services (Persistence / Upload)   │  ← queries, image storage
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
