# Schemas package init
"""
Animal Catalog Backend — API Contract
======================================

Pydantic request/response models, kept separate from the ORM models so the
JSON shape (camelCase timestamps, populated category) can differ from the
table layout.
"""
