# Services package init
"""
Animal Catalog Backend — Services Layer
=========================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services receive the request's AsyncSession, run their queries and
       return response models. Routes stay thin.

Service Inventory:
    - CategoryService: list / get-with-animals / create / rename / delete
    - AnimalService: list / create (with image) / delete / list by category
    - FileService: image size check, storage, cleanup and lookup for serving
"""
