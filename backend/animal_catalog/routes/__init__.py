# Routes package init
"""
Animal Catalog Backend — API Routes Package
=============================================

Route Inventory:
    - categories.py: /api/categories, /api/category[/{id}]
    - animals.py:    /api/animals[...], /api/animal/category/{id}
    - uploads.py:    /uploads/animals/{filename} (stored images)
    - health.py:     /health

Routes are thin: extract path/body/form input, run the operation's
validator, call the service, return its response model.
"""
