# Middleware package init
"""
Animal Catalog Backend — Middleware Package
=============================================

Middleware Chain (outermost first):
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    - CORS: rejects/decorates cross-origin requests per deployment mode
    - Request ID: correlation ID for logs and error bodies
    - Logging: access line with status and duration
"""
