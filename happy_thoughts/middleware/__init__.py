# Middleware package init
"""
Happy Thoughts API — Middleware Package
========================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Logging] → [CORS] → Route Handler

Request ID runs first so the access log line and any error envelope carry
the same correlation id.
"""
