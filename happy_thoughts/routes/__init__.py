# Routes package init
"""
Happy Thoughts API — API Routes Package
=========================================

Route Inventory:
    - docs.py:      GET    /                    (API description)
    - thoughts.py:  GET    /thoughts            (list, optional ?sort=hearts|date)
                    GET    /thoughts/{id}       (single thought)
                    POST   /thoughts            (create)
                    PATCH  /thoughts/{id}/like  (hearts + 1)
                    DELETE /thoughts/{id}       (delete)
    - health.py:    GET    /health              (service health check)

Routes stay thin: extract request data, call ThoughtService, return the
envelope. Status codes for failures come from the global exception handlers.
"""
