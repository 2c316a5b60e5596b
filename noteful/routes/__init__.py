"""
Noteful API — API Routes Package
=================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - folders.py: GET/POST /api/folders, GET/PUT/DELETE /api/folders/{id}
    - notes.py:   GET/POST /api/notes,   GET/PUT/DELETE /api/notes/{id}
    - tags.py:    GET/POST /api/tags,    GET/PUT/DELETE /api/tags/{id}
    - health.py:  GET /health

Design Principle:
    Routes are THIN: they read the request, call one service method, and
    choose the status code and headers. SQL lives in services.
"""

from fastapi import Request


def location_for(request: Request, resource_id: int) -> str:
    """URL path of a resource just created under the request's collection path."""
    return f"{request.url.path.rstrip('/')}/{resource_id}"
