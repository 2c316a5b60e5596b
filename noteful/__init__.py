"""
Noteful API — Application Package Initializer
==============================================

What: Marks the `noteful` directory as a Python package.
Why:  Enables module imports like `from noteful.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows the same layering for every resource (folders, notes, tags):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Required-field checks, one SQL statement
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine owned by the app lifespan
    └─────────────────────────────────────┘

    Routes never touch SQL; services never touch HTTP status codes.
"""

__version__ = "1.0.0"
