"""
VaultChat Backend — Application Package Initializer
====================================================

What: Marks the `vaultchat` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, entity resolution
    ├─────────────────────────────────────┤
    │        Stores (Persistence API)     │  ← One store per record type
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Services receive their stores through the constructor, so each one
    depends only on the records it touches and can be tested with mocks.
"""

__version__ = "1.0.0"
