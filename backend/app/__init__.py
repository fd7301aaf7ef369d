"""
Abacus Backend — Application Package Initializer
==================================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← calculator, comment outcome mapping
    ├─────────────────────────────────────┤
    │        Comment Store (Documents)    │  ← tagged results, never raises
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The calculator and the comment resource share nothing but the
    application shell (config, logging, middleware, error handlers).
"""

__version__ = "1.0.0"
