"""
Blog API Backend - Application Package Initializer
===================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │   Routes + Auth Gate (API Layer)    │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Business Logic)         │  ← users, blogs, credentials
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Persistence)            │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
