"""
Epic Notes Backend: Application Package
=========================================

What:  The note editing service: loads a note for editing, validates and
       persists edits, and renders an accessible edit form.
Who:   Imported by uvicorn (`epic_notes.main:app`), Alembic, and pytest.

Layering:

    ┌─────────────────────────────────────┐
    │      Routes (loader / action)       │  ← HTTP concerns, content negotiation
    ├─────────────────────────────────────┤
    │  Services (lookup, validate, save)  │  ← Business rules, no HTTP
    ├─────────────────────────────────────┤
    │   Views (form state) + Templates    │  ← Pure presentation
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Persistence)            │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
