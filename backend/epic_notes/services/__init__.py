# Services package init
"""
Epic Notes Backend: Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - NoteService: note lookup for the edit and view pages, edit validation,
      and persistence of accepted edits
"""
