# Views package init
"""
Epic Notes Backend: Presentation Layer
=========================================

What:  Server-rendered pages: the note editor, the note page, error pages.

Module Inventory:
    - templating.py:   Jinja2 environment and HTML/JSON content negotiation
    - note_editor.py:  Edit form state (values, limits, ARIA, submit status)
    - errors.py:       Error boundary pages with per-status messages
"""
