# Models package init
"""
Epic Notes Backend: ORM Models
=================================

Importing this package registers every model on Base.metadata, which
create_tables() and Alembic's --autogenerate both rely on.
"""

from epic_notes.models.note import Note
from epic_notes.models.user import User

__all__ = ["Note", "User"]
