"""
Epic Notes Backend: Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for lookups and updates, and by Alembic.

Column notes:
    - id: string primary key; appears verbatim in URLs
      (/users/{username}/notes/{id}) so it stays a plain string column
    - title: VARCHAR(100), the longest title an edit can save
    - content: TEXT; the 10000 character bound is enforced by the edit action
    - owner_id: the user the note belongs to
    - created_at / updated_at: UTC with timezone
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from epic_notes.database import Base

if TYPE_CHECKING:
    from epic_notes.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A user's note.

    Query Patterns:
        - Edit loader / view: SELECT ... WHERE id = :id (primary key)
        - Notes of a user:    SELECT ... WHERE owner_id = :owner ORDER BY updated_at
          → Uses idx_notes_owner_updated_at
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Note identifier, used in URLs",
    )

    title: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Note title (1-100 characters)",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body (1-10000 characters)",
    )

    owner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="User that owns this note",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    # Bumped by the ORM on every UPDATE issued for this row
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was last edited (UTC)",
    )

    owner: Mapped["User"] = relationship(back_populates="notes", lazy="joined")

    __table_args__ = (
        Index("idx_notes_owner_updated_at", "owner_id", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', owner_id={self.owner_id})>"
