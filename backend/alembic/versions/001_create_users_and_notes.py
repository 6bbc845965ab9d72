"""Create users and notes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates `users` and `notes`; each note belongs to one user.
How:   Portable column types (VARCHAR ids, TIMESTAMP WITH TIME ZONE) so the
       same migration runs on SQLite and PostgreSQL.

Rollback: downgrade() drops both tables; destructive, all data is lost.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, then notes with its owner foreign key and index."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column(
            "username",
            sa.String(20),
            nullable=False,
            comment="URL-safe handle, e.g. /users/kody",
        ),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "notes",
        sa.Column("id", sa.String(36), nullable=False, comment="Note identifier, used in URLs"),
        sa.Column("title", sa.String(100), nullable=False, comment="Note title (1-100 characters)"),
        sa.Column("content", sa.Text(), nullable=False, comment="Note body (1-10000 characters)"),
        sa.Column("owner_id", sa.String(36), nullable=False, comment="User that owns this note"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was last edited (UTC)",
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "idx_notes_owner_updated_at",
        "notes",
        ["owner_id", "updated_at"],
    )


def downgrade() -> None:
    """Drop both tables. WARNING: destructive, all notes are lost."""
    op.drop_index("idx_notes_owner_updated_at", table_name="notes")
    op.drop_table("notes")
    op.drop_table("users")
