"""
Epic Notes Backend: Note Service (Business Logic)
====================================================

What:  Loads notes for editing and viewing, validates edits, persists them.
How:   Plain async methods over an AsyncSession passed in by the caller.
Who:   Called by the note route handlers; calls the database layer.

Edit Flow (POST /users/{username}/notes/{note_id}/edit):
    ┌──────────┐    ┌──────────────┐  errors   ┌────────────────────┐
    │  Route   │───▶│  Validate    │──────────▶│ ActionErrors (400) │
    │  (form)  │    │  lengths     │           └────────────────────┘
    └──────────┘    └──────┬───────┘
                           │ valid
                           ▼
                    ┌──────────────┐          ┌────────────────────┐
                    │ update_note  │─────────▶│ Redirect (302)     │
                    └──────────────┘          └────────────────────┘

NoteService is stateless; each call receives its session.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from epic_notes.exceptions import BadRequestError, DatabaseError, NotFoundError
from epic_notes.models.note import Note
from epic_notes.schemas.note import (
    CONTENT_MAX_LENGTH,
    CONTENT_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    ActionErrors,
    NoteDetail,
    NoteEditData,
    NoteLoaderResponse,
    NoteViewResponse,
)

logger = logging.getLogger(__name__)


def validate_note_edit(title: str, content: str) -> ActionErrors:
    """
    Check an edit against the note length bounds.

    Every violated bound adds a message to its field's list; nothing
    short-circuits, so title and content errors are reported together.

    Args:
        title: Submitted title text
        content: Submitted content text

    Returns:
        ActionErrors; `has_errors` is False when the edit may be saved.
    """
    errors = ActionErrors()

    if len(title) < TITLE_MIN_LENGTH:
        errors.field_errors.title.append("Title must be at least 1 character")
    if len(title) > TITLE_MAX_LENGTH:
        errors.field_errors.title.append("Title must be at most 100 characters")
    if len(content) < CONTENT_MIN_LENGTH:
        errors.field_errors.content.append("Content must be at least 1 character")
    if len(content) > CONTENT_MAX_LENGTH:
        errors.field_errors.content.append("Content must be at most 10000 characters")

    return errors


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - get_note_for_edit(): loader data for the edit page
        - get_note(): full note for the view page
        - submit_note_edit(): validate, then persist when valid
        - update_note(): write title/content of an existing note
    """

    async def _find_note(self, db: AsyncSession, note_id: str) -> Note:
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    async def get_note_for_edit(self, db: AsyncSession, note_id: str) -> NoteLoaderResponse:
        """
        Load the editable fields of a note.

        Query plan:
            SELECT * FROM notes WHERE id = :id  (primary key lookup)

        Raises:
            NotFoundError: no note with this id (→ 404, id echoed in the error view)
            DatabaseError: query execution failed (→ 500)
        """
        note = await self._find_note(db, note_id)
        return NoteLoaderResponse(note=NoteEditData.model_validate(note))

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteViewResponse:
        """Load a note with its owner for the note page."""
        note = await self._find_note(db, note_id)
        return NoteViewResponse(note=NoteDetail.model_validate(note))

    async def update_note(
        self,
        db: AsyncSession,
        note_id: str,
        title: str,
        content: str,
    ) -> Note:
        """
        Write a new title and content to an existing note.

        The change is flushed here and committed by get_db_session when the
        request finishes. Database failures propagate unchanged.

        Raises:
            NotFoundError: the note disappeared between load and save
        """
        note = await db.get(Note, note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)

        note.title = title
        note.content = content
        await db.flush()
        logger.info("Note %s updated: title=%d chars, content=%d chars",
                    note_id, len(title), len(content))
        return note

    async def submit_note_edit(
        self,
        db: AsyncSession,
        note_id: Optional[str],
        title: str,
        content: str,
    ) -> ActionErrors:
        """
        Validate an edit and persist it when it passes.

        Args:
            db: Async database session
            note_id: Note to update (required)
            title: Submitted title text
            content: Submitted content text

        Returns:
            The ActionErrors of the submission. When `has_errors` is True
            nothing was written; update_note is not called.

        Raises:
            BadRequestError: note_id is missing (→ 400)
        """
        if not note_id:
            raise BadRequestError("noteId param is required", param="noteId")

        errors = validate_note_edit(title, content)
        if errors.has_errors:
            logger.info(
                "Note %s edit rejected: %d title error(s), %d content error(s)",
                note_id,
                len(errors.field_errors.title),
                len(errors.field_errors.content),
            )
            return errors

        await self.update_note(db, note_id=note_id, title=title, content=content)
        return errors


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
