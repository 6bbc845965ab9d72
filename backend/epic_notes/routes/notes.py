"""
Epic Notes Backend: Note Route Handlers
==========================================

What:  The note edit route and the note page it redirects to.
How:   Extracts params and form fields, delegates to NoteService, then
       answers with JSON or, for browsers (Accept: text/html), a page.

Route Inventory:
    GET  /users/{username}/notes/{note_id}/edit   loader: {"note": {title, content}}
    POST /users/{username}/notes/{note_id}/edit   action: 400 errors or 302 redirect
    GET  /users/{username}/notes/{note_id}        note page (redirect target)

Form Parsing:
    The action accepts multipart/form-data and application/x-www-form-urlencoded.
    `title` and `content` must both be present as text; a missing field or
    an uploaded file in its place is a bad request (400), not a validation
    error.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import FormData
from starlette.responses import Response

from epic_notes.database import get_db_session
from epic_notes.exceptions import BadRequestError
from epic_notes.schemas.note import (
    ActionErrorResponse,
    ActionErrors,
    ErrorResponse,
    NoteEditData,
    NoteLoaderResponse,
    NoteViewResponse,
)
from epic_notes.services.note_service import note_service
from epic_notes.views.note_editor import build_note_editor
from epic_notes.views.templating import templates, wants_html

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


def note_path(username: str, note_id: str) -> str:
    return f"/users/{username}/notes/{note_id}"


def note_edit_path(username: str, note_id: str) -> str:
    return f"{note_path(username, note_id)}/edit"


def require_text(form: FormData, name: str) -> str:
    """Return form field `name` as text, or raise a 400 when it is missing or a file."""
    # First value wins when a field is repeated
    values = form.getlist(name)
    value = values[0] if values else None
    if not isinstance(value, str):
        raise BadRequestError(f"{name} must be a string", param=name)
    return value


def render_note_editor(
    request: Request,
    username: str,
    note_id: str,
    data: NoteEditData,
    action_errors: Optional[ActionErrors] = None,
    status_code: int = 200,
) -> Response:
    editor = build_note_editor(
        data=data,
        form_action=note_edit_path(username, note_id),
        action_errors=action_errors,
    )
    return templates.TemplateResponse(
        request,
        "note_edit.html",
        {"editor": editor, "username": username, "note_id": note_id},
        status_code=status_code,
    )


@router.get(
    "/users/{username}/notes/{note_id}/edit",
    response_model=NoteLoaderResponse,
    responses={
        200: {"description": "Editable note fields, or the edit form for browsers"},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Load a note for editing",
)
async def note_edit_loader(
    request: Request,
    username: str,
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Union[NoteLoaderResponse, Response]:
    """
    Supply the edit page with the note's title and content.

    Returns:
        NoteLoaderResponse, or the rendered edit form for browsers.

    Error responses (handled by global exception handlers):
        HTTP 404: No note with this id; the error page names the id
    """
    data = await note_service.get_note_for_edit(db=db, note_id=note_id)

    if wants_html(request):
        return render_note_editor(request, username, note_id, data.note)
    return data


@router.post(
    "/users/{username}/notes/{note_id}/edit",
    responses={
        302: {"description": "Edit saved; redirects to the note page"},
        400: {"description": "Validation errors or missing form fields", "model": ActionErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Save an edit to a note",
)
async def note_edit_action(
    request: Request,
    username: str,
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Validate a submitted edit and save it.

    Processing Steps:
        1. Read `title` and `content` from the form body (400 if not text)
        2. NoteService validates lengths, saving only when all pass
        3. Errors → 400 {"status": "error", "errors": ...}
           (browsers get the form back with the errors and their input)
        4. Saved → 302 to /users/{username}/notes/{note_id}
    """
    async with request.form() as form:
        title = require_text(form, "title")
        content = require_text(form, "content")

    errors = await note_service.submit_note_edit(
        db=db,
        note_id=note_id,
        title=title,
        content=content,
    )

    if errors.has_errors:
        if wants_html(request):
            return render_note_editor(
                request,
                username,
                note_id,
                NoteEditData(title=title, content=content),
                action_errors=errors,
                status_code=400,
            )
        body = ActionErrorResponse(errors=errors)
        return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))

    return RedirectResponse(url=note_path(username, note_id), status_code=302)


@router.get(
    "/users/{username}/notes/{note_id}",
    response_model=NoteViewResponse,
    responses={
        200: {"description": "The note, or the note page for browsers"},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Show a note",
)
async def note_view(
    request: Request,
    username: str,
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Union[NoteViewResponse, Response]:
    result = await note_service.get_note(db=db, note_id=note_id)

    if wants_html(request):
        return templates.TemplateResponse(
            request,
            "note_view.html",
            {"note": result.note, "edit_url": note_edit_path(username, note_id)},
        )
    return result
