"""
Epic Notes Backend: Note Editor View Model
=============================================

What:  Computes everything the edit form template needs: field values,
       client-side length limits, ARIA error linkage, and the submit
       button state.
How:   Pure functions over loader data, action errors and navigation state.
       No I/O, so the rendering rules are testable without HTTP.
Who:   Used by routes/notes.py to render templates/note_edit.html.

ARIA linkage:
    A field with errors gets aria-invalid="true" and aria-describedby set to
    the id of the <ul> listing its errors ("title-error", "content-error").
    Form-level errors use "form-error" on the <form> itself. A field without
    errors gets neither attribute and no error list is rendered.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from epic_notes.schemas.note import (
    CONTENT_MAX_LENGTH,
    CONTENT_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    ActionErrors,
    NoteEditData,
)

FORM_ID = "note-editor"


class NavigationState(BaseModel):
    """
    What:  The client's in-flight navigation, if any.

    state:        "idle", "submitting" or "loading"
    form_method:  HTTP method of the submission being navigated, lowercase
    form_action:  URL the submission was posted to
    """
    state: str = "idle"
    form_method: Optional[str] = None
    form_action: Optional[str] = None


class FieldState(BaseModel):
    """One labelled input of the editor with its error annotations."""
    name: str
    input_id: str
    label: str
    value: str
    min_length: int
    max_length: int
    errors: List[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_id(self) -> Optional[str]:
        return f"{self.name}-error" if self.has_errors else None

    @property
    def aria_invalid(self) -> Optional[str]:
        return "true" if self.has_errors else None

    @property
    def aria_describedby(self) -> Optional[str]:
        return self.error_id


class NoteEditorView(BaseModel):
    """Render state of the note edit form."""
    form_id: str = FORM_ID
    form_action: str
    title: FieldState
    content: FieldState
    form_errors: List[str] = Field(default_factory=list)
    no_validate: bool = False
    is_submitting: bool = False

    @property
    def form_has_errors(self) -> bool:
        return bool(self.form_errors)

    @property
    def form_error_id(self) -> Optional[str]:
        return "form-error" if self.form_has_errors else None

    @property
    def form_aria_invalid(self) -> Optional[str]:
        return "true" if self.form_has_errors else None

    @property
    def submit_status(self) -> str:
        return "pending" if self.is_submitting else "idle"


def is_submitting(navigation: Optional[NavigationState], form_action: str) -> bool:
    """
    True while this form's own POST is in flight.

    A navigation elsewhere (a link, another form, a GET) leaves the
    button enabled.
    """
    if navigation is None:
        return False
    return (
        navigation.state != "idle"
        and (navigation.form_method or "").lower() == "post"
        and navigation.form_action == form_action
    )


def build_note_editor(
    data: NoteEditData,
    form_action: str,
    action_errors: Optional[ActionErrors] = None,
    navigation: Optional[NavigationState] = None,
    is_hydrated: bool = False,
) -> NoteEditorView:
    """
    Assemble the edit form state.

    Args:
        data: Values to pre-fill (loader data, or the rejected submission)
        form_action: URL the form posts to
        action_errors: Errors of the last submission, if it was rejected
        navigation: In-flight navigation, if any
        is_hydrated: Whether client script is running; native browser
            validation is turned off once it is, so errors only show once

    Returns:
        NoteEditorView ready for templates/note_edit.html
    """
    field_errors = action_errors.field_errors if action_errors else None

    return NoteEditorView(
        form_action=form_action,
        title=FieldState(
            name="title",
            input_id="note-title",
            label="Title",
            value=data.title,
            min_length=TITLE_MIN_LENGTH,
            max_length=TITLE_MAX_LENGTH,
            errors=list(field_errors.title) if field_errors else [],
        ),
        content=FieldState(
            name="content",
            input_id="note-content",
            label="Content",
            value=data.content,
            min_length=CONTENT_MIN_LENGTH,
            max_length=CONTENT_MAX_LENGTH,
            errors=list(field_errors.content) if field_errors else [],
        ),
        form_errors=list(action_errors.form_errors) if action_errors else [],
        no_validate=is_hydrated,
        is_submitting=is_submitting(navigation, form_action),
    )
