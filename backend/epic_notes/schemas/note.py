"""
Epic Notes Backend: Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract of the note routes.
How:   Route handlers build these and serialize them by alias, so the wire
       format keeps the camelCase keys browser clients expect
       (`formErrors`, `fieldErrors`).
Who:   Used by routes, the note service, and the note editor view.

Length bounds live here because the server-side validation and the form's
client-side minlength/maxlength attributes must agree.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


TITLE_MIN_LENGTH = 1
TITLE_MAX_LENGTH = 100
CONTENT_MIN_LENGTH = 1
CONTENT_MAX_LENGTH = 10000


# ══════════════════════════════════════════════════════════════════════════
# Loader Models: What the edit page reads
# ══════════════════════════════════════════════════════════════════════════


class NoteEditData(BaseModel):
    """The editable fields of a note."""
    title: str = Field(description="Current note title")
    content: str = Field(description="Current note body")

    model_config = {"from_attributes": True}


class NoteLoaderResponse(BaseModel):
    """
    What:  Body of GET /users/{username}/notes/{note_id}/edit.

    Example:
        {"note": {"title": "Koalas", "content": "Koalas are not bears."}}
    """
    note: NoteEditData


# ══════════════════════════════════════════════════════════════════════════
# Action Models: What a rejected edit returns
# ══════════════════════════════════════════════════════════════════════════


class FieldErrors(BaseModel):
    """Per-field validation messages; an empty list means the field is valid."""
    title: List[str] = Field(default_factory=list)
    content: List[str] = Field(default_factory=list)


class ActionErrors(BaseModel):
    """
    What:  Validation result of one edit submission.
    When:  Built fresh per submission, discarded once the response is sent.

    Messages accumulate: a submission with an empty title and an oversized
    body carries one title error and one content error.
    """
    form_errors: List[str] = Field(default_factory=list, alias="formErrors")
    field_errors: FieldErrors = Field(default_factory=FieldErrors, alias="fieldErrors")

    model_config = {"populate_by_name": True}

    @property
    def has_errors(self) -> bool:
        return bool(self.form_errors) or any(
            messages for messages in self.field_errors.model_dump().values()
        )


class ActionErrorResponse(BaseModel):
    """
    What:  400 body of POST /users/{username}/notes/{note_id}/edit.

    Example:
        {
            "status": "error",
            "errors": {
                "formErrors": [],
                "fieldErrors": {
                    "title": ["Title must be at least 1 character"],
                    "content": []
                }
            }
        }
    """
    status: Literal["error"] = "error"
    errors: ActionErrors


# ══════════════════════════════════════════════════════════════════════════
# View Models: The note page the action redirects to
# ══════════════════════════════════════════════════════════════════════════


class NoteOwner(BaseModel):
    username: str
    name: Optional[str] = None

    model_config = {"from_attributes": True}


class NoteDetail(BaseModel):
    id: str = Field(description="Note identifier")
    title: str
    content: str
    updated_at: datetime = Field(description="Last edit time (UTC)")
    owner: NoteOwner

    model_config = {"from_attributes": True}


class NoteViewResponse(BaseModel):
    """Body of GET /users/{username}/notes/{note_id}."""
    note: NoteDetail


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models: Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Body returned for raised errors (400 bad request, 404, 500).

    Fields:
        error: Machine-readable error code (e.g., "bad_request", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which param was missing)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
