"""
Epic Notes Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for conditions that end a request early.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return a JSON error body, or an error page for browser clients.
Who:   Raised by route handlers and services; caught by global handlers.

Exception Hierarchy:
    EpicNotesError (base)
    ├── BadRequestError   → 400 Bad Request (missing or malformed params)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

Length-bound violations on a note edit are NOT exceptions: they are collected
into ActionErrors and returned as data (see services/note_service.py).
"""

from typing import Any, Dict, Optional


class EpicNotesError(Exception):
    """
    Base exception for all Epic Notes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BadRequestError(EpicNotesError):
    """
    Raised when a required request parameter is missing or has the wrong type.

    When:    No note id on the write path; `title`/`content` absent from the
             form body or sent as a file instead of text.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "bad_request",
            "message": "title must be a string",
            "details": {"param": "title"}
        }
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Bad request",
        param: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if param:
            ctx["param"] = param
        super().__init__(message=message, context=ctx)
        self.param = param


class NotFoundError(EpicNotesError):
    """
    Raised when a requested resource does not exist.

    When:    Loading or updating a note whose id is not in the database.
    HTTP:    404 Not Found

    The resource id is kept on the exception so the error page can echo it.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(EpicNotesError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; details such as
    the SQL or constraint name go to the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
