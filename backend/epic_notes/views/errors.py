"""
Epic Notes Backend: Error Pages
==================================

What:  HTML error boundary for browser clients.
How:   A status code maps to a handler that builds the message from the
       request's path params; statuses without a handler show the
       generic "<status> <message>" line.

Status handlers:
    404 on a note route → No note with the id "<note_id>" exists
"""

from typing import Callable, Dict, Optional

from starlette.requests import Request
from starlette.responses import Response

from epic_notes.views.templating import templates

StatusHandler = Callable[[Request], Optional[str]]


def _note_not_found(request: Request) -> Optional[str]:
    note_id = request.path_params.get("note_id")
    if note_id is None:
        return None
    return f'No note with the id "{note_id}" exists'


STATUS_HANDLERS: Dict[int, StatusHandler] = {
    404: _note_not_found,
}


def error_page_message(request: Request, status_code: int, message: str) -> str:
    handler = STATUS_HANDLERS.get(status_code)
    if handler is not None:
        handled = handler(request)
        if handled is not None:
            return handled
    return f"{status_code} {message}"


def render_error_page(
    request: Request,
    status_code: int,
    message: str,
    request_id: str = "",
) -> Response:
    """Render templates/error.html with the boundary message for this status."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "status_code": status_code,
            "message": error_page_message(request, status_code, message),
            "request_id": request_id,
        },
        status_code=status_code,
    )
