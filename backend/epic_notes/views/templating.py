"""
Epic Notes Backend: Template Rendering
=========================================

What:  The Jinja2 environment shared by all HTML responses, plus content
       negotiation between the JSON API and browser pages.
How:   FastAPI's Jinja2Templates over epic_notes/templates. A request that
       lists text/html in its Accept header gets a page; everything else
       (API clients, fetch() without an Accept header) gets JSON.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates
from starlette.requests import Request

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "")
