"""
Epic Notes Backend: Note Route Tests
=======================================

What:  End-to-end tests of the edit loader, edit action and note page.
How:   HTTPX AsyncClient against the ASGI app with a temporary SQLite database.

What we test:
    ✅ Loader JSON shape, edit form HTML, 404 with the id echoed
    ✅ Valid edit persists and redirects to the note page
    ✅ Validation errors → 400 {"status": "error", ...}, nothing saved
    ✅ Missing or non-text fields → 400 bad request
    ✅ Browser submissions get the form back with ARIA error linkage
    ✅ Leading newlines survive the edit form; a repeated field uses its first value
    ✅ Unexpected failures → 500 that still carries X-Request-ID
"""

import re

import pytest
from httpx import ASGITransport, AsyncClient
from unittest.mock import AsyncMock, patch

from epic_notes.services.note_service import note_service

HTML = {"Accept": "text/html,application/xhtml+xml"}


def edit_url(note):
    return f"/users/{note['username']}/notes/{note['id']}/edit"


def view_url(note):
    return f"/users/{note['username']}/notes/{note['id']}"


def textarea_value(html):
    """Text of the first textarea as a browser parses it (one leading newline dropped)."""
    raw = re.search(r"<textarea[^>]*>(.*?)</textarea>", html, re.S).group(1)
    return raw[1:] if raw.startswith("\n") else raw


class TestEditLoader:

    @pytest.mark.asyncio
    async def test_returns_title_and_content(self, test_client, seeded_note):
        response = await test_client.get(edit_url(seeded_note))

        assert response.status_code == 200
        assert response.json() == {
            "note": {"title": seeded_note["title"], "content": seeded_note["content"]}
        }

    @pytest.mark.asyncio
    async def test_unknown_note_is_404(self, test_client, database):
        response = await test_client.get("/users/kody/notes/missing-note/edit")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert "missing-note" in body["message"]
        assert body["details"]["resource_id"] == "missing-note"

    @pytest.mark.asyncio
    async def test_unknown_note_error_page_names_the_id(self, test_client, database):
        response = await test_client.get("/users/kody/notes/missing-note/edit", headers=HTML)

        assert response.status_code == 404
        assert "text/html" in response.headers["content-type"]
        assert "No note with the id &#34;missing-note&#34; exists" in response.text

    @pytest.mark.asyncio
    async def test_renders_edit_form_for_browsers(self, test_client, seeded_note):
        response = await test_client.get(edit_url(seeded_note), headers=HTML)

        assert response.status_code == 200
        html = response.text
        assert 'id="note-editor"' in html
        assert f'action="{edit_url(seeded_note)}"' in html
        assert 'value="Basic Koala Facts"' in html
        assert 'minlength="1" maxlength="100"' in html
        assert 'minlength="1" maxlength="10000"' in html
        assert '<label for="note-title">Title</label>' in html
        assert '<label for="note-content">Content</label>' in html
        assert "aria-invalid" not in html
        assert 'id="title-error"' not in html
        assert 'data-status="idle"' in html

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, test_client, seeded_note):
        response = await test_client.get(
            edit_url(seeded_note), headers={"X-Request-ID": "abc123"}
        )

        assert response.headers["X-Request-ID"] == "abc123"


class TestEditAction:

    @pytest.mark.asyncio
    async def test_valid_edit_saves_and_redirects(self, test_client, seeded_note):
        response = await test_client.post(
            edit_url(seeded_note), data={"title": "Hi", "content": "Body"}
        )

        assert response.status_code == 302
        assert response.headers["location"] == view_url(seeded_note)

        loaded = await test_client.get(edit_url(seeded_note))
        assert loaded.json() == {"note": {"title": "Hi", "content": "Body"}}

    @pytest.mark.asyncio
    async def test_multipart_body_is_accepted(self, test_client, seeded_note):
        response = await test_client.post(
            edit_url(seeded_note),
            files={"title": (None, "Hi"), "content": (None, "Body")},
        )

        assert response.status_code == 302
        assert response.headers["location"] == view_url(seeded_note)

    @pytest.mark.asyncio
    async def test_empty_title_returns_field_error(self, test_client, seeded_note):
        response = await test_client.post(
            edit_url(seeded_note), data={"title": "", "content": "Body"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "status": "error",
            "errors": {
                "formErrors": [],
                "fieldErrors": {
                    "title": ["Title must be at least 1 character"],
                    "content": [],
                },
            },
        }

    @pytest.mark.asyncio
    async def test_title_and_content_errors_co_occur(self, test_client, seeded_note):
        response = await test_client.post(
            edit_url(seeded_note), data={"title": "x" * 101, "content": "x" * 10001}
        )

        assert response.status_code == 400
        field_errors = response.json()["errors"]["fieldErrors"]
        assert field_errors["title"] == ["Title must be at most 100 characters"]
        assert field_errors["content"] == ["Content must be at most 10000 characters"]

    @pytest.mark.asyncio
    async def test_rejected_edit_is_not_persisted(self, test_client, seeded_note):
        with patch.object(note_service, "update_note", new=AsyncMock()) as mock_update:
            response = await test_client.post(
                edit_url(seeded_note), data={"title": "", "content": ""}
            )

        assert response.status_code == 400
        mock_update.assert_not_awaited()

        loaded = await test_client.get(edit_url(seeded_note))
        assert loaded.json()["note"]["title"] == seeded_note["title"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data, missing",
        [
            ({"content": "Body"}, "title"),
            ({"title": "Hi"}, "content"),
        ],
    )
    async def test_missing_field_is_bad_request(self, test_client, seeded_note, data, missing):
        response = await test_client.post(edit_url(seeded_note), data=data)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "bad_request"
        assert body["message"] == f"{missing} must be a string"

    @pytest.mark.asyncio
    async def test_file_in_place_of_text_is_bad_request(self, test_client, seeded_note):
        response = await test_client.post(
            edit_url(seeded_note),
            data={"content": "Body"},
            files={"title": ("title.txt", b"Hi", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "title must be a string"

    @pytest.mark.asyncio
    async def test_unknown_note_is_404(self, test_client, database):
        response = await test_client.post(
            "/users/kody/notes/missing-note/edit", data={"title": "Hi", "content": "Body"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_browser_gets_form_back_with_errors(self, test_client, seeded_note):
        response = await test_client.post(
            edit_url(seeded_note),
            data={"title": "", "content": "Still here"},
            headers=HTML,
        )

        assert response.status_code == 400
        html = response.text
        assert 'aria-invalid="true" aria-describedby="title-error"' in html
        assert '<ul id="title-error"' in html
        assert "Title must be at least 1 character" in html
        assert 'id="content-error"' not in html
        assert ">\nStill here</textarea>" in html

    @pytest.mark.asyncio
    async def test_leading_newline_survives_the_edit_form(self, test_client, seeded_note):
        await test_client.post(edit_url(seeded_note), data={"title": "Hi", "content": "\nBody"})

        page = await test_client.get(edit_url(seeded_note), headers=HTML)

        assert page.status_code == 200
        assert textarea_value(page.text) == "\nBody"

    @pytest.mark.asyncio
    async def test_repeated_field_uses_first_value(self, test_client, seeded_note):
        response = await test_client.post(
            edit_url(seeded_note), data={"title": ["First", "Second"], "content": "Body"}
        )

        assert response.status_code == 302
        loaded = await test_client.get(edit_url(seeded_note))
        assert loaded.json()["note"]["title"] == "First"

    @pytest.mark.asyncio
    async def test_persistence_failure_is_500_with_request_id(self, seeded_note):
        from epic_notes.main import app

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with patch.object(
                note_service, "update_note", new=AsyncMock(side_effect=RuntimeError("disk I/O error"))
            ):
                response = await client.post(
                    edit_url(seeded_note),
                    data={"title": "Hi", "content": "Body"},
                    headers={"X-Request-ID": "abc123"},
                )

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "abc123"
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "abc123"
        assert "disk I/O error" not in response.text



class TestNoteView:

    @pytest.mark.asyncio
    async def test_returns_note_with_owner(self, test_client, seeded_note):
        response = await test_client.get(view_url(seeded_note))

        assert response.status_code == 200
        note = response.json()["note"]
        assert note["id"] == seeded_note["id"]
        assert note["title"] == seeded_note["title"]
        assert note["owner"]["username"] == seeded_note["username"]

    @pytest.mark.asyncio
    async def test_page_links_to_editor(self, test_client, seeded_note):
        response = await test_client.get(view_url(seeded_note), headers=HTML)

        assert response.status_code == 200
        assert f'href="{edit_url(seeded_note)}"' in response.text


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client, database):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
