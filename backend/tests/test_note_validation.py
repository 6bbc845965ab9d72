"""
Epic Notes Backend: Note Edit Validation Tests
=================================================

What:  Tests for validate_note_edit length bounds.

What we test:
    ✅ Bounds are inclusive: 1 and 100 title chars, 1 and 10000 content chars pass
    ✅ Each violated bound yields exactly one message on its own field
    ✅ Title and content errors accumulate in one result
"""

import pytest

from epic_notes.schemas.note import ActionErrors
from epic_notes.services.note_service import validate_note_edit


@pytest.mark.parametrize(
    "title",
    ["H", "Hi", "x" * 100, "é" * 100],
)
def test_title_within_bounds(title):
    errors = validate_note_edit(title, "Body")

    assert errors.field_errors.title == []
    assert not errors.has_errors


@pytest.mark.parametrize(
    "title, expected",
    [
        ("", "Title must be at least 1 character"),
        ("x" * 101, "Title must be at most 100 characters"),
        ("x" * 5000, "Title must be at most 100 characters"),
    ],
)
def test_title_out_of_bounds(title, expected):
    errors = validate_note_edit(title, "Body")

    assert errors.field_errors.title == [expected]
    assert errors.field_errors.content == []
    assert errors.has_errors


@pytest.mark.parametrize("length", [1, 10000])
def test_content_within_bounds(length):
    errors = validate_note_edit("Hi", "x" * length)

    assert not errors.has_errors


@pytest.mark.parametrize(
    "content, expected",
    [
        ("", "Content must be at least 1 character"),
        ("x" * 10001, "Content must be at most 10000 characters"),
    ],
)
def test_content_out_of_bounds(content, expected):
    errors = validate_note_edit("Hi", content)

    assert errors.field_errors.content == [expected]
    assert errors.field_errors.title == []


def test_errors_accumulate_across_fields():
    errors = validate_note_edit("x" * 101, "")

    assert errors.field_errors.title == ["Title must be at most 100 characters"]
    assert errors.field_errors.content == ["Content must be at least 1 character"]
    assert errors.form_errors == []


def test_whitespace_counts_toward_length():
    """Titles are not trimmed: a single space is one character."""
    assert not validate_note_edit(" ", "Body").has_errors


def test_action_errors_serialize_with_camel_case_keys():
    errors = validate_note_edit("", "Body")

    assert errors.model_dump(by_alias=True) == {
        "formErrors": [],
        "fieldErrors": {
            "title": ["Title must be at least 1 character"],
            "content": [],
        },
    }


def test_form_errors_alone_count_as_errors():
    errors = ActionErrors(formErrors=["Something went wrong"])

    assert errors.has_errors
