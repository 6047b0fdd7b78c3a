"""Tests for turning form input into task payloads."""

from datetime import date

import pytest

from taskdeck.models import TITLE_MAX_LENGTH, Priority, TaskCreate, TaskUpdate
from taskdeck.ui.widgets import FormError, build_payload


class TestBuildPayload:
    """Tests for build_payload."""

    def test_create_payload(self):
        payload = build_payload(
            {
                "title": "  Buy milk ",
                "description": "",
                "priority": Priority.HIGH,
                "due_date": "2025-05-04",
            },
            editing=False,
        )
        assert isinstance(payload, TaskCreate)
        assert payload.title == "Buy milk"
        assert payload.description is None
        assert payload.priority == Priority.HIGH
        assert payload.due_date == date(2025, 5, 4)
        assert payload.completed is False

    def test_update_payload_carries_completed(self):
        payload = build_payload(
            {"title": "Buy milk", "priority": Priority.LOW, "completed": True},
            editing=True,
        )
        assert isinstance(payload, TaskUpdate)
        assert payload.completed is True

    def test_missing_priority_defaults_to_medium(self):
        payload = build_payload({"title": "Buy milk"}, editing=False)
        assert payload.priority == Priority.MEDIUM

    def test_blank_due_date_is_none(self):
        payload = build_payload({"title": "Buy milk", "due_date": "   "}, editing=False)
        assert payload.due_date is None

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_title_required(self, title):
        with pytest.raises(FormError, match="Title is required"):
            build_payload({"title": title}, editing=False)

    def test_title_too_long(self):
        with pytest.raises(FormError, match="^Title:"):
            build_payload({"title": "x" * (TITLE_MAX_LENGTH + 1)}, editing=False)

    def test_invalid_due_date(self):
        with pytest.raises(FormError, match="^Due date:"):
            build_payload({"title": "Buy milk", "due_date": "tomorrow"}, editing=False)
