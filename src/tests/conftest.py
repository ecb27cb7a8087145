"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from notelytic.core.notebook import Notebook
from notelytic.core.types import Category, Note

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_path(tmp_path):
    """Path to a temporary notes database."""
    return tmp_path / "notes.db"


@pytest.fixture
def notebook(db_path):
    """Notebook on a temporary database, without welcome notes."""
    return Notebook(db_path=db_path, max_pinned=3, seed_welcome=False)


@pytest.fixture
def make_note():
    """Factory for Note objects with predictable timestamps."""

    def _make_note(
        note_id: str = "n1",
        *,
        title: str = "Title",
        content: str = "Content",
        category: str = "Work",
        color: str = "#FF5733",
        minutes: int = 0,
        updated_minutes: int | None = None,
        is_pinned: bool = False,
        is_archived: bool = False,
        tags: list[str] | None = None,
        image: str | None = None,
    ) -> Note:
        created = BASE_TIME + timedelta(minutes=minutes)
        updated = BASE_TIME + timedelta(
            minutes=minutes if updated_minutes is None else updated_minutes
        )
        return Note(
            id=note_id,
            title=title,
            content=content,
            category=category,
            color=color,
            created_at=created,
            updated_at=updated,
            image=image,
            is_pinned=is_pinned,
            is_archived=is_archived,
            tags=tags or [],
        )

    return _make_note


@pytest.fixture
def sample_categories():
    """A couple of categories."""
    return [
        Category(name="Work", color="#FF5733"),
        Category(name="Personal", color="#33FF57"),
    ]


@pytest.fixture
def browser_backup():
    """Backup document in the layout written by the browser dashboard."""
    return """
    {
        "notes": [
            {
                "id": "1714564800000",
                "title": "Groceries",
                "content": "<p>Milk and <strong>eggs</strong></p>",
                "category": "Personal",
                "color": "#33FF57",
                "createdAt": "2024-05-01T12:00:00.000Z",
                "updatedAt": "2024-05-02T08:30:00.000Z",
                "image": "",
                "isPinned": true,
                "isArchived": false,
                "tags": ["shopping", "home"]
            }
        ],
        "categories": [
            {"name": "Personal", "color": "#33FF57"},
            {"name": "Travel", "color": "#123456"}
        ]
    }
    """
