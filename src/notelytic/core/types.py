"""Shared types and data structures for Notelytic."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

ALL_CATEGORIES = "All"
UNCATEGORIZED = "Uncategorized"
DEFAULT_NOTE_COLOR = "#CCCCCC"

__all__ = [
    "ALL_CATEGORIES",
    "DEFAULT_NOTE_COLOR",
    "UNCATEGORIZED",
    "BackupDocument",
    "Category",
    "DashboardStats",
    "ImportResult",
    "Note",
    "NoteDraft",
    "NoteQuery",
    "NoteUpdate",
    "SortKey",
    "utcnow",
]


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class SortKey(StrEnum):
    """Sort order for note listings."""

    UPDATED_AT = "updated_at"
    CREATED_AT = "created_at"
    TITLE = "title"


class Category(
    BaseModel, frozen=True, alias_generator=to_camel, populate_by_name=True
):
    """Named note category with a display colour."""

    name: str
    color: str


class Note(BaseModel, frozen=True, alias_generator=to_camel, populate_by_name=True):
    """A stored note.

    Serialized with camelCase keys (``createdAt``, ``isPinned``) so backups
    produced by the browser dashboard round-trip unchanged.
    """

    id: str
    title: str
    content: str
    category: str = UNCATEGORIZED
    color: str = DEFAULT_NOTE_COLOR
    created_at: datetime
    updated_at: datetime
    image: str | None = None
    is_pinned: bool = False
    is_archived: bool = False
    tags: list[str] = Field(default_factory=list)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_validator("image")
    @classmethod
    def _empty_image_is_none(cls, value: str | None) -> str | None:
        return value or None


class NoteDraft(
    BaseModel, frozen=True, alias_generator=to_camel, populate_by_name=True
):
    """Fields supplied when creating a note."""

    title: str = ""
    content: str = ""
    category: str = ""
    image: str | None = None
    tags: list[str] = Field(default_factory=list)


class NoteUpdate(
    BaseModel, frozen=True, alias_generator=to_camel, populate_by_name=True
):
    """Partial edit of a note. ``None`` leaves a field unchanged."""

    title: str | None = None
    content: str | None = None
    category: str | None = None
    image: str | None = None
    tags: list[str] | None = None


class NoteQuery(BaseModel, frozen=True):
    """Filter and sort options for a note listing."""

    search: str = ""
    category: str = ALL_CATEGORIES
    show_archived: bool = False
    sort_by: SortKey = SortKey.UPDATED_AT


class DashboardStats(BaseModel, frozen=True):
    """Summary counters shown on the dashboard."""

    total_notes: int = 0
    active_notes: int = 0
    archived_notes: int = 0
    pinned_notes: int = 0
    category_count: int = 0
    tag_count: int = 0
    notes_per_category: dict[str, int] = Field(default_factory=dict)


class BackupDocument(BaseModel, frozen=True):
    """Exported notebook: every note and category."""

    notes: list[Note]
    categories: list[Category]


class ImportResult(BaseModel, frozen=True):
    """Counts of records written by an import."""

    notes: int
    categories: int
