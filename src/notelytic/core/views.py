"""Derived views over the note list: filtering, sorting and tag aggregation.

Everything here is a pure function of its arguments; the notebook service
loads notes from storage and hands them in.
"""

import re
from collections import Counter
from collections.abc import Iterable

from notelytic.core.types import (
    ALL_CATEGORIES,
    Category,
    DashboardStats,
    Note,
    NoteQuery,
    SortKey,
)

_TAG_RE = re.compile(r"<[^>]+>")


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Trim tags, drop blanks and repeated tags (first occurrence wins)."""
    seen: dict[str, None] = {}
    for tag in tags:
        cleaned = tag.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


def matches_query(note: Note, query: NoteQuery) -> bool:
    """Check a note against the category, search and archive filters."""
    if query.category != ALL_CATEGORIES and note.category != query.category:
        return False

    if note.is_archived != query.show_archived:
        return False

    term = query.search.lower()
    if not term:
        return True
    return (
        term in note.title.lower()
        or term in note.content.lower()
        or any(term in tag.lower() for tag in note.tags)
    )


def filter_notes(notes: Iterable[Note], query: NoteQuery) -> list[Note]:
    """Keep notes matching the query, preserving order."""
    return [note for note in notes if matches_query(note, query)]


def sort_notes(notes: Iterable[Note], sort_by: SortKey) -> list[Note]:
    """
    Sort notes with pinned notes first.

    Within each group titles sort case-insensitively ascending and
    timestamps newest first. Ties keep their input order.
    """
    if sort_by is SortKey.TITLE:
        ordered = sorted(notes, key=lambda note: note.title.casefold())
    else:
        ordered = sorted(
            notes, key=lambda note: getattr(note, sort_by.value), reverse=True
        )
    return sorted(ordered, key=lambda note: not note.is_pinned)


def query_notes(notes: Iterable[Note], query: NoteQuery) -> list[Note]:
    """Filter then sort notes for display."""
    return sort_notes(filter_notes(notes, query), query.sort_by)


def collect_tags(notes: Iterable[Note]) -> list[str]:
    """Distinct tags across notes in first-seen order."""
    seen: dict[str, None] = {}
    for note in notes:
        for tag in note.tags:
            seen.setdefault(tag, None)
    return list(seen)


def count_tags(notes: Iterable[Note]) -> dict[str, int]:
    """Number of notes carrying each tag."""
    counter: Counter[str] = Counter()
    for note in notes:
        counter.update(set(note.tags))
    return dict(counter)


def pinned_count(notes: Iterable[Note]) -> int:
    return sum(1 for note in notes if note.is_pinned)


def plain_text(content: str) -> str:
    """Rich-text content with markup removed and whitespace collapsed."""
    return " ".join(_TAG_RE.sub(" ", content).split())


def excerpt(content: str, length: int = 100) -> str:
    """Plain-text preview of rich-text content."""
    text = plain_text(content)
    if len(text) <= length:
        return text
    return text[:length] + "..."


def compute_stats(notes: list[Note], categories: list[Category]) -> DashboardStats:
    """Build dashboard counters."""
    per_category = Counter(note.category for note in notes)
    archived = sum(1 for note in notes if note.is_archived)
    return DashboardStats(
        total_notes=len(notes),
        active_notes=len(notes) - archived,
        archived_notes=archived,
        pinned_notes=pinned_count(notes),
        category_count=len(categories),
        tag_count=len(collect_tags(notes)),
        notes_per_category=dict(per_category),
    )
