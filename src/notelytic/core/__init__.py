"""Notelytic core library - notes, categories and derived views."""

from typing import TYPE_CHECKING

from notelytic.core.types import (
    Category,
    DashboardStats,
    Note,
    NoteDraft,
    NoteQuery,
    NoteUpdate,
    SortKey,
)

if TYPE_CHECKING:
    from notelytic.core.notebook import Notebook, get_notebook

__all__ = [
    # Core classes
    "Notebook",
    "get_notebook",
    # Types
    "Category",
    "DashboardStats",
    "Note",
    "NoteDraft",
    "NoteQuery",
    "NoteUpdate",
    "SortKey",
]


def __getattr__(name: str):
    if name == "Notebook":
        from notelytic.core.notebook import Notebook

        return Notebook
    if name == "get_notebook":
        from notelytic.core.notebook import get_notebook

        return get_notebook
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
