"""Repository classes for data access."""

from notelytic.storage.repos.categories_repo import CategoriesRepo
from notelytic.storage.repos.notes_repo import NotesRepo

__all__ = [
    "CategoriesRepo",
    "NotesRepo",
]
