"""Storage layer for Notelytic - SQLite database and repositories."""

from notelytic.storage.db import applied_migrations, get_connection, init_db
from notelytic.storage.repos import CategoriesRepo, NotesRepo

__all__ = [
    "applied_migrations",
    "get_connection",
    "init_db",
    "CategoriesRepo",
    "NotesRepo",
]
