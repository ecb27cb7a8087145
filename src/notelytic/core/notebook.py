"""The Notebook - note and category operations over local storage.

Each operation opens its own connection and runs in a single transaction,
so a failed operation leaves the database untouched.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from threading import Lock
from typing import Generator
from uuid import uuid4

from notelytic.core.backup import dump_backup, parse_backup
from notelytic.core.config import DATABASE_PATH, MAX_PINNED_NOTES, SEED_WELCOME_NOTES
from notelytic.core.errors import (
    CategoryError,
    CategoryNotFoundError,
    NoteNotFoundError,
    NoteValidationError,
    PinLimitError,
)
from notelytic.core.types import (
    DEFAULT_NOTE_COLOR,
    UNCATEGORIZED,
    Category,
    DashboardStats,
    ImportResult,
    Note,
    NoteDraft,
    NoteQuery,
    NoteUpdate,
    utcnow,
)
from notelytic.core.views import (
    collect_tags,
    compute_stats,
    count_tags,
    normalize_tags,
    query_notes,
)
from notelytic.storage.db import applied_migrations, get_connection, init_db
from notelytic.storage.repos import CategoriesRepo, NotesRepo

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    Category(name="Work 💼", color="#FF5733"),
    Category(name="Personal 🏠", color="#33FF57"),
    Category(name="Ideas 💡", color="#3357FF"),
    Category(name="To-Do ✅", color="#FF33F5"),
]

# (id, title, content, category, color, tag)
_WELCOME_NOTES = [
    (
        "1",
        "Welcome to Notelytic 📝",
        "This is your new note-taking dashboard! 🎉",
        "Personal 🏠",
        "#33FF57",
        "welcome",
    ),
    (
        "2",
        "Getting Started 🚀",
        "Click the + button to add a new note.",
        "To-Do ✅",
        "#FF33F5",
        "tutorial",
    ),
    (
        "3",
        "Features ✨",
        "Notelytic supports rich text editing, image uploads, and more!",
        "Ideas 💡",
        "#3357FF",
        "features",
    ),
]


def _has_required_fields(title: str, content: str, category: str) -> bool:
    return bool(title.strip() and content.strip() and category.strip())


def welcome_notes() -> list[Note]:
    """Starter notes for an empty notebook."""
    now = utcnow()
    return [
        Note(
            id=note_id,
            title=title,
            content=content,
            category=category,
            color=color,
            created_at=now,
            updated_at=now,
            tags=[tag],
        )
        for note_id, title, content, category, color, tag in _WELCOME_NOTES
    ]


class Notebook:
    """Notes and categories persisted in a local SQLite database."""

    def __init__(
        self,
        db_path: Path | str | None = None,
        max_pinned: int | None = None,
        seed_welcome: bool | None = None,
    ):
        """
        Initialize notebook and apply pending migrations.

        Args:
            db_path: Path to SQLite database (defaults to DATABASE_PATH)
            max_pinned: Maximum number of pinned notes
            seed_welcome: Whether an empty notebook gets the welcome notes
        """
        self.db_path = Path(db_path) if db_path else DATABASE_PATH
        self.max_pinned = MAX_PINNED_NOTES if max_pinned is None else max_pinned
        self.seed_welcome = (
            SEED_WELCOME_NOTES if seed_welcome is None else seed_welcome
        )
        init_db(self.db_path)

    @contextmanager
    def _transaction(self) -> Generator[sqlite3.Connection, None, None]:
        with get_connection(self.db_path) as conn:
            yield conn

    def _require_note(self, repo: NotesRepo, note_id: str) -> Note:
        note = repo.get(note_id)
        if note is None:
            raise NoteNotFoundError(f"Note {note_id} not found")
        return note

    # Loading

    async def load(self) -> tuple[list[Note], list[Category]]:
        """
        Load the notebook, seeding defaults into empty stores.

        Returns:
            (notes, categories) as stored after seeding
        """
        with self._transaction() as conn:
            notes_repo = NotesRepo(conn)
            categories_repo = CategoriesRepo(conn)

            if self.seed_welcome and notes_repo.count() == 0:
                logger.info("Seeding welcome notes")
                for note in welcome_notes():
                    notes_repo.put(note)

            if categories_repo.count() == 0:
                logger.info("Seeding default categories")
                for category in DEFAULT_CATEGORIES:
                    categories_repo.put(category)

            return notes_repo.get_all(), categories_repo.get_all()

    # Notes

    async def list_notes(self, query: NoteQuery | None = None) -> list[Note]:
        """List notes filtered and sorted for display."""
        with self._transaction() as conn:
            notes = NotesRepo(conn).get_all()
        return query_notes(notes, query or NoteQuery())

    async def all_notes(self) -> list[Note]:
        """Every stored note in key order, archived ones included."""
        with self._transaction() as conn:
            return NotesRepo(conn).get_all()

    async def get_note(self, note_id: str) -> Note:
        """Get a single note."""
        with self._transaction() as conn:
            return self._require_note(NotesRepo(conn), note_id)

    async def add_note(self, draft: NoteDraft) -> Note:
        """
        Create a note from a draft.

        The note takes its colour from its category.

        Raises:
            NoteValidationError: If title, content or category is blank
        """
        if not _has_required_fields(draft.title, draft.content, draft.category):
            raise NoteValidationError("Please fill in all required fields")

        now = utcnow()
        with self._transaction() as conn:
            category = CategoriesRepo(conn).get(draft.category)
            note = Note(
                id=str(uuid4()),
                title=draft.title,
                content=draft.content,
                category=draft.category,
                color=category.color if category else DEFAULT_NOTE_COLOR,
                created_at=now,
                updated_at=now,
                image=draft.image,
                tags=normalize_tags(draft.tags),
            )
            NotesRepo(conn).put(note)

        logger.info("Added note %s", note.id)
        return note

    async def update_note(self, note_id: str, changes: NoteUpdate) -> Note:
        """
        Apply an edit to a note and bump its updated_at.

        Raises:
            NoteNotFoundError: If the note is not stored
            NoteValidationError: If the edit blanks a required field
        """
        fields = changes.model_dump(exclude_none=True)
        if "tags" in fields:
            fields["tags"] = normalize_tags(fields["tags"])
        if fields.get("image") == "":
            fields["image"] = None

        with self._transaction() as conn:
            notes_repo = NotesRepo(conn)
            current = self._require_note(notes_repo, note_id)

            if fields.get("category", current.category) != current.category:
                category = CategoriesRepo(conn).get(fields["category"])
                if category:
                    fields["color"] = category.color

            updated = current.model_copy(update={**fields, "updated_at": utcnow()})
            if not _has_required_fields(
                updated.title, updated.content, updated.category
            ):
                raise NoteValidationError("Please fill in all required fields")

            notes_repo.put(updated)

        logger.info("Updated note %s", note_id)
        return updated

    async def delete_note(self, note_id: str) -> None:
        """Delete a note."""
        with self._transaction() as conn:
            if not NotesRepo(conn).delete(note_id):
                raise NoteNotFoundError(f"Note {note_id} not found")
        logger.info("Deleted note %s", note_id)

    async def toggle_pin(self, note_id: str) -> Note:
        """
        Pin or unpin a note.

        Raises:
            PinLimitError: If the note is unpinned and the limit is reached
        """
        with self._transaction() as conn:
            notes_repo = NotesRepo(conn)
            note = self._require_note(notes_repo, note_id)

            if not note.is_pinned and notes_repo.count_pinned() >= self.max_pinned:
                logger.warning("Pin limit reached, refusing to pin %s", note_id)
                raise PinLimitError(f"You can only pin up to {self.max_pinned} notes")

            updated = note.model_copy(update={"is_pinned": not note.is_pinned})
            notes_repo.put(updated)

        logger.info(
            "%s note %s", "Pinned" if updated.is_pinned else "Unpinned", note_id
        )
        return updated

    async def toggle_archive(self, note_id: str) -> Note:
        """Archive or unarchive a note."""
        with self._transaction() as conn:
            notes_repo = NotesRepo(conn)
            note = self._require_note(notes_repo, note_id)
            updated = note.model_copy(update={"is_archived": not note.is_archived})
            notes_repo.put(updated)

        logger.info(
            "%s note %s", "Archived" if updated.is_archived else "Unarchived", note_id
        )
        return updated

    async def set_tags(self, note_id: str, tags: list[str]) -> Note:
        """Replace a note's tags."""
        with self._transaction() as conn:
            notes_repo = NotesRepo(conn)
            note = self._require_note(notes_repo, note_id)
            updated = note.model_copy(update={"tags": normalize_tags(tags)})
            notes_repo.put(updated)
        logger.info("Set tags on note %s", note_id)
        return updated

    # Tags

    async def all_tags(self) -> list[str]:
        """Distinct tags across every note."""
        with self._transaction() as conn:
            return collect_tags(NotesRepo(conn).get_all())

    async def tag_counts(self) -> dict[str, int]:
        """Number of notes per tag."""
        with self._transaction() as conn:
            return count_tags(NotesRepo(conn).get_all())

    # Categories

    async def list_categories(self) -> list[Category]:
        with self._transaction() as conn:
            return CategoriesRepo(conn).get_all()

    async def add_category(self, category: Category) -> Category:
        """
        Store a category, replacing the colour of an existing one.

        Raises:
            CategoryError: If name or colour is blank
        """
        name = category.name.strip()
        color = category.color.strip()
        if not (name and color):
            raise CategoryError("Please provide a name and color for the new category")

        stored = Category(name=name, color=color)
        with self._transaction() as conn:
            CategoriesRepo(conn).put(stored)

        logger.info("Added category %s", name)
        return stored

    async def delete_category(self, name: str) -> int:
        """
        Delete a category and move its notes to Uncategorized.

        Returns:
            Number of notes moved
        """
        with self._transaction() as conn:
            if not CategoriesRepo(conn).delete(name):
                raise CategoryNotFoundError(f"Category {name} not found")
            moved = NotesRepo(conn).reassign_category(name, UNCATEGORIZED)

        logger.info("Deleted category %s (%d notes moved)", name, moved)
        return moved

    # Backup

    async def export_data(self) -> str:
        """Export every note and category as a JSON backup document."""
        with self._transaction() as conn:
            notes = NotesRepo(conn).get_all()
            categories = CategoriesRepo(conn).get_all()
        return dump_backup(notes, categories)

    async def import_data(self, raw: str | bytes) -> ImportResult:
        """
        Import a backup document, upserting notes and categories.

        Raises:
            BackupFormatError: If the document is malformed. Nothing is written.
        """
        document = parse_backup(raw)

        with self._transaction() as conn:
            notes_repo = NotesRepo(conn)
            for note in document.notes:
                notes_repo.put(note)
            categories_repo = CategoriesRepo(conn)
            for category in document.categories:
                categories_repo.put(category)

        result = ImportResult(
            notes=len({note.id for note in document.notes}),
            categories=len({category.name for category in document.categories}),
        )
        logger.info(
            "Imported %d notes and %d categories", result.notes, result.categories
        )
        return result

    # Stats

    async def stats(self) -> DashboardStats:
        with self._transaction() as conn:
            notes = NotesRepo(conn).get_all()
            categories = CategoriesRepo(conn).get_all()
        return compute_stats(notes, categories)

    def health_check(self) -> dict[str, tuple[bool, str]]:
        """
        Check database availability.

        Returns:
            Dict mapping component name to (healthy, message)
        """
        try:
            with self._transaction() as conn:
                conn.execute("SELECT 1 FROM notes LIMIT 1").fetchall()
                schema = applied_migrations(conn)
        except sqlite3.Error as exc:
            return {"database": (False, str(exc))}
        return {"database": (True, f"{self.db_path} ({len(schema)} migrations)")}


# Default instance
_notebook: Notebook | None = None
_notebook_lock = Lock()


def get_notebook() -> Notebook:
    """Get or create the default notebook instance."""
    global _notebook
    if _notebook is None:
        with _notebook_lock:
            if _notebook is None:
                _notebook = Notebook()
    return _notebook


def set_notebook(notebook: Notebook | None) -> None:
    """Set the default notebook instance (for testing)."""
    global _notebook
    _notebook = notebook
