"""Notes repository - pure data access for note persistence."""

import json
import sqlite3
from datetime import datetime

from notelytic.core.types import Note

_COLUMNS = """
    id, title, content, category, color, created_at, updated_at,
    image, is_pinned, is_archived, tags
"""


def _row_to_note(row: sqlite3.Row) -> Note:
    return Note(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        category=row["category"],
        color=row["color"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
        image=row["image"],
        is_pinned=bool(row["is_pinned"]),
        is_archived=bool(row["is_archived"]),
        tags=json.loads(row["tags"]),
    )


class NotesRepo:
    """Repository for note data access."""

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize notes repository.

        Args:
            conn: SQLite connection with row_factory set
        """
        self.conn = conn

    def get_all(self) -> list[Note]:
        """Get all notes in key order."""
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM notes ORDER BY id"
        ).fetchall()
        return [_row_to_note(row) for row in rows]

    def get(self, note_id: str) -> Note | None:
        """Get a note by ID, or None if not stored."""
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM notes WHERE id = ?",
            (note_id,),
        ).fetchone()
        if row:
            return _row_to_note(row)
        return None

    def put(self, note: Note) -> None:
        """Insert a note or replace the stored note with the same ID."""
        self.conn.execute(
            """
            INSERT INTO notes (
                id, title, content, category, color, created_at, updated_at,
                image, is_pinned, is_archived, tags
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (id) DO UPDATE SET
                title = excluded.title,
                content = excluded.content,
                category = excluded.category,
                color = excluded.color,
                created_at = excluded.created_at,
                updated_at = excluded.updated_at,
                image = excluded.image,
                is_pinned = excluded.is_pinned,
                is_archived = excluded.is_archived,
                tags = excluded.tags
            """,
            (
                note.id,
                note.title,
                note.content,
                note.category,
                note.color,
                note.created_at.isoformat(),
                note.updated_at.isoformat(),
                note.image,
                1 if note.is_pinned else 0,
                1 if note.is_archived else 0,
                json.dumps(note.tags),
            ),
        )

    def delete(self, note_id: str) -> bool:
        """Delete a note. Returns False if it was not stored."""
        cursor = self.conn.execute("DELETE FROM notes WHERE id = ?", (note_id,))
        return cursor.rowcount > 0

    def count(self) -> int:
        """Get the number of stored notes."""
        row = self.conn.execute("SELECT COUNT(*) FROM notes").fetchone()
        return row[0] if row else 0

    def count_pinned(self) -> int:
        """Get the number of pinned notes, archived ones included."""
        row = self.conn.execute(
            "SELECT COUNT(*) FROM notes WHERE is_pinned = 1"
        ).fetchone()
        return row[0] if row else 0

    def reassign_category(self, old: str, new: str) -> int:
        """Move every note in category ``old`` to ``new``."""
        cursor = self.conn.execute(
            "UPDATE notes SET category = ? WHERE category = ?",
            (new, old),
        )
        return cursor.rowcount
