"""Categories repository - pure data access for category persistence."""

import sqlite3

from notelytic.core.types import Category


class CategoriesRepo:
    """Repository for category data access."""

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize categories repository.

        Args:
            conn: SQLite connection with row_factory set
        """
        self.conn = conn

    def get_all(self) -> list[Category]:
        """Get all categories ordered by name."""
        rows = self.conn.execute(
            "SELECT name, color FROM categories ORDER BY name"
        ).fetchall()
        return [Category(name=row["name"], color=row["color"]) for row in rows]

    def get(self, name: str) -> Category | None:
        """Get a category by name."""
        row = self.conn.execute(
            "SELECT name, color FROM categories WHERE name = ?",
            (name,),
        ).fetchone()
        if row:
            return Category(name=row["name"], color=row["color"])
        return None

    def put(self, category: Category) -> None:
        """Insert or update a category."""
        self.conn.execute(
            """
            INSERT INTO categories (name, color)
            VALUES (?, ?)
            ON CONFLICT (name) DO UPDATE SET color = excluded.color
            """,
            (category.name, category.color),
        )

    def delete(self, name: str) -> bool:
        """Delete a category. Returns False if it was not stored."""
        cursor = self.conn.execute("DELETE FROM categories WHERE name = ?", (name,))
        return cursor.rowcount > 0

    def count(self) -> int:
        """Get the number of stored categories."""
        row = self.conn.execute("SELECT COUNT(*) FROM categories").fetchone()
        return row[0] if row else 0
