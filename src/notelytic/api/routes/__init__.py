"""API route modules."""

from notelytic.api.routes import backup, categories, health, notes

__all__ = ["backup", "categories", "health", "notes"]
