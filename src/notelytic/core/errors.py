"""Notebook error hierarchy.

Each error carries the HTTP status the REST API answers with.
"""


class NotebookError(Exception):
    """Base error for notebook operations."""

    status_code = 400


class NoteNotFoundError(NotebookError):
    """Raised when a note ID is not stored."""

    status_code = 404


class NoteValidationError(NotebookError):
    """Raised when a note is missing required fields."""


class PinLimitError(NotebookError):
    """Raised when pinning would exceed the pinned-note limit."""

    status_code = 409


class CategoryError(NotebookError):
    """Raised when a category is missing its name or colour."""


class CategoryNotFoundError(NotebookError):
    """Raised when a category name is not stored."""

    status_code = 404


class BackupFormatError(NotebookError):
    """Raised when an import file is not a valid backup document."""
