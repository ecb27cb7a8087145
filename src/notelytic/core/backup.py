"""JSON backup format for exporting and importing a notebook."""

import logging

from pydantic import ValidationError

from notelytic.core.errors import BackupFormatError
from notelytic.core.types import BackupDocument, Category, Note

__all__ = ["BACKUP_FILENAME", "BackupFormatError", "dump_backup", "parse_backup"]

logger = logging.getLogger(__name__)

BACKUP_FILENAME = "notelytic_backup.json"


def dump_backup(notes: list[Note], categories: list[Category]) -> str:
    """Serialize notes and categories to a compact JSON document."""
    document = BackupDocument(notes=notes, categories=categories)
    return document.model_dump_json(by_alias=True)


def parse_backup(raw: str | bytes) -> BackupDocument:
    """
    Parse a backup document.

    Both the ``notes`` and ``categories`` keys are required. Note keys use
    the camelCase spelling written by ``dump_backup``; snake_case is also
    accepted.

    Raises:
        BackupFormatError: If the payload is not valid JSON or does not
            match the backup layout
    """
    try:
        return BackupDocument.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning("Rejected backup document: %s", exc.error_count())
        raise BackupFormatError(
            "Failed to import data. Please check the file format."
        ) from exc
