"""Export, import and dashboard statistics endpoints."""

from fastapi import APIRouter, Request, Response

from notelytic.api.deps import NotebookDep
from notelytic.core.backup import BACKUP_FILENAME
from notelytic.core.types import DashboardStats, ImportResult

router = APIRouter()


@router.get("/export")
async def export_notes(notebook: NotebookDep) -> Response:
    """
    Download every note and category as a JSON backup.
    """
    payload = await notebook.export_data()
    return Response(
        content=payload,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{BACKUP_FILENAME}"'},
    )


@router.post("/import", response_model=ImportResult)
async def import_notes(request: Request, notebook: NotebookDep) -> ImportResult:
    """
    Import a JSON backup.

    The request body is the backup document itself. Existing notes and
    categories with the same key are replaced.
    """
    raw = await request.body()
    return await notebook.import_data(raw)


@router.get("/stats", response_model=DashboardStats)
async def get_stats(notebook: NotebookDep) -> DashboardStats:
    return await notebook.stats()
