"""Note endpoints."""

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from notelytic.api.deps import NotebookDep
from notelytic.core.types import (
    ALL_CATEGORIES,
    Note,
    NoteDraft,
    NoteQuery,
    NoteUpdate,
    SortKey,
)

router = APIRouter()


class TagsRequest(BaseModel):
    """Replacement tag list for a note."""

    tags: list[str] = Field(default_factory=list)


class TagsResponse(BaseModel):
    """Every tag in use and how many notes carry it."""

    tags: list[str]
    counts: dict[str, int]


@router.get("/notes", response_model=list[Note])
async def list_notes(
    notebook: NotebookDep,
    search: str = Query("", description="Case-insensitive text to look for"),
    category: str = Query(ALL_CATEGORIES, description="Category name or 'All'"),
    archived: bool = Query(False, description="List archived notes instead"),
    sort_by: SortKey = Query(SortKey.UPDATED_AT, description="Sort order"),
) -> list[Note]:
    """
    List notes.

    Pinned notes come first.
    """
    query = NoteQuery(
        search=search, category=category, show_archived=archived, sort_by=sort_by
    )
    return await notebook.list_notes(query)


@router.post("/notes", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_note(draft: NoteDraft, notebook: NotebookDep) -> Note:
    """Create a note."""
    return await notebook.add_note(draft)


@router.get("/notes/{note_id}", response_model=Note)
async def get_note(note_id: str, notebook: NotebookDep) -> Note:
    return await notebook.get_note(note_id)


@router.patch("/notes/{note_id}", response_model=Note)
async def update_note(note_id: str, changes: NoteUpdate, notebook: NotebookDep) -> Note:
    """
    Edit a note.

    Only the fields provided will be updated.
    """
    return await notebook.update_note(note_id, changes)


@router.delete("/notes/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: str, notebook: NotebookDep) -> None:
    await notebook.delete_note(note_id)


@router.post("/notes/{note_id}/pin", response_model=Note)
async def toggle_pin(note_id: str, notebook: NotebookDep) -> Note:
    """Pin or unpin a note. Returns 409 when the pin limit is reached."""
    return await notebook.toggle_pin(note_id)


@router.post("/notes/{note_id}/archive", response_model=Note)
async def toggle_archive(note_id: str, notebook: NotebookDep) -> Note:
    """Archive or unarchive a note."""
    return await notebook.toggle_archive(note_id)


@router.put("/notes/{note_id}/tags", response_model=Note)
async def set_tags(note_id: str, request: TagsRequest, notebook: NotebookDep) -> Note:
    """Replace the tags of a note."""
    return await notebook.set_tags(note_id, request.tags)


@router.get("/tags", response_model=TagsResponse)
async def list_tags(notebook: NotebookDep) -> TagsResponse:
    """List tags across all notes."""
    return TagsResponse(
        tags=await notebook.all_tags(),
        counts=await notebook.tag_counts(),
    )
