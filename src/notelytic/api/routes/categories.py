"""Category endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from notelytic.api.deps import NotebookDep
from notelytic.core.types import Category

router = APIRouter()


class DeleteCategoryResponse(BaseModel):
    """Result of deleting a category."""

    name: str
    notes_moved: int


@router.get("/categories", response_model=list[Category])
async def list_categories(notebook: NotebookDep) -> list[Category]:
    return await notebook.list_categories()


@router.post(
    "/categories", response_model=Category, status_code=status.HTTP_201_CREATED
)
async def create_category(category: Category, notebook: NotebookDep) -> Category:
    """Create a category, or change the colour of an existing one."""
    return await notebook.add_category(category)


@router.delete("/categories/{name}", response_model=DeleteCategoryResponse)
async def delete_category(name: str, notebook: NotebookDep) -> DeleteCategoryResponse:
    """
    Delete a category.

    Notes in the category move to "Uncategorized".
    """
    moved = await notebook.delete_category(name)
    return DeleteCategoryResponse(name=name, notes_moved=moved)
