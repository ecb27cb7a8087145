"""FastAPI dependencies for the Notelytic API."""

from typing import Annotated

from fastapi import Depends

from notelytic.core.notebook import Notebook, get_notebook


async def get_notebook_instance() -> Notebook:
    """
    Get Notebook instance for request processing.

    Returns:
        Notebook instance
    """
    return get_notebook()


# Type aliases for dependency injection
NotebookDep = Annotated[Notebook, Depends(get_notebook_instance)]
