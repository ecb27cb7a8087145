"""Health check endpoints."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from notelytic import __version__
from notelytic.api.deps import NotebookDep

router = APIRouter()


class ComponentHealth(BaseModel):
    healthy: bool
    message: str


class HealthResponse(BaseModel):
    """Overall status plus one entry per storage component."""

    status: str
    version: str
    components: dict[str, ComponentHealth]


@router.get("/health", response_model=HealthResponse)
async def health_check(notebook: NotebookDep, response: Response) -> HealthResponse:
    """
    Report whether the notes database can be read.

    Responds 503 when any component is degraded.
    """
    components = {
        name: ComponentHealth(healthy=healthy, message=message)
        for name, (healthy, message) in notebook.health_check().items()
    }
    healthy = all(component.healthy for component in components.values())
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=__version__,
        components=components,
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    return {"status": "ok"}
