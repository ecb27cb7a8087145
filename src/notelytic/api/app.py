"""FastAPI application for the Notelytic REST API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notelytic import __version__
from notelytic.api.middleware import api_key_middleware
from notelytic.api.routes import backup, categories, health, notes
from notelytic.core.config import (
    NOTELYTIC_CORS_ORIGINS,
    NOTELYTIC_HOST,
    NOTELYTIC_PORT,
    setup_logging,
)
from notelytic.core.errors import NotebookError
from notelytic.core.notebook import get_notebook

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Notelytic API starting up...")
    notes, categories = await get_notebook().load()
    logger.info("Loaded %d notes and %d categories", len(notes), len(categories))
    yield
    logger.info("Notelytic API shutting down...")


def register_exception_handlers(app: FastAPI) -> None:
    """Map notebook errors to JSON error responses."""

    @app.exception_handler(NotebookError)
    async def notebook_error_handler(
        request: Request, exc: NotebookError
    ) -> JSONResponse:
        logger.warning("Notebook error on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": str(exc)},
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Notelytic API",
        description="REST API for Notelytic - your local note-taking dashboard",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=NOTELYTIC_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(api_key_middleware)

    register_exception_handlers(app)

    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(notes.router, prefix="/api/v1", tags=["Notes"])
    app.include_router(categories.router, prefix="/api/v1", tags=["Categories"])
    app.include_router(backup.router, prefix="/api/v1", tags=["Backup"])

    return app


# Create the default app instance
app = create_app()


def run_server(host: str | None = None, port: int | None = None):
    """Run the API server."""
    import uvicorn

    setup_logging()
    uvicorn.run(
        "notelytic.api.app:app",
        host=host or NOTELYTIC_HOST,
        port=port or NOTELYTIC_PORT,
        reload=False,
    )


if __name__ == "__main__":
    run_server()
