"""FastAPI application for the bodylog HTTP API."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from .. import __version__
from ..db.engine import get_db_path, init_db
from .routers import calculators, profile, weight


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    resolved_db_path = db_path or get_db_path()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler - runs on startup and shutdown."""
        # Startup: Initialize database
        if not resolved_db_path.exists():
            await init_db(resolved_db_path)
        yield

    app = FastAPI(
        title="bodylog",
        description="Daily weight and body metric tracking",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db_path = resolved_db_path

    # Include routers
    app.include_router(weight.router)
    app.include_router(calculators.router)
    app.include_router(profile.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
