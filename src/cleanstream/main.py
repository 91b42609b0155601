"""Main entry point for the CleanStream API server."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from cleanstream.api.deps import init_store
from cleanstream.api.routes import contribute, health, skips
from cleanstream.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup."""
    init_store()
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    from cleanstream import __version__

    app = FastAPI(
        title="CleanStream",
        description="Content-filter skip data for movies and shows",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(skips.router)
    app.include_router(contribute.router)

    return app


app = create_app()


def main() -> None:
    """Run the application."""
    uvicorn.run(
        "cleanstream.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
