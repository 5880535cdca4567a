"""FastAPI application factory for the execution acceptor."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from pathfinder.acceptor.routes import router
from pathfinder.config import PathfinderSettings
from pathfinder.dispatch.units import UnitCatalog
from pathfinder.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    units: UnitCatalog,
    settings: PathfinderSettings | None = None,
    *,
    title: str = "Pathfinder Acceptor",
    description: str = "Executes unit calls dispatched by remote pathfinder nodes",
    version: str = "0.1.0",
) -> FastAPI:
    """
    Create and configure the acceptor application.

    Args:
        units: Units this node exposes to remote callers
        settings: Application settings (loaded from environment if not provided)
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        version: API version

    Returns:
        Configured FastAPI application
    """
    settings = settings or PathfinderSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"Acceptor serving units: {units.names}")
        yield
        logger.info("Acceptor shutdown complete")

    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings
    app.state.unit_catalog = units

    app.include_router(router, prefix="/api/v1")

    return app


def serve(units: UnitCatalog, settings: PathfinderSettings | None = None) -> bool:
    """
    Run the acceptor with uvicorn when this node is a destination.

    Returns:
        True if the server ran, False if this node is not a destination
    """
    settings = settings or PathfinderSettings()
    if not settings.is_destination:
        logger.info("Not a destination node, acceptor not started")
        return False

    configure_logging(settings.effective_log_level)

    import uvicorn

    uvicorn.run(
        create_app(units, settings),
        host=settings.acceptor_host,
        port=settings.acceptor_port,
        log_level=settings.effective_log_level.lower(),
    )
    return True
