"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from pathfinder.config import PathfinderSettings
from pathfinder.dispatch.units import UnitCatalog


async def get_settings(request: Request) -> PathfinderSettings:
    """Get application settings from app state."""
    return request.app.state.settings


async def get_unit_catalog(request: Request) -> UnitCatalog:
    """Get the unit catalog served by this acceptor."""
    return request.app.state.unit_catalog


# Type aliases for cleaner dependency injection
Settings = Annotated[PathfinderSettings, Depends(get_settings)]
Units = Annotated[UnitCatalog, Depends(get_unit_catalog)]
