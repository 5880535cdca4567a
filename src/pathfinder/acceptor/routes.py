"""Execution and health endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from pathfinder.acceptor.dependencies import Settings, Units
from pathfinder.core.models import Envelope, RemoteCall, WireModel
from pathfinder.dispatch.peers import execute_call

router = APIRouter(tags=["acceptor"])


class HealthResponse(WireModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str
    environment: str
    units: list[str]


@router.post(
    "/execute",
    response_model=Envelope,
    response_model_by_alias=True,
    operation_id="executeCall",
    summary="Execute a unit entry point",
    description="Run a submitted unit call and return its result envelope.",
)
async def execute(call: RemoteCall, units: Units) -> Envelope:
    """Run the call on a worker thread so concurrent submissions overlap."""
    return await run_in_threadpool(execute_call, units, call)


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check that the acceptor is up and list the units it serves.",
)
async def health_check(units: Units, settings: Settings) -> HealthResponse:
    """Check acceptor health."""
    from pathfinder import __version__

    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        units=units.names,
    )
