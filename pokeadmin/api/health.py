"""
Health check endpoints.

Provides liveness and readiness probes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from pokeadmin.services.source_fetcher import ResilientSourceFetcher, get_fetcher

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    primary_source: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get("/ready", response_model=HealthResponse)
async def ready(
    fetcher: Annotated[ResilientSourceFetcher, Depends(get_fetcher)],
) -> HealthResponse:
    """
    Readiness probe.

    Always ready: catalog lookups still work from the backup API when the
    primary is unconfigured. Reports which mode is in effect.
    """
    primary = "configured" if fetcher.primary_configured else "unconfigured"
    return HealthResponse(status="ready", primary_source=primary)
