"""
Usage and metrics endpoints.

Proxies the backend's per-user usage report and its service metrics.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from pokeadmin.api.collection import passthrough
from pokeadmin.api.session import RequiredToken
from pokeadmin.services.backend_client import BackendClient, get_backend_client

router = APIRouter(prefix="/api", tags=["usage"])

Backend = Annotated[BackendClient, Depends(get_backend_client)]


@router.get("/usage")
async def get_usage(token: RequiredToken, backend: Backend) -> Response:
    """Usage report for the signed-in user."""
    return passthrough(await backend.get_usage(token))


@router.get("/metrics")
async def get_metrics(backend: Backend) -> Response:
    """
    Backend service metrics.

    Forwarded without a token. Only JSON metrics are supported; a
    Prometheus text body is reported as a malformed response (502).
    """
    return passthrough(await backend.get_metrics())
