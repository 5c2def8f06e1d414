"""
Admin API endpoints.

User management, test-user provisioning and dashboard data, proxied to
the backend.
The backend enforces the admin role; this layer only checks input shape
and forwards the caller's token.
"""

import logging
from collections.abc import Awaitable
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from pydantic import Field

from pokeadmin.api.collection import passthrough
from pokeadmin.api.schemas import CamelModel
from pokeadmin.api.session import RequiredToken
from pokeadmin.models.failure import FailureKind, KnownError, UpstreamError
from pokeadmin.services.backend_client import BackendClient, get_backend_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["admin"])

Backend = Annotated[BackendClient, Depends(get_backend_client)]

# Shape the dashboard renders as "no data" when the backend fails
EMPTY_STATS_OVERVIEW: dict[str, list[Any]] = {
    "cardsAddedPerDay": [],
    "cardsBySupertype": [],
    "cardsByType": [],
}


class AddUserRequest(CamelModel):
    """Request model for creating a local user."""

    email: str | None = None
    password: str | None = None
    name: str | None = None
    is_admin: bool | None = None


class AddTestUsersRequest(CamelModel):
    """Request model for provisioning a batch of test users."""

    base_name: str | None = None
    count: int | None = Field(default=None, examples=[10])
    email_prefix: str | None = None
    email_domain: str | None = None
    password: str | None = None


class RemoveTestUsersRequest(CamelModel):
    """Request model for deleting the most recent test users."""

    email_prefix: str | None = None
    email_domain: str | None = None
    count: int | None = Field(default=None, examples=[5])


def _invalid(message: str) -> KnownError:
    return KnownError(
        kind=FailureKind.INVALID_INPUT,
        message=message,
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def chart_data(call: Awaitable[Any], empty: Any, context: str) -> JSONResponse:
    """
    Await a dashboard backend call, degrading to an empty chart on failure.

    Backend failures keep their status code but carry `empty` as the body,
    so the chart renders with no data instead of an error.
    """
    try:
        payload = await call
    except UpstreamError as e:
        logger.error("[%s] Backend error: %d %s", context, e.status_code, e.detail or e.message)
        return JSONResponse(status_code=e.status_code, content=empty)
    return JSONResponse(content=empty if payload is None else payload)


@router.get("/users/all")
async def list_users(token: RequiredToken, backend: Backend) -> Response:
    """List every user."""
    return passthrough(await backend.get_all_users(token))


@router.post("/users/add")
async def add_user(request: AddUserRequest, token: RequiredToken, backend: Backend) -> Response:
    """Create a local user."""
    if not request.email or not request.password:
        raise _invalid("Email and password are required")
    payload = request.model_dump(by_alias=True, exclude_none=True)
    return passthrough(await backend.add_user(token, payload))


@router.delete("/users/remove/{user_id}")
async def remove_user(user_id: str, token: RequiredToken, backend: Backend) -> Response:
    """Delete one user."""
    return passthrough(await backend.remove_user(token, user_id))


@router.get("/admin/users/all-test")
async def list_test_users(token: RequiredToken, backend: Backend) -> Response:
    """List provisioned test users."""
    return passthrough(await backend.get_test_users(token))


@router.post("/admin/users/add-test")
async def add_test_users(
    request: AddTestUsersRequest, token: RequiredToken, backend: Backend
) -> Response:
    """Provision `count` test users named after `baseName`."""
    if (
        not request.base_name
        or request.count is None
        or not request.email_prefix
        or not request.email_domain
    ):
        raise _invalid("Missing required fields for adding test users.")
    payload = request.model_dump(by_alias=True, exclude_none=True)
    return passthrough(await backend.add_test_users(token, payload))


@router.post("/admin/users/remove-test")
async def remove_test_users(
    request: RemoveTestUsersRequest, token: RequiredToken, backend: Backend
) -> Response:
    """Delete the last `count` test users matching the email prefix and domain."""
    if (
        not request.email_prefix
        or not request.email_domain
        or request.count is None
        or request.count <= 0
    ):
        raise _invalid(
            "Missing or invalid fields for removing test users "
            "(emailPrefix, emailDomain, count > 0)."
        )
    payload = request.model_dump(by_alias=True, exclude_none=True)
    return passthrough(await backend.remove_test_users(token, payload))


@router.get("/admin/users/{user_id}/collection/cards/set/{set_id}")
async def get_user_set_collection(
    user_id: str, set_id: str, token: RequiredToken, backend: Backend
) -> Response:
    """Get another user's cards for one set."""
    return passthrough(await backend.get_user_set_collection(token, user_id, set_id))


@router.get("/admin/db/status")
async def get_db_status(token: RequiredToken, backend: Backend) -> Response:
    """Backend database status."""
    return passthrough(await backend.get_db_status(token))


@router.get("/admin/stats/overview")
async def get_stats_overview(token: RequiredToken, backend: Backend) -> JSONResponse:
    """
    Dashboard overview: cards added per day, by supertype and by type.

    Shape: {"cardsAddedPerDay": [{date, count}], "cardsBySupertype": [{label, count}],
    "cardsByType": [{label, count}]}
    """
    return await chart_data(
        backend.get_stats_overview(token), EMPTY_STATS_OVERVIEW, "API /admin/stats/overview"
    )


@router.get("/analytics/cards-added-daily")
async def get_cards_added_daily(token: RequiredToken, backend: Backend) -> JSONResponse:
    """Cards added per day over the last 30 days."""
    return await chart_data(
        backend.get_cards_added_daily(token), [], "API /analytics/cards-added-daily"
    )


@router.get("/analytics/cards-by-supertype")
async def get_cards_by_supertype(token: RequiredToken, backend: Backend) -> JSONResponse:
    """Collected cards counted by supertype."""
    return await chart_data(
        backend.get_cards_by_supertype(token), [], "API /analytics/cards-by-supertype"
    )
