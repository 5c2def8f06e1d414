"""
Collection API endpoints.

Proxies the signed-in user's collection to the user/auth backend and
serves the grouped, display-ready view of it.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from pokeadmin.api.schemas import CardIdsRequest, CollectionSummaryResponse
from pokeadmin.api.session import RequiredToken
from pokeadmin.models.failure import FailureKind, KnownError
from pokeadmin.services.backend_client import BackendClient, get_backend_client
from pokeadmin.services.collection_grouping import summarize_collection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user/collection", tags=["collection"])

Backend = Annotated[BackendClient, Depends(get_backend_client)]


def passthrough(payload: Any) -> Response:
    """Return a backend body as-is, or 204 when it sent no content."""
    if payload is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return JSONResponse(content=payload)


def _card_ids(request: CardIdsRequest) -> list[str]:
    if not request.card_ids:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="cardIds array is required and cannot be empty.",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return request.card_ids


@router.get("/cards")
async def get_collection_cards(token: RequiredToken, backend: Backend) -> Response:
    """
    Get the user's whole collection as returned by the backend.

    Shape: {"data": [CollectedCardRecord], "totalUniqueCards"?, "totalCards"?}
    """
    return passthrough(await backend.get_collection(token))


@router.get("/sets", response_model=CollectionSummaryResponse)
async def get_collection_sets(token: RequiredToken, backend: Backend) -> CollectionSummaryResponse:
    """
    Get the user's collection grouped by set.

    Sets are ordered newest release first (undated last, ties by name);
    cards inside a set follow natural card-number order. An empty
    collection is a valid, empty result.
    """
    payload = await backend.get_collection(token)
    summary = summarize_collection(payload)
    logger.info(
        "[API /user/collection/sets] Grouped %d cards into %d sets",
        summary.total_unique_cards(),
        len(summary.sets),
    )
    return CollectionSummaryResponse.from_summary(summary)


@router.get("/set/{set_id}")
async def get_set_collection(set_id: str, token: RequiredToken, backend: Backend) -> Response:
    """Get the user's cards for one set."""
    return passthrough(await backend.get_set_collection(token, set_id))


@router.post("/cards/add")
async def add_collection_cards(
    request: CardIdsRequest, token: RequiredToken, backend: Backend
) -> Response:
    """Add cards to the user's collection."""
    return passthrough(await backend.add_cards(token, _card_ids(request)))


@router.post("/cards/remove")
async def remove_collection_cards(
    request: CardIdsRequest, token: RequiredToken, backend: Backend
) -> Response:
    """Remove cards from the user's collection."""
    return passthrough(await backend.remove_cards(token, _card_ids(request)))
