"""
Catalog API endpoints.

Proxies card, set and type lookups through the resilient fetcher:
primary Pokémon TCG API first, public mirror on non-definitive failure.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from pokeadmin.models.source_response import (
    MalformedResponse,
    NotFound,
    ResourceKind,
    ResourceQuery,
    SourceName,
    SourceResponse,
    Success,
    TransientFailure,
)
from pokeadmin.services.source_fetcher import ResilientSourceFetcher, get_fetcher

router = APIRouter(prefix="/api", tags=["catalog"])

Fetcher = Annotated[ResilientSourceFetcher, Depends(get_fetcher)]


def _error(status_code: int, message: str, details: Any = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "details": details})


def render_outcome(query: ResourceQuery, outcome: SourceResponse) -> JSONResponse:
    """Turn a fetcher outcome into the proxy's HTTP response."""
    if isinstance(outcome, Success):
        return JSONResponse(content=outcome.payload)

    if isinstance(outcome, NotFound):
        source = "primary" if outcome.source is SourceName.PRIMARY else "backup"
        return _error(
            status.HTTP_404_NOT_FOUND,
            f"{query.label} not found from {source} external API",
            outcome.detail or None,
        )

    if isinstance(outcome, MalformedResponse):
        return _error(
            status.HTTP_502_BAD_GATEWAY,
            "Upstream returned malformed data",
            outcome.detail or None,
        )

    if isinstance(outcome, TransientFailure) and outcome.status_code is not None:
        return _error(
            outcome.status_code,
            f"Backup API error: {outcome.status_code}",
            outcome.detail or None,
        )

    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Failed to fetch data from all external APIs",
        outcome.detail or None,
    )


async def _lookup(
    fetcher: ResilientSourceFetcher,
    kind: ResourceKind,
    request: Request,
    resource_id: str | None = None,
) -> JSONResponse:
    query = ResourceQuery(kind=kind, resource_id=resource_id, query_string=request.url.query)
    outcome = await fetcher.fetch(query)
    return render_outcome(query, outcome)


@router.get("/cards")
async def list_cards(request: Request, fetcher: Fetcher) -> JSONResponse:
    """
    Search cards.

    The query string (q, page, pageSize, orderBy, ...) is forwarded verbatim.
    """
    return await _lookup(fetcher, ResourceKind.CARDS, request)


@router.get("/cards/{card_id}")
async def get_card(card_id: str, request: Request, fetcher: Fetcher) -> JSONResponse:
    """Get one card by id. A primary 404 is final."""
    return await _lookup(fetcher, ResourceKind.CARDS, request, card_id)


@router.get("/sets")
async def list_sets(request: Request, fetcher: Fetcher) -> JSONResponse:
    """List sets, forwarding the query string verbatim."""
    return await _lookup(fetcher, ResourceKind.SETS, request)


@router.get("/sets/{set_id}")
async def get_set(set_id: str, request: Request, fetcher: Fetcher) -> JSONResponse:
    """Get one set by id, always shaped as {"data": {...}}."""
    return await _lookup(fetcher, ResourceKind.SETS, request, set_id)


@router.get("/types")
async def list_types(request: Request, fetcher: Fetcher) -> JSONResponse:
    """List Pokémon types."""
    return await _lookup(fetcher, ResourceKind.TYPES, request)
