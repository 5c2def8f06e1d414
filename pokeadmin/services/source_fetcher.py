"""
Resilient catalog fetcher.

Looks up cards, sets and types at the configured primary Pokémon TCG API
and falls back once to the public mirror when the primary fails for any
reason other than a confirmed "not found" on a single-id lookup.

Primary:   {EXTERNAL_API_BASE_URL}/v2/{kind}[/{id}]
Secondary: {BACKUP_API_BASE_URL}/{kind}[/{id}]
"""

import logging

import httpx

from pokeadmin.config import settings
from pokeadmin.models.source_response import (
    MalformedResponse,
    NotFound,
    ResourceQuery,
    SourceName,
    SourceResponse,
    Success,
    TransientFailure,
)
from pokeadmin.services.normalization import (
    MalformedPayloadError,
    normalize_payload,
    parse_json,
    truncate,
)

logger = logging.getLogger(__name__)

# Version prefix of the primary API; the mirror's base URL already carries it
PRIMARY_API_VERSION = "/v2"


class ResilientSourceFetcher:
    """
    Two-source catalog client.

    At most two sequential requests per lookup: one to the primary and,
    when needed, one to the secondary. No retries against the same source.
    """

    def __init__(
        self,
        primary_base_url: str | None = None,
        secondary_base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            primary_base_url: Primary API base URL. Defaults to
                settings.external_api_base_url; empty means unconfigured.
            secondary_base_url: Mirror base URL. Defaults to
                settings.backup_api_base_url.
            timeout: Per-request timeout in seconds.
        """
        primary = settings.external_api_base_url if primary_base_url is None else primary_base_url
        secondary = (
            settings.backup_api_base_url if secondary_base_url is None else secondary_base_url
        )
        self.primary_base_url = primary.rstrip("/")
        self.secondary_base_url = secondary.rstrip("/")
        self.timeout = settings.request_timeout if timeout is None else timeout

    @property
    def primary_configured(self) -> bool:
        return bool(self.primary_base_url)

    def primary_url(self, query: ResourceQuery) -> str:
        return f"{self.primary_base_url}{PRIMARY_API_VERSION}{query.path}"

    def secondary_url(self, query: ResourceQuery) -> str:
        return f"{self.secondary_base_url}{query.path}"

    async def fetch(self, query: ResourceQuery) -> SourceResponse:
        """
        Resolve a catalog lookup.

        Returns:
            The primary's outcome when it is definitive, else the secondary's
            outcome verbatim.
        """
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            if self.primary_configured:
                primary = await self._request(client, query, SourceName.PRIMARY)
                if not self._should_fall_back(primary):
                    return primary
                logger.warning(
                    "[%s] Primary API unusable (%s). Falling back to backup API.",
                    query.context,
                    _describe(primary),
                )
            else:
                logger.warning(
                    "[%s] Primary API base URL not configured. Proceeding to backup.",
                    query.context,
                )

            secondary = await self._request(client, query, SourceName.SECONDARY)
            if not isinstance(secondary, Success):
                logger.error(
                    "[%s] Backup API also failed (%s)",
                    query.context,
                    _describe(secondary),
                )
            return secondary

    @staticmethod
    def _should_fall_back(outcome: SourceResponse) -> bool:
        """
        Decide whether a primary outcome sends the lookup to the secondary.

        Only successes and single-id 404s are definitive. List 404s arrive
        here as TransientFailure, never as NotFound.
        """
        return not isinstance(outcome, Success | NotFound)

    async def _request(
        self,
        client: httpx.AsyncClient,
        query: ResourceQuery,
        source: SourceName,
    ) -> SourceResponse:
        """Issue one GET against one source and classify the result."""
        if source is SourceName.PRIMARY:
            url = self.primary_url(query)
        else:
            url = self.secondary_url(query)

        logger.info("[%s] Attempting fetch from %s API: %s", query.context, source.value, url)

        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning(
                "[%s] Failed to fetch from %s API (%s): %s",
                query.context,
                source.value,
                url,
                e,
            )
            return TransientFailure(source=source, status_code=None, detail=str(e) or repr(e))

        body = response.text

        if response.is_success:
            try:
                payload = normalize_payload(query, parse_json(body))
            except MalformedPayloadError as e:
                logger.error(
                    "[%s] %s API (%s) returned malformed success response: %s",
                    query.context,
                    source.value,
                    url,
                    e,
                )
                return MalformedResponse(
                    source=source,
                    status_code=response.status_code,
                    detail=truncate(body),
                )
            return Success(payload=payload, source=source)

        if response.status_code == httpx.codes.NOT_FOUND and (
            query.is_single or source is SourceName.SECONDARY
        ):
            logger.info(
                "[%s] Not found at %s API (%s): 404",
                query.context,
                source.value,
                url,
            )
            return NotFound(source=source, detail=body)

        logger.warning(
            "[%s] %s API (%s) failed: %d %s",
            query.context,
            source.value,
            url,
            response.status_code,
            truncate(body),
        )
        return TransientFailure(source=source, status_code=response.status_code, detail=body)


def _describe(outcome: SourceResponse) -> str:
    if isinstance(outcome, TransientFailure):
        if outcome.is_network_error:
            return f"network error: {outcome.detail}"
        return f"HTTP {outcome.status_code}"
    if isinstance(outcome, MalformedResponse):
        return f"malformed body with HTTP {outcome.status_code}"
    if isinstance(outcome, NotFound):
        return "not found"
    return "success"


def get_fetcher() -> ResilientSourceFetcher:
    """Dependency that provides a fetcher built from current settings."""
    return ResilientSourceFetcher()
