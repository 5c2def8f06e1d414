"""
Outcomes of querying one Pokémon TCG data source.

A `SourceResponse` is exactly one of `Success`, `NotFound`,
`TransientFailure` or `MalformedResponse`. The fetcher decides whether to
fall back to the secondary source from the variant alone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import quote


class ResourceKind(str, Enum):
    """Catalog resources served by both data sources."""

    CARDS = "cards"
    SETS = "sets"
    TYPES = "types"


class SourceName(str, Enum):
    """Which upstream produced an outcome."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class ResourceQuery:
    """
    A catalog lookup, built per request.

    `query_string` is forwarded verbatim (already URL-encoded).
    """

    kind: ResourceKind
    resource_id: str | None = None
    query_string: str = ""

    @property
    def is_single(self) -> bool:
        """True for lookups of one resource by id."""
        return bool(self.resource_id)

    @property
    def path(self) -> str:
        """Resource path relative to a source's base URL, including the query."""
        path = f"/{self.kind.value}"
        if self.resource_id:
            path += f"/{quote(self.resource_id, safe='')}"
        if self.query_string:
            path += f"?{self.query_string}"
        return path

    @property
    def context(self) -> str:
        """Tag used to prefix log lines for this lookup."""
        if self.resource_id:
            return f"API /{self.kind.value}/{self.resource_id}"
        return f"API /{self.kind.value}"

    @property
    def label(self) -> str:
        """Human-readable resource name for error messages."""
        return {
            ResourceKind.CARDS: "Card",
            ResourceKind.SETS: "Set",
            ResourceKind.TYPES: "Type",
        }[self.kind]


@dataclass(frozen=True)
class Success:
    """Upstream answered 2xx with a usable JSON body."""

    payload: Any
    source: SourceName


@dataclass(frozen=True)
class NotFound:
    """Upstream confirmed the resource does not exist."""

    source: SourceName
    detail: str = ""


@dataclass(frozen=True)
class TransientFailure:
    """
    Any other non-success.

    `status_code` is None when no HTTP response was received
    (connection error, timeout).
    """

    source: SourceName
    status_code: int | None
    detail: str = ""

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


@dataclass(frozen=True)
class MalformedResponse:
    """Upstream answered 2xx but the body was not JSON of the expected shape."""

    source: SourceName
    status_code: int
    detail: str = ""


SourceResponse = Success | NotFound | TransientFailure | MalformedResponse
