"""
PokeAdmin services.

Upstream clients and the pure collection transformations behind the routes.
"""

from pokeadmin.services.backend_client import BackendClient, get_backend_client
from pokeadmin.services.collection_grouping import (
    compare_sets,
    group_collection,
    natural_compare,
    natural_sort_key,
    parse_records,
    parse_release_date,
    split_segments,
    summarize_collection,
)
from pokeadmin.services.normalization import (
    MalformedPayloadError,
    normalize_payload,
    parse_json,
)
from pokeadmin.services.source_fetcher import ResilientSourceFetcher, get_fetcher

__all__ = [
    "BackendClient",
    "MalformedPayloadError",
    "ResilientSourceFetcher",
    "compare_sets",
    "get_backend_client",
    "get_fetcher",
    "group_collection",
    "natural_compare",
    "natural_sort_key",
    "normalize_payload",
    "parse_json",
    "parse_records",
    "parse_release_date",
    "split_segments",
    "summarize_collection",
]
