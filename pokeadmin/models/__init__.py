from pokeadmin.models.collection import (
    CollectedCardRecord,
    CollectedSetInfo,
    CollectionSummary,
    DisplayCard,
    DisplaySet,
)
from pokeadmin.models.failure import (
    FailureKind,
    KnownError,
    NotConfiguredError,
    UnauthorizedError,
    UpstreamError,
)
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

__all__ = [
    "CollectedCardRecord",
    "CollectedSetInfo",
    "CollectionSummary",
    "DisplayCard",
    "DisplaySet",
    "FailureKind",
    "KnownError",
    "MalformedResponse",
    "NotConfiguredError",
    "NotFound",
    "ResourceKind",
    "ResourceQuery",
    "SourceName",
    "SourceResponse",
    "Success",
    "TransientFailure",
    "UnauthorizedError",
    "UpstreamError",
]
