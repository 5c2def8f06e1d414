"""
Response normalization shared by the catalog fetcher and the backend proxy.

Both data sources must look the same to callers: single-resource lookups
always come back as `{"data": <object>}`, list lookups pass through as-is.
"""

import json
from typing import Any

from pokeadmin.models.source_response import ResourceQuery

# Upstream bodies are truncated to this length in logs
LOG_BODY_LIMIT = 300


class MalformedPayloadError(ValueError):
    """Raised when a 2xx body is not JSON of the expected shape."""

    pass


def parse_json(text: str) -> Any:
    """
    Parse an upstream body as JSON.

    Raises:
        MalformedPayloadError: If the body is empty or not valid JSON
    """
    if not text or not text.strip():
        raise MalformedPayloadError("Empty response body")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(f"Invalid JSON: {e.msg}") from e


def normalize_payload(query: ResourceQuery, payload: Any) -> Any:
    """
    Bring a successful payload into the shape callers expect.

    Single-resource lookups are wrapped as `{"data": <object>}` whether the
    source returned the bare object or already nested it under `data`.

    Raises:
        MalformedPayloadError: If the payload is not a JSON object or list
    """
    if query.is_single:
        if not isinstance(payload, dict):
            raise MalformedPayloadError(
                f"Expected an object for {query.kind.value}/{query.resource_id}, "
                f"got {type(payload).__name__}"
            )
        detail = payload["data"] if isinstance(payload.get("data"), dict) else payload
        return {"data": detail}

    if not isinstance(payload, dict | list):
        raise MalformedPayloadError(
            f"Expected an object or list for {query.kind.value}, got {type(payload).__name__}"
        )
    return payload


def truncate(text: str, limit: int = LOG_BODY_LIMIT) -> str:
    """Shorten an upstream body for logging."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def parse_error_body(text: str) -> Any:
    """Decode an error body as JSON when possible, else keep the raw text."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return text


def error_message(body: Any, fallback: str) -> str:
    """
    Pick the message shown to the client for an upstream failure.

    JSON bodies contribute their `message` (or `detail`) field; text bodies are
    prefixed so the client can tell they came from the upstream verbatim.
    """
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str) and message:
            return message
        return fallback
    if isinstance(body, str) and body.strip():
        if "<html" in body.lower():
            return f"{fallback} External API returned an HTML page, not JSON."
        return f"External API Error: {truncate(body, 500)}"
    return fallback


def error_details(body: Any) -> Any:
    """Extract the `details` field of a JSON error body."""
    if isinstance(body, dict):
        return body.get("details")
    return None
