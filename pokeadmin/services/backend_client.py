"""
User/auth backend proxy client.

Forwards collection, user and admin calls to the backend at
EXTERNAL_API_BASE_URL with the caller's bearer token attached.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from pokeadmin.config import settings
from pokeadmin.models.failure import FailureKind, NotConfiguredError, UpstreamError
from pokeadmin.services.normalization import (
    MalformedPayloadError,
    error_details,
    error_message,
    parse_error_body,
    parse_json,
    truncate,
)

logger = logging.getLogger(__name__)

MALFORMED_SUCCESS_MESSAGE = "Received malformed success response from external API."


def _segment(value: str) -> str:
    return quote(value, safe="")


class BackendClient:
    """
    Client for the user/auth backend.

    Each call opens its own HTTP client and returns the decoded JSON body,
    or None for empty/204 responses. Failures raise UpstreamError.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        """
        Initialize the backend client.

        Args:
            base_url: Backend base URL. Defaults to settings.external_api_base_url.
            timeout: Request timeout in seconds.
        """
        base = settings.external_api_base_url if base_url is None else base_url
        self.base_url = base.rstrip("/")
        self.timeout = settings.request_timeout if timeout is None else timeout

    async def request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        token: str | None = None,
        payload: Any = None,
    ) -> Any:
        """
        Forward one request to the backend.

        Args:
            method: HTTP method
            path: Path below the base URL, starting with "/"
            action: Short description used in messages ("fetch collection")
            token: Bearer token to attach, if any
            payload: JSON body for POST requests

        Returns:
            Decoded JSON body, or None when the backend sent no content

        Raises:
            NotConfiguredError: If no backend base URL is configured
            UpstreamError: On transport errors, non-2xx answers, or
                non-JSON success bodies
        """
        context = f"API {path}"
        if not self.base_url:
            logger.error("[%s] External API base URL not configured.", context)
            raise NotConfiguredError()

        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.info("[%s] Forwarding %s request to external API: %s", context, action, url)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.request(method, url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error("[%s] Failed to call external API (%s): %s", context, url, e)
            raise UpstreamError(
                status_code=500,
                message=f"Failed to {action} due to a server error",
                detail=str(e) or repr(e),
                kind=FailureKind.NETWORK_ERROR,
            ) from e

        body = response.text

        if not response.is_success:
            error_body = parse_error_body(body)
            logger.error(
                "[%s] External API (%s) failed: %d %s",
                context,
                url,
                response.status_code,
                truncate(body),
            )
            raise UpstreamError(
                status_code=response.status_code,
                message=error_message(
                    error_body, f"Failed to {action}. Status: {response.status_code}"
                ),
                detail=error_details(error_body),
            )

        if response.status_code == httpx.codes.NO_CONTENT or not body.strip():
            return None

        try:
            return parse_json(body)
        except MalformedPayloadError as e:
            logger.error(
                "[%s] External API (%s) returned non-JSON success response: %s",
                context,
                url,
                truncate(body, 200),
            )
            raise UpstreamError(
                status_code=502,
                message=MALFORMED_SUCCESS_MESSAGE,
                kind=FailureKind.MALFORMED_RESPONSE,
            ) from e

    # -- user collection ---------------------------------------------------

    async def get_collection(self, token: str) -> Any:
        return await self.request(
            "GET", "/user/me/collection/cards", action="fetch collection", token=token
        )

    async def get_set_collection(self, token: str, set_id: str) -> Any:
        return await self.request(
            "GET",
            f"/user/collection/set/{_segment(set_id)}",
            action="fetch collection for set",
            token=token,
        )

    async def add_cards(self, token: str, card_ids: list[str]) -> Any:
        return await self.request(
            "POST",
            "/user/me/collection/cards/add",
            action="add cards to collection",
            token=token,
            payload={"cardIds": card_ids},
        )

    async def remove_cards(self, token: str, card_ids: list[str]) -> Any:
        return await self.request(
            "POST",
            "/user/me/collection/cards/remove",
            action="remove cards from collection",
            token=token,
            payload={"cardIds": card_ids},
        )

    # -- auth ----------------------------------------------------------------

    async def get_current_user(self, token: str) -> Any:
        return await self.request("GET", "/user/me", action="fetch user details", token=token)

    async def password_login(self, email: str, password: str) -> Any:
        return await self.request(
            "POST",
            "/auth/local/login",
            action="log in",
            payload={"email": email, "password": password},
        )

    async def change_password(self, token: str, current_password: str, new_password: str) -> Any:
        return await self.request(
            "POST",
            "/auth/local/me/change-password",
            action="change password",
            token=token,
            payload={"currentPassword": current_password, "newPassword": new_password},
        )

    # -- admin ---------------------------------------------------------------

    async def get_all_users(self, token: str) -> Any:
        return await self.request("GET", "/user/all", action="fetch users", token=token)

    async def add_user(self, token: str, payload: dict[str, Any]) -> Any:
        return await self.request(
            "POST", "/user/admin/add", action="add user", token=token, payload=payload
        )

    async def remove_user(self, token: str, user_id: str) -> Any:
        return await self.request(
            "DELETE", f"/user/remove/{_segment(user_id)}", action="remove user", token=token
        )

    async def get_test_users(self, token: str) -> Any:
        return await self.request(
            "GET", "/user/admin/all-test", action="fetch test users", token=token
        )

    async def add_test_users(self, token: str, payload: dict[str, Any]) -> Any:
        return await self.request(
            "POST",
            "/user/admin/add-test",
            action="add test users",
            token=token,
            payload=payload,
        )

    async def remove_test_users(self, token: str, payload: dict[str, Any]) -> Any:
        return await self.request(
            "POST",
            "/user/admin/delete-test-last",
            action="remove test users",
            token=token,
            payload=payload,
        )

    async def get_user_set_collection(self, token: str, user_id: str, set_id: str) -> Any:
        return await self.request(
            "GET",
            f"/user/admin/{_segment(user_id)}/collection/cards/set/{_segment(set_id)}",
            action="fetch user collection for set",
            token=token,
        )

    # -- dashboards --------------------------------------------------------

    async def get_stats_overview(self, token: str) -> Any:
        return await self.request(
            "GET", "/admin/stats/overview", action="fetch stats overview", token=token
        )

    async def get_cards_added_daily(self, token: str) -> Any:
        return await self.request(
            "GET",
            "/v2/analytics/cards-added-over-time?period=daily&range=30d",
            action="fetch cards added per day",
            token=token,
        )

    async def get_cards_by_supertype(self, token: str) -> Any:
        return await self.request(
            "GET",
            "/v2/analytics/cards-by-supertype",
            action="fetch cards by supertype",
            token=token,
        )

    async def get_db_status(self, token: str) -> Any:
        return await self.request("GET", "/admin/db/status", action="fetch DB status", token=token)

    async def get_usage(self, token: str) -> Any:
        return await self.request("GET", "/usage", action="fetch usage", token=token)

    async def get_metrics(self) -> Any:
        return await self.request("GET", "/metrics", action="fetch metrics")


def get_backend_client() -> BackendClient:
    """Dependency that provides a backend client built from current settings."""
    return BackendClient()
