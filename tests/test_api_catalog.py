"""Tests for catalog proxy endpoints."""

import httpx
import respx
from httpx import AsyncClient

from tests.constants import BACKUP_URL, PRIMARY_URL

CHARIZARD = {"id": "base1-4", "name": "Charizard"}


class TestCards:
    async def test_list_from_primary(self, client: AsyncClient, upstream: respx.Router) -> None:
        body = {"data": [CHARIZARD], "page": 1, "pageSize": 1, "totalCount": 1}
        route = upstream.get(f"{PRIMARY_URL}/v2/cards?q=name%3Acharizard").mock(
            return_value=httpx.Response(200, json=body)
        )

        response = await client.get("/api/cards?q=name%3Acharizard")

        assert response.status_code == 200
        assert response.json() == body
        assert route.called

    async def test_single_not_found_on_primary(
        self, client: AsyncClient, upstream: respx.Router
    ) -> None:
        upstream.get(f"{PRIMARY_URL}/v2/cards/nope").mock(return_value=httpx.Response(404))
        backup = upstream.get(f"{BACKUP_URL}/cards/nope")

        response = await client.get("/api/cards/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "Card not found from primary external API"
        assert not backup.called

    async def test_single_falls_back(self, client: AsyncClient, upstream: respx.Router) -> None:
        upstream.get(f"{PRIMARY_URL}/v2/cards/base1-4").mock(return_value=httpx.Response(500))
        upstream.get(f"{BACKUP_URL}/cards/base1-4").mock(
            return_value=httpx.Response(200, json={"data": CHARIZARD})
        )

        response = await client.get("/api/cards/base1-4")

        assert response.status_code == 200
        assert response.json() == {"data": CHARIZARD}


class TestSets:
    async def test_single_set_is_wrapped(
        self, client: AsyncClient, upstream: respx.Router
    ) -> None:
        upstream.get(f"{PRIMARY_URL}/v2/sets/base1").mock(
            return_value=httpx.Response(200, json={"id": "base1", "name": "Base"})
        )

        response = await client.get("/api/sets/base1")

        assert response.json() == {"data": {"id": "base1", "name": "Base"}}

    async def test_backup_error_passes_through(
        self, client: AsyncClient, upstream: respx.Router
    ) -> None:
        upstream.get(f"{PRIMARY_URL}/v2/sets").mock(return_value=httpx.Response(500))
        upstream.get(f"{BACKUP_URL}/sets").mock(
            return_value=httpx.Response(429, text="Too Many Requests")
        )

        response = await client.get("/api/sets")

        assert response.status_code == 429
        assert response.json() == {
            "error": "Backup API error: 429",
            "details": "Too Many Requests",
        }

    async def test_backup_not_found(self, client: AsyncClient, upstream: respx.Router) -> None:
        upstream.get(f"{PRIMARY_URL}/v2/sets/gone").mock(side_effect=httpx.ConnectError("down"))
        upstream.get(f"{BACKUP_URL}/sets/gone").mock(return_value=httpx.Response(404))

        response = await client.get("/api/sets/gone")

        assert response.status_code == 404
        assert response.json()["error"] == "Set not found from backup external API"

    async def test_both_sources_unreachable(
        self, client: AsyncClient, upstream: respx.Router
    ) -> None:
        upstream.get(f"{PRIMARY_URL}/v2/sets").mock(side_effect=httpx.ConnectError("down"))
        upstream.get(f"{BACKUP_URL}/sets").mock(side_effect=httpx.ConnectTimeout("slow"))

        response = await client.get("/api/sets")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to fetch data from all external APIs",
            "details": "slow",
        }


class TestTypes:
    async def test_malformed_backup(self, client: AsyncClient, upstream: respx.Router) -> None:
        upstream.get(f"{PRIMARY_URL}/v2/types").mock(return_value=httpx.Response(503))
        upstream.get(f"{BACKUP_URL}/types").mock(return_value=httpx.Response(200, text="oops"))

        response = await client.get("/api/types")

        assert response.status_code == 502
        assert response.json()["error"] == "Upstream returned malformed data"

    async def test_empty_list_is_success(
        self, client: AsyncClient, upstream: respx.Router
    ) -> None:
        upstream.get(f"{PRIMARY_URL}/v2/types").mock(
            return_value=httpx.Response(200, json={"data": []})
        )

        response = await client.get("/api/types")

        assert response.status_code == 200
        assert response.json() == {"data": []}
