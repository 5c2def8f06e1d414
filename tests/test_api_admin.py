"""Tests for admin endpoints."""

import json

import httpx
import pytest
import respx
from httpx import AsyncClient

from tests.constants import PRIMARY_URL

AUTH = {"Authorization": "Bearer admin-tok"}
CARDS_ADDED_PATH = "/v2/analytics/cards-added-over-time?period=daily&range=30d"


class TestUsers:
    async def test_list_users(self, client: AsyncClient, upstream: respx.Router) -> None:
        body = {"data": [{"id": "u1"}, {"id": "u2"}]}
        route = upstream.get(f"{PRIMARY_URL}/user/all").mock(
            return_value=httpx.Response(200, json=body)
        )

        response = await client.get("/api/users/all", headers=AUTH)

        assert response.json() == body
        assert route.calls.last.request.headers["Authorization"] == "Bearer admin-tok"

    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/users/all")

        assert response.status_code == 401

    async def test_add_user_forwards_camel_case(
        self, client: AsyncClient, upstream: respx.Router
    ) -> None:
        route = upstream.post(f"{PRIMARY_URL}/user/admin/add").mock(
            return_value=httpx.Response(201, json={"id": "u3"})
        )

        response = await client.post(
            "/api/users/add",
            json={"email": "misty@example.com", "password": "staryu", "isAdmin": False},
            headers=AUTH,
        )

        assert response.status_code == 200
        assert json.loads(route.calls.last.request.content) == {
            "email": "misty@example.com",
            "password": "staryu",
            "isAdmin": False,
        }

    async def test_add_user_requires_credentials(self, client: AsyncClient) -> None:
        response = await client.post("/api/users/add", json={"email": "x@y.z"}, headers=AUTH)

        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required"

    async def test_remove_user(self, client: AsyncClient, upstream: respx.Router) -> None:
        route = upstream.delete(f"{PRIMARY_URL}/user/remove/u2").mock(
            return_value=httpx.Response(204)
        )

        response = await client.delete("/api/users/remove/u2", headers=AUTH)

        assert response.status_code == 204
        assert route.called


class TestTestUsers:
    async def test_list(self, client: AsyncClient, upstream: respx.Router) -> None:
        upstream.get(f"{PRIMARY_URL}/user/admin/all-test").mock(
            return_value=httpx.Response(200, json={"data": []})
        )

        response = await client.get("/api/admin/users/all-test", headers=AUTH)

        assert response.json() == {"data": []}

    async def test_add(self, client: AsyncClient, upstream: respx.Router) -> None:
        route = upstream.post(f"{PRIMARY_URL}/user/admin/add-test").mock(
            return_value=httpx.Response(200, json={"created": 3})
        )
        body = {
            "baseName": "Trainer",
            "count": 3,
            "emailPrefix": "trainer",
            "emailDomain": "test.local",
        }

        response = await client.post("/api/admin/users/add-test", json=body, headers=AUTH)

        assert response.json() == {"created": 3}
        assert json.loads(route.calls.last.request.content) == body

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"baseName": "Trainer", "emailPrefix": "t", "emailDomain": "d"},
            {"count": 3, "emailPrefix": "t", "emailDomain": "d"},
        ],
    )
    async def test_add_rejects_missing_fields(self, client: AsyncClient, body: dict) -> None:
        response = await client.post("/api/admin/users/add-test", json=body, headers=AUTH)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields for adding test users."

    async def test_remove(self, client: AsyncClient, upstream: respx.Router) -> None:
        route = upstream.post(f"{PRIMARY_URL}/user/admin/delete-test-last").mock(
            return_value=httpx.Response(200, json={"deleted": 2})
        )

        response = await client.post(
            "/api/admin/users/remove-test",
            json={"emailPrefix": "trainer", "emailDomain": "test.local", "count": 2},
            headers=AUTH,
        )

        assert response.json() == {"deleted": 2}
        assert route.called

    @pytest.mark.parametrize("count", [0, -1, None])
    async def test_remove_rejects_bad_count(
        self, client: AsyncClient, count: int | None
    ) -> None:
        response = await client.post(
            "/api/admin/users/remove-test",
            json={"emailPrefix": "trainer", "emailDomain": "test.local", "count": count},
            headers=AUTH,
        )

        assert response.status_code == 400


class TestUserSetCollection:
    async def test_passthrough(self, client: AsyncClient, upstream: respx.Router) -> None:
        body = {"data": [{"cardId": "base1-4", "quantity": 2}]}
        upstream.get(f"{PRIMARY_URL}/user/admin/u1/collection/cards/set/base1").mock(
            return_value=httpx.Response(200, json=body)
        )

        response = await client.get(
            "/api/admin/users/u1/collection/cards/set/base1", headers=AUTH
        )

        assert response.json() == body


class TestDbStatus:
    async def test_passthrough(self, client: AsyncClient, upstream: respx.Router) -> None:
        body = {"status": "ok", "collections": 4}
        upstream.get(f"{PRIMARY_URL}/admin/db/status").mock(
            return_value=httpx.Response(200, json=body)
        )

        response = await client.get("/api/admin/db/status", headers=AUTH)

        assert response.json() == body

    async def test_backend_error(self, client: AsyncClient, upstream: respx.Router) -> None:
        upstream.get(f"{PRIMARY_URL}/admin/db/status").mock(
            return_value=httpx.Response(503, json={"message": "Database unreachable"})
        )

        response = await client.get("/api/admin/db/status", headers=AUTH)

        assert response.status_code == 503
        assert response.json()["message"] == "Database unreachable"


class TestStatsOverview:
    async def test_passthrough(self, client: AsyncClient, upstream: respx.Router) -> None:
        body = {
            "cardsAddedPerDay": [{"date": "2024-05-01T00:00:00Z", "count": 12}],
            "cardsBySupertype": [{"label": "Pokémon", "count": 30}],
            "cardsByType": [{"label": "Fire", "count": 8}],
        }
        route = upstream.get(f"{PRIMARY_URL}/admin/stats/overview").mock(
            return_value=httpx.Response(200, json=body)
        )

        response = await client.get("/api/admin/stats/overview", headers=AUTH)

        assert response.json() == body
        assert route.calls.last.request.headers["Authorization"] == "Bearer admin-tok"

    async def test_backend_error_gives_empty_charts(
        self, client: AsyncClient, upstream: respx.Router
    ) -> None:
        upstream.get(f"{PRIMARY_URL}/admin/stats/overview").mock(
            return_value=httpx.Response(403, text="forbidden")
        )

        response = await client.get("/api/admin/stats/overview", headers=AUTH)

        assert response.status_code == 403
        assert response.json() == {
            "cardsAddedPerDay": [],
            "cardsBySupertype": [],
            "cardsByType": [],
        }

    async def test_network_error_gives_empty_charts(
        self, client: AsyncClient, upstream: respx.Router
    ) -> None:
        upstream.get(f"{PRIMARY_URL}/admin/stats/overview").mock(
            side_effect=httpx.ConnectError("refused")
        )

        response = await client.get("/api/admin/stats/overview", headers=AUTH)

        assert response.status_code == 500
        assert response.json()["cardsAddedPerDay"] == []

    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/admin/stats/overview")

        assert response.status_code == 401


class TestAnalytics:
    async def test_cards_added_daily(self, client: AsyncClient, upstream: respx.Router) -> None:
        body = [{"date": "2024-05-01", "count": 15}]
        route = upstream.get(f"{PRIMARY_URL}{CARDS_ADDED_PATH}").mock(
            return_value=httpx.Response(200, json=body)
        )

        response = await client.get("/api/analytics/cards-added-daily", headers=AUTH)

        assert response.json() == body
        assert route.calls.last.request.url.params["period"] == "daily"
        assert route.calls.last.request.url.params["range"] == "30d"

    async def test_cards_by_supertype(self, client: AsyncClient, upstream: respx.Router) -> None:
        body = [{"name": "Pokémon", "value": 1200}, {"name": "Trainer", "value": 300}]
        upstream.get(f"{PRIMARY_URL}/v2/analytics/cards-by-supertype").mock(
            return_value=httpx.Response(200, json=body)
        )

        response = await client.get("/api/analytics/cards-by-supertype", headers=AUTH)

        assert response.json() == body

    @pytest.mark.parametrize(
        ("path", "upstream_path"),
        [
            ("/api/analytics/cards-added-daily", CARDS_ADDED_PATH),
            ("/api/analytics/cards-by-supertype", "/v2/analytics/cards-by-supertype"),
        ],
    )
    async def test_backend_error_gives_empty_list(
        self, client: AsyncClient, upstream: respx.Router, path: str, upstream_path: str
    ) -> None:
        upstream.get(f"{PRIMARY_URL}{upstream_path}").mock(return_value=httpx.Response(502))

        response = await client.get(path, headers=AUTH)

        assert response.status_code == 502
        assert response.json() == []
