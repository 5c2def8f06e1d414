import pytest
import respx
from httpx import ASGITransport, AsyncClient

from pokeadmin.main import app
from pokeadmin.services.backend_client import BackendClient, get_backend_client
from pokeadmin.services.source_fetcher import ResilientSourceFetcher, get_fetcher

from tests.constants import BACKUP_URL, PRIMARY_URL


@pytest.fixture
def fetcher() -> ResilientSourceFetcher:
    """Fetcher pointed at mocked primary and backup sources."""
    return ResilientSourceFetcher(
        primary_base_url=PRIMARY_URL,
        secondary_base_url=BACKUP_URL,
        timeout=1.0,
    )


@pytest.fixture
def backend() -> BackendClient:
    """Backend client pointed at the mocked primary host."""
    return BackendClient(base_url=PRIMARY_URL, timeout=1.0)


@pytest.fixture
def upstream():
    """Mock every outgoing httpx request; unmatched requests fail the test."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
async def client(fetcher: ResilientSourceFetcher, backend: BackendClient):
    """Provide an async test client with upstream clients overridden."""
    app.dependency_overrides[get_fetcher] = lambda: fetcher
    app.dependency_overrides[get_backend_client] = lambda: backend

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_collection() -> dict:
    """Backend collection response spanning three sets."""
    return {
        "data": [
            {
                "id": "base1-10",
                "name": "Mewtwo",
                "number": "10",
                "quantity": 1,
                "rarity": "Rare Holo",
                "imageSmall": "https://images.test/base1/10.png",
                "set": {"id": "base1", "name": "Base", "releaseDate": "1999/01/09"},
            },
            {
                "id": "base1-2",
                "name": "Blastoise",
                "number": "2",
                "quantity": 2,
                "set": {"id": "base1", "name": "Base", "releaseDate": "1999/01/09"},
            },
            {
                "id": "swshp-SWSH045",
                "name": "Pikachu",
                "number": "SWSH045",
                "quantity": 3,
                "set": {"id": "swshp", "name": "SWSH Black Star Promos"},
            },
            {
                "id": "sv3pt5-6",
                "name": "Charizard ex",
                "number": "6",
                "quantity": 1,
                "imageLarge": "https://images.test/sv3pt5/6_hires.png",
                "set": {
                    "id": "sv3pt5",
                    "name": "151",
                    "series": "Scarlet & Violet",
                    "releaseDate": "2023/09/22",
                },
            },
        ],
        "totalUniqueCards": 4,
        "totalCards": 7,
    }
