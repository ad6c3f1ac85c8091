"""Tests for health and catalog endpoints."""

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from decotracker.api.deps import get_catalog_store
from decotracker.main import app
from decotracker.models.failure import CatalogLoadError
from decotracker.services.catalog_store import CatalogStore


async def _client_for(store: CatalogStore) -> AsyncClient:
    app.dependency_overrides[get_catalog_store] = lambda: store
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    async def test_health_returns_healthy(self) -> None:
        """Liveness probe returns healthy."""
        async with await _client_for(CatalogStore()) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["catalogs"] is None


class TestReadyEndpoint:
    async def test_ready_when_loaded(self, store: CatalogStore) -> None:
        async with await _client_for(store) as client:
            response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    async def test_not_ready_while_loading(self) -> None:
        async with await _client_for(CatalogStore()) as client:
            response = await client.get("/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not ready"
        assert data["catalogs"]["decoration"]["status"] == "loading"

    async def test_ready_with_partial_catalog(self, tmp_path: Path) -> None:
        """One loaded catalog is enough to be ready."""
        deco_path = tmp_path / "decorations.json"
        deco_path.write_text('[{"Code": "18000001", "Name": "Flag"}]', encoding="utf-8")
        store = CatalogStore()
        await store.load(str(deco_path), str(tmp_path / "missing.json"))

        async with await _client_for(store) as client:
            response = await client.get("/ready")

        assert response.status_code == 200
        catalogs = response.json()["catalogs"]
        assert catalogs["decoration"]["count"] == 1
        assert catalogs["obstacle"]["status"] == "failed"

    async def test_not_ready_when_all_failed(self, tmp_path: Path) -> None:
        store = CatalogStore()
        with pytest.raises(CatalogLoadError):
            await store.load(str(tmp_path / "a.json"), str(tmp_path / "b.json"))

        async with await _client_for(store) as client:
            response = await client.get("/ready")

        assert response.status_code == 503


class TestCatalogEndpoint:
    async def test_catalog_status(self, store: CatalogStore) -> None:
        async with await _client_for(store) as client:
            response = await client.get("/catalog")

        assert response.status_code == 200
        data = response.json()
        assert data["ready"] is True
        assert data["total_entries"] == 5
        assert data["catalogs"]["decoration"]["count"] == 3
        assert data["catalogs"]["obstacle"]["count"] == 2
