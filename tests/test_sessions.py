import pytest

from decotracker.models.failure import SessionNotFoundError
from decotracker.services.analysis import AnalysisSession
from decotracker.services.catalog_store import CatalogStore
from decotracker.services.sessions import SessionRegistry


class TestSessionRegistry:
    def test_add_and_get(self, store: CatalogStore) -> None:
        registry = SessionRegistry(max_sessions=4)
        session = AnalysisSession(store)

        session_id = registry.add(session)

        assert registry.get(session_id) is session
        assert session_id in registry

    def test_ids_are_unique(self, store: CatalogStore) -> None:
        registry = SessionRegistry(max_sessions=4)

        ids = {registry.add(AnalysisSession(store)) for _ in range(3)}

        assert len(ids) == 3
        assert len(registry) == 3

    def test_unknown_id_raises(self) -> None:
        registry = SessionRegistry(max_sessions=4)

        with pytest.raises(SessionNotFoundError) as exc_info:
            registry.get("nope")

        assert exc_info.value.session_id == "nope"
        assert exc_info.value.status_code == 404

    def test_evicts_least_recently_used(self, store: CatalogStore) -> None:
        """Reading a session keeps it alive past older ones."""
        registry = SessionRegistry(max_sessions=2)
        first = registry.add(AnalysisSession(store))
        second = registry.add(AnalysisSession(store))

        registry.get(first)
        third = registry.add(AnalysisSession(store))

        assert first in registry
        assert third in registry
        assert second not in registry
        assert len(registry) == 2
