import pytest

from decotracker.models import failure as failure_module
from decotracker.models.catalog import Catalog, CatalogEntry, ItemKind
from decotracker.services.catalog_store import CatalogStore


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture
def decorations() -> list[CatalogEntry]:
    return [
        CatalogEntry(
            code=18000001, name="Flag", image_ref="images/flag.png", kind=ItemKind.DECORATION
        ),
        CatalogEntry(
            code=18000101,
            name="Golden Flag",
            image_ref="images/golden_flag.png",
            kind=ItemKind.DECORATION,
        ),
        CatalogEntry(code=18000003, name="Torch", image_ref=None, kind=ItemKind.DECORATION),
    ]


@pytest.fixture
def obstacles() -> list[CatalogEntry]:
    return [
        CatalogEntry(
            code=8000001, name="Rock", image_ref="images/rock.png", kind=ItemKind.OBSTACLE
        ),
        CatalogEntry(code=8000002, name="Gem Box", image_ref=None, kind=ItemKind.OBSTACLE),
    ]


@pytest.fixture
def catalog(decorations: list[CatalogEntry], obstacles: list[CatalogEntry]) -> Catalog:
    return Catalog(decorations=tuple(decorations), obstacles=tuple(obstacles))


@pytest.fixture
def store(decorations: list[CatalogEntry], obstacles: list[CatalogEntry]) -> CatalogStore:
    return CatalogStore.from_entries(decorations, obstacles)


@pytest.fixture
def sample_save() -> str:
    """Sample save document owning Flag, Golden Flag, and Rock."""
    return """{
  "tag": "#ABC123",
  "decos": [{"data": 18000001, "cnt": 1}, {"data": 18000101, "cnt": 2}],
  "obstacles": [{"data": 8000001, "x": 4, "y": 7}],
  "units": [{"data": 4000000, "lvl": 9}]
}"""
