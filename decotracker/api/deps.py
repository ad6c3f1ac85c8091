"""Shared FastAPI dependencies."""

from fastapi import Request

from decotracker.services.catalog_store import CatalogStore
from decotracker.services.sessions import SessionRegistry


def get_catalog_store(request: Request) -> CatalogStore:
    """
    Dependency that provides the application's catalog store.

    The store is created by the application lifespan. Tests override this
    dependency with a store built from in-memory entries.
    """
    store: CatalogStore = request.app.state.catalog_store
    return store


def get_session_registry(request: Request) -> SessionRegistry:
    """Dependency that provides the in-memory analysis session registry."""
    registry: SessionRegistry = request.app.state.session_registry
    return registry
