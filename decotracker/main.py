import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager, suppress
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from decotracker.api import analysis_router, catalog_router, health_router
from decotracker.config import settings
from decotracker.models.failure import CatalogLoadError
from decotracker.services.catalog_store import CatalogStore
from decotracker.services.sessions import SessionRegistry

logger = logging.getLogger(__name__)


async def load_catalogs(store: CatalogStore) -> None:
    """Load catalogs, reporting total failure instead of raising."""
    try:
        await store.load()
    except CatalogLoadError as e:
        logger.error("No catalog could be loaded: %s", e.detail)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler for startup/shutdown.

    Catalogs load in the background; requests arriving before loading
    finishes are answered with a retryable not-ready failure.
    """
    store = CatalogStore()
    app.state.catalog_store = store
    app.state.session_registry = SessionRegistry()
    load_task = asyncio.create_task(load_catalogs(store))
    yield
    if not load_task.done():
        load_task.cancel()
        with suppress(asyncio.CancelledError):
            await load_task


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("decotracker"),
    lifespan=lifespan,
)

app.include_router(analysis_router)
app.include_router(catalog_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
