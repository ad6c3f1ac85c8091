from decotracker.api.analysis import router as analysis_router
from decotracker.api.catalog import router as catalog_router
from decotracker.api.health import router as health_router

__all__ = [
    "analysis_router",
    "catalog_router",
    "health_router",
]
