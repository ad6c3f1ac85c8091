"""
Health check endpoints.

Provides liveness and readiness probes. Readiness reflects catalog loading:
the service is ready as soon as at least one catalog is available.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from decotracker.api.deps import get_catalog_store
from decotracker.services.catalog_store import CatalogStore

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    catalogs: dict[str, dict[str, Any]] | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check catalogs.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    store: Annotated[CatalogStore, Depends(get_catalog_store)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 while catalogs are loading or when both failed to load.
    A partially loaded catalog is still ready.
    """
    catalog_status = store.status()
    if catalog_status["ready"]:
        return HealthResponse(status="ready", catalogs=catalog_status["catalogs"])

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="not ready", catalogs=catalog_status["catalogs"])
