"""
Catalog API endpoints.

Exposes which catalogs loaded and how many entries each holds.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from decotracker.api.deps import get_catalog_store
from decotracker.services.catalog_store import CatalogStore

router = APIRouter(prefix="/catalog", tags=["catalog"])


class CatalogStatusResponse(BaseModel):
    """Response model for catalog status."""

    ready: bool
    total_entries: int = 0
    catalogs: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Per-kind status: loading, loaded, or failed, with entry count",
    )


@router.get("", response_model=CatalogStatusResponse)
async def get_catalog_status(
    store: Annotated[CatalogStore, Depends(get_catalog_store)],
) -> CatalogStatusResponse:
    """Get load status and entry counts for both catalogs."""
    catalog_status = store.status()
    return CatalogStatusResponse(
        ready=catalog_status["ready"],
        total_entries=store.catalog.size,
        catalogs=catalog_status["catalogs"],
    )
