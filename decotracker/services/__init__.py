"""Services for catalog loading, classification, and analysis."""

from decotracker.services.analysis import (
    Analysis,
    AnalysisSession,
    Comparison,
    run_analysis,
    run_comparison,
)
from decotracker.services.catalog_store import (
    CatalogStore,
    derive_image_ref,
    load_catalog_records,
)
from decotracker.services.classifier import classify, classify_pair, unrecognized_codes
from decotracker.services.image_prefetch import prefetch_images, schedule_prefetch
from decotracker.services.sessions import SessionRegistry

__all__ = [
    "Analysis",
    "AnalysisSession",
    "CatalogStore",
    "Comparison",
    "SessionRegistry",
    "classify",
    "classify_pair",
    "derive_image_ref",
    "load_catalog_records",
    "prefetch_images",
    "run_analysis",
    "run_comparison",
    "schedule_prefetch",
    "unrecognized_codes",
]
