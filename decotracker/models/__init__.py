from decotracker.models.catalog import Catalog, CatalogEntry, ItemKind
from decotracker.models.failure import (
    ApiResponse,
    CatalogLoadError,
    FailureDetail,
    FailureKind,
    InputEmptyError,
    InputParseError,
    KnownError,
    NotReadyError,
    OutcomeType,
    SessionNotFoundError,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from decotracker.models.filters import (
    AggregateStats,
    ComparisonFilterState,
    ComparisonStats,
    ComparisonStatusFilter,
    FilterState,
    KindFilter,
    StatusFilter,
)
from decotracker.models.items import ClassifiedItem, ComparisonItem, ComparisonState

__all__ = [
    "AggregateStats",
    "ApiResponse",
    "Catalog",
    "CatalogEntry",
    "CatalogLoadError",
    "ClassifiedItem",
    "ComparisonFilterState",
    "ComparisonItem",
    "ComparisonState",
    "ComparisonStats",
    "ComparisonStatusFilter",
    "FailureDetail",
    "FailureKind",
    "FilterState",
    "InputEmptyError",
    "InputParseError",
    "ItemKind",
    "KindFilter",
    "KnownError",
    "NotReadyError",
    "OutcomeType",
    "SessionNotFoundError",
    "StatusFilter",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
]
