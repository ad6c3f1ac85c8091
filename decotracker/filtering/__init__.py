"""
Filtering module for deriving display views from classified items.

The pipeline is a pure function of (items, filter state); callers re-run
it on every filter or search change without re-classifying.
"""

from decotracker.filtering.pipeline import (
    ComparisonFilterResult,
    FilterResult,
    completion_percentage,
    compute_comparison_stats,
    compute_stats,
    filter_comparison,
    filter_items,
    matches_search,
)

__all__ = [
    "ComparisonFilterResult",
    "FilterResult",
    "completion_percentage",
    "compute_comparison_stats",
    "compute_stats",
    "filter_comparison",
    "filter_items",
    "matches_search",
]
