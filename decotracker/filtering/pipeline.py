"""
Filter Pipeline — Derived Views over Classified Items.

Stages run in a fixed order, each narrowing the previous stage's output:

1. Kind filter
2. Status filter (owned/missing, or comparison bucket)
3. Search filter (only when a search term is given)

INVARIANTS:
- Filtering never adds or reorders items
- Stats are computed from the kind stage only; status and search
  refinements change the visible list, never the headline numbers
- Pure functions: same items + same state -> same result
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from math import floor
from typing import Protocol, TypeVar

from decotracker.models.catalog import ItemKind
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


class _Searchable(Protocol):
    @property
    def code(self) -> int: ...

    @property
    def name(self) -> str: ...

    @property
    def kind(self) -> ItemKind: ...


ItemT = TypeVar("ItemT", bound=_Searchable)


@dataclass
class FilterResult:
    """Visible items and stats for a single-player view."""

    visible_items: list[ClassifiedItem] = field(default_factory=list)
    stats: AggregateStats = field(default_factory=AggregateStats)


@dataclass
class ComparisonFilterResult:
    """Visible items and stats for a comparison view."""

    visible_items: list[ComparisonItem] = field(default_factory=list)
    stats: ComparisonStats = field(default_factory=ComparisonStats)


_COMPARISON_STATUS: dict[ComparisonStatusFilter, ComparisonState] = {
    ComparisonStatusFilter.PLAYER1_ONLY: ComparisonState.PLAYER1_ONLY,
    ComparisonStatusFilter.PLAYER2_ONLY: ComparisonState.PLAYER2_ONLY,
    ComparisonStatusFilter.BOTH: ComparisonState.BOTH,
}


def completion_percentage(owned: int, total: int) -> int:
    """
    Whole-number completion percentage, 0 for an empty scope.

    Halves round up (1/8 -> 13), unlike the built-in round().
    """
    if total <= 0:
        return 0
    return int(floor(owned / total * 100 + 0.5))


def filter_by_kind(items: Sequence[ItemT], kind_filter: KindFilter) -> list[ItemT]:
    if kind_filter is KindFilter.ALL:
        return list(items)
    return [item for item in items if kind_filter.matches(item.kind)]


def matches_search(item: _Searchable, search_term: str) -> bool:
    """Case-insensitive substring match on name, decimal code, or kind name."""
    term = search_term.lower()
    return (
        term in item.name.lower()
        or term in str(item.code)
        or term in item.kind.value.lower()
    )


def filter_by_search(items: Sequence[ItemT], search_term: str) -> list[ItemT]:
    if not search_term:
        return list(items)
    return [item for item in items if matches_search(item, search_term)]


def filter_by_status(items: Sequence[ClassifiedItem], status: StatusFilter) -> list[ClassifiedItem]:
    if status is StatusFilter.OWNED:
        return [item for item in items if item.owned]
    if status is StatusFilter.MISSING:
        return [item for item in items if not item.owned]
    return list(items)


def filter_by_comparison_status(
    items: Sequence[ComparisonItem], status: ComparisonStatusFilter
) -> list[ComparisonItem]:
    wanted = _COMPARISON_STATUS.get(status)
    if wanted is None:
        return list(items)
    return [item for item in items if item.state is wanted]


def compute_stats(items: Sequence[ClassifiedItem]) -> AggregateStats:
    """Owned/missing/percentage over an already kind-filtered list."""
    total = len(items)
    owned = sum(1 for item in items if item.owned)
    return AggregateStats(
        owned=owned,
        missing=total - owned,
        total=total,
        percentage=completion_percentage(owned, total),
    )


def compute_comparison_stats(items: Sequence[ComparisonItem]) -> ComparisonStats:
    """Bucket counts over an already kind-filtered list."""
    buckets = {state: 0 for state in ComparisonState}
    for item in items:
        buckets[item.state] += 1

    return ComparisonStats(
        total=len(items),
        neither=buckets[ComparisonState.NEITHER],
        player1_only=buckets[ComparisonState.PLAYER1_ONLY],
        player2_only=buckets[ComparisonState.PLAYER2_ONLY],
        both=buckets[ComparisonState.BOTH],
        player1_owned=buckets[ComparisonState.PLAYER1_ONLY] + buckets[ComparisonState.BOTH],
        player2_owned=buckets[ComparisonState.PLAYER2_ONLY] + buckets[ComparisonState.BOTH],
    )


def filter_items(items: Sequence[ClassifiedItem], state: FilterState) -> FilterResult:
    """Derive the visible items and stats for a single-player view."""
    by_kind = filter_by_kind(items, state.kind_filter)
    stats = compute_stats(by_kind)

    visible = filter_by_status(by_kind, state.status_filter)
    visible = filter_by_search(visible, state.search_term)

    return FilterResult(visible_items=visible, stats=stats)


def filter_comparison(
    items: Sequence[ComparisonItem], state: ComparisonFilterState
) -> ComparisonFilterResult:
    """Derive the visible items and bucket counts for a comparison view."""
    by_kind = filter_by_kind(items, state.kind_filter)
    stats = compute_comparison_stats(by_kind)

    visible = filter_by_comparison_status(by_kind, state.status_filter)
    visible = filter_by_search(visible, state.search_term)

    return ComparisonFilterResult(visible_items=visible, stats=stats)
