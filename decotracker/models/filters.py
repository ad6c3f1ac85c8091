"""
Filter state and aggregate statistics.

Filter state only shapes the derived view. It never changes classified
data, so the same classified list can be re-filtered any number of times.
"""

from dataclasses import dataclass
from enum import Enum

from decotracker.models.catalog import ItemKind


class KindFilter(str, Enum):
    ALL = "all"
    DECORATION = "decoration"
    OBSTACLE = "obstacle"

    def matches(self, kind: ItemKind) -> bool:
        return self is KindFilter.ALL or self.value == kind.value


class StatusFilter(str, Enum):
    """Single-player status filter."""

    ALL = "all"
    OWNED = "owned"
    MISSING = "missing"


class ComparisonStatusFilter(str, Enum):
    """Two-player status filter."""

    ALL = "all"
    PLAYER1_ONLY = "player1_only"
    PLAYER2_ONLY = "player2_only"
    BOTH = "both"


@dataclass(frozen=True)
class FilterState:
    """Kind, status, and search refinement for a single-player view."""

    kind_filter: KindFilter = KindFilter.ALL
    status_filter: StatusFilter = StatusFilter.ALL
    search_term: str = ""


@dataclass(frozen=True)
class ComparisonFilterState:
    """Kind, status, and search refinement for a comparison view."""

    kind_filter: KindFilter = KindFilter.ALL
    status_filter: ComparisonStatusFilter = ComparisonStatusFilter.ALL
    search_term: str = ""


@dataclass(frozen=True)
class AggregateStats:
    """Collection completeness for the selected kind scope."""

    owned: int = 0
    missing: int = 0
    total: int = 0
    percentage: int = 0


@dataclass(frozen=True)
class ComparisonStats:
    """Comparison bucket counts for the selected kind scope."""

    total: int = 0
    neither: int = 0
    player1_only: int = 0
    player2_only: int = 0
    both: int = 0
    player1_owned: int = 0
    player2_owned: int = 0
