"""
Analysis orchestration.

Runs the extract -> classify pipeline for one or two pasted save documents
and keeps the last complete result so filter and search changes can be
re-applied without re-running extraction.

INVARIANT: A result is only replaced after classification fully completes.
Any failure (catalog not ready, empty input, invalid JSON) leaves the
previous result untouched.
"""

import logging
from dataclasses import dataclass, field

from decotracker.filtering.pipeline import (
    ComparisonFilterResult,
    FilterResult,
    filter_comparison,
    filter_items,
)
from decotracker.models.catalog import Catalog
from decotracker.models.filters import ComparisonFilterState, FilterState
from decotracker.models.items import ClassifiedItem, ComparisonItem
from decotracker.parsers.save_document import extract_codes, parse_save_text
from decotracker.services.catalog_store import CatalogStore
from decotracker.services.classifier import classify, classify_pair, unrecognized_codes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Analysis:
    """Classified items for one player."""

    items: list[ClassifiedItem] = field(default_factory=list)
    unrecognized_count: int = 0


@dataclass(frozen=True)
class Comparison:
    """Classified items for two players."""

    items: list[ComparisonItem] = field(default_factory=list)
    player1_unrecognized_count: int = 0
    player2_unrecognized_count: int = 0


def run_analysis(text: str, catalog: Catalog) -> Analysis:
    """
    Parse, extract, and classify one save document.

    Raises:
        InputEmptyError: If text is blank
        InputParseError: If text is not valid JSON
    """
    codes = extract_codes(parse_save_text(text))
    items = classify(codes, catalog)
    unknown = unrecognized_codes(codes, catalog)

    logger.info(
        "Analyzed save: %d codes, %d owned of %d, %d unrecognized",
        len(codes),
        sum(1 for item in items if item.owned),
        len(items),
        len(unknown),
    )
    return Analysis(items=items, unrecognized_count=len(unknown))


def run_comparison(player1_text: str, player2_text: str, catalog: Catalog) -> Comparison:
    """
    Parse, extract, and classify two save documents against one catalog.

    Both documents are parsed before anything is classified.

    Raises:
        InputEmptyError: If either text is blank
        InputParseError: If either text is not valid JSON
    """
    codes1 = extract_codes(parse_save_text(player1_text))
    codes2 = extract_codes(parse_save_text(player2_text))
    items = classify_pair(codes1, codes2, catalog)

    logger.info(
        "Compared saves: %d vs %d codes over %d catalog entries",
        len(codes1),
        len(codes2),
        len(items),
    )
    return Comparison(
        items=items,
        player1_unrecognized_count=len(unrecognized_codes(codes1, catalog)),
        player2_unrecognized_count=len(unrecognized_codes(codes2, catalog)),
    )


class AnalysisSession:
    """
    Per-user analysis state for an interactive front end.

    Holds the last successful analysis and comparison along with the
    current filter states. The catalog store is shared and read-only.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store
        self.analysis: Analysis | None = None
        self.comparison: Comparison | None = None
        self.filter_state = FilterState()
        self.comparison_filter_state = ComparisonFilterState()

    def analyze(self, text: str, state: FilterState | None = None) -> FilterResult:
        """
        Analyze a save document and return the filtered view.

        Raises:
            NotReadyError: If no catalog has finished loading
            CatalogLoadError: If every catalog failed to load
            InputEmptyError: If text is blank
            InputParseError: If text is not valid JSON
        """
        catalog = self._store.require_catalog()
        self.analysis = run_analysis(text, catalog)
        return self.apply_filter(state)

    def compare(
        self,
        player1_text: str,
        player2_text: str,
        state: ComparisonFilterState | None = None,
    ) -> ComparisonFilterResult:
        """Compare two save documents and return the filtered view."""
        catalog = self._store.require_catalog()
        self.comparison = run_comparison(player1_text, player2_text, catalog)
        return self.apply_comparison_filter(state)

    def apply_filter(self, state: FilterState | None = None) -> FilterResult:
        """Re-derive the single-player view. Empty before any analysis."""
        if state is not None:
            self.filter_state = state
        if self.analysis is None:
            return FilterResult()
        return filter_items(self.analysis.items, self.filter_state)

    def apply_comparison_filter(
        self, state: ComparisonFilterState | None = None
    ) -> ComparisonFilterResult:
        """Re-derive the comparison view. Empty before any comparison."""
        if state is not None:
            self.comparison_filter_state = state
        if self.comparison is None:
            return ComparisonFilterResult()
        return filter_comparison(self.comparison.items, self.comparison_filter_state)
