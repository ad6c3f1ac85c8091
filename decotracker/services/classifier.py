"""
Ownership classification.

Cross-references extracted code sets against the catalog. Output is
driven by the catalog, not by the input: exactly one item per catalog
entry, decorations first, each kind in catalog order. Codes absent from
the catalog are dropped.
"""

import logging
from collections.abc import Set

from decotracker.models.catalog import Catalog
from decotracker.models.items import ClassifiedItem, ComparisonItem

logger = logging.getLogger(__name__)


def classify(codes: Set[float], catalog: Catalog) -> list[ClassifiedItem]:
    """Mark every catalog entry owned or missing for one player."""
    return [ClassifiedItem.from_entry(entry, entry.code in codes) for entry in catalog.entries()]


def classify_pair(
    codes1: Set[float],
    codes2: Set[float],
    catalog: Catalog,
) -> list[ComparisonItem]:
    """Mark every catalog entry with independent ownership for two players."""
    return [
        ComparisonItem.from_entry(entry, entry.code in codes1, entry.code in codes2)
        for entry in catalog.entries()
    ]


def unrecognized_codes(codes: Set[float], catalog: Catalog) -> frozenset[float]:
    """Codes with no catalog entry of either kind."""
    unknown = frozenset(code for code in codes if code not in catalog)
    if unknown:
        logger.debug("%d extracted codes are not in the catalog", len(unknown))
    return unknown
