"""
Analyze a save file from the command line.

Loads the configured catalogs, then logs collection completeness for one
save file, or the comparison buckets for two.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from decotracker.filtering.pipeline import filter_comparison, filter_items
from decotracker.models.failure import KnownError
from decotracker.models.filters import ComparisonFilterState, FilterState, KindFilter
from decotracker.services.analysis import run_analysis, run_comparison
from decotracker.services.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


async def run(save_path: Path, compare_path: Path | None, kind: KindFilter) -> int:
    """Run one analysis. Returns a process exit code."""
    store = CatalogStore()

    try:
        catalog = await store.load()
        text = save_path.read_text(encoding="utf-8")

        if compare_path is None:
            analysis = run_analysis(text, catalog)
            stats = filter_items(analysis.items, FilterState(kind_filter=kind)).stats
            logger.info("Owned:    %d", stats.owned)
            logger.info("Missing:  %d", stats.missing)
            logger.info("Total:    %d", stats.total)
            logger.info("Complete: %d%%", stats.percentage)
        else:
            other = compare_path.read_text(encoding="utf-8")
            comparison = run_comparison(text, other, catalog)
            cstats = filter_comparison(
                comparison.items, ComparisonFilterState(kind_filter=kind)
            ).stats
            logger.info("Player 1 only: %d", cstats.player1_only)
            logger.info("Player 2 only: %d", cstats.player2_only)
            logger.info("Both:          %d", cstats.both)
            logger.info("Neither:       %d", cstats.neither)
    except KnownError as e:
        logger.error("%s (%s)", e.message, e.detail or e.kind.value)
        return 1
    except OSError as e:
        logger.error("Could not read save file: %s", e)
        return 1

    return 0


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Check decoration and obstacle ownership")
    parser.add_argument("save", type=Path, help="Save document JSON file")
    parser.add_argument("--compare", type=Path, help="Second save file for comparison")
    parser.add_argument(
        "--kind",
        choices=[k.value for k in KindFilter],
        default=KindFilter.ALL.value,
        help="Limit stats to one item kind",
    )
    args = parser.parse_args()

    sys.exit(asyncio.run(run(args.save, args.compare, KindFilter(args.kind))))


if __name__ == "__main__":
    main()
