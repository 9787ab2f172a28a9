#!/usr/bin/env python3
"""
export_progress.py - Export a learner's pattern mastery table.

Reads the stored progress record, reconciles it with the catalog and
writes one row per pattern (challenges, points, mastery) as CSV.

Usage:
  python scripts/export_progress.py
  python scripts/export_progress.py --db ~/.patternhub/progress.db --output mastery.csv
"""

import argparse
import logging
import sys
from dataclasses import asdict
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import pandas as pd
from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

from patternhub.classroom import ProgressStore, SqliteProgressStorage, StatisticsCalculator, load_catalog
from patternhub.config import configure_logging, load_settings
from patternhub.schemas import PatternCatalog, UserProgress

logger = logging.getLogger(__name__)


def build_mastery_frame(catalog: PatternCatalog, progress: UserProgress) -> pd.DataFrame:
    """One row per pattern, in catalog order."""
    rows = StatisticsCalculator(catalog).pattern_progress(progress)
    return pd.DataFrame([asdict(row) for row in rows])


def main():
    settings = load_settings()
    configure_logging(settings)
    parser = argparse.ArgumentParser(
        description="Export pattern mastery from a progress database",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=settings.progress_db,
        help="Path to progress database"
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=settings.catalog_path,
        help="Path to catalog YAML"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="CSV output path (default: print to stdout)"
    )

    args = parser.parse_args()

    if not args.db.exists():
        logger.error(f"Progress database not found: {args.db}")
        sys.exit(1)

    catalog = load_catalog(args.catalog)
    store = ProgressStore(catalog, SqliteProgressStorage(args.db))
    progress = store.user_progress

    df = build_mastery_frame(catalog, progress)

    if args.output:
        df.to_csv(args.output, index=False)
        logger.info(f"Saved mastery table to: {args.output}")
    else:
        print(df.to_string(index=False))

    summary = StatisticsCalculator(catalog).summary(progress)
    logger.info(
        f"Points: {summary['total_points']}/{summary['points_available']}, "
        f"patterns mastered: {summary['patterns_completed']}/{summary['total_patterns']}, "
        f"streak: {summary['current_streak']} day(s)"
    )
    if progress.achievements:
        logger.info(f"Achievements: {', '.join(progress.achievements)}")


if __name__ == "__main__":
    main()
