#!/usr/bin/env python3
"""
validate_catalog.py - Check the pattern catalog before shipping it.

Validates the catalog schema, reports totals per category and flags
patterns whose lesson files are missing.

Usage:
  python scripts/validate_catalog.py
  python scripts/validate_catalog.py --catalog patternhub/data/catalog.yaml --lessons lessons
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv(PROJECT_ROOT / ".env")

from patternhub.classroom import StatisticsCalculator, load_catalog
from patternhub.config import configure_logging, load_settings
from patternhub.schemas import Category, PatternCatalog
from patternhub.utils import get_available_lessons

logger = logging.getLogger(__name__)


def find_missing_lessons(catalog: PatternCatalog, lessons_dir: Path) -> list[str]:
    """Return ids of patterns whose lesson file is absent."""
    available = set(get_available_lessons(lessons_dir))
    missing = []
    for pattern in catalog.patterns:
        if not pattern.lesson_file:
            missing.append(pattern.id)
            continue
        relative = pattern.lesson_file.removeprefix("lessons/")
        if relative not in available:
            missing.append(pattern.id)
    return missing


def category_report(catalog: PatternCatalog) -> dict[str, dict[str, int]]:
    """Patterns, challenges and points per category."""
    report = {}
    for category in Category:
        patterns = catalog.patterns_in_category(category)
        report[category.value] = {
            "patterns": len(patterns),
            "challenges": sum(len(p.challenges) for p in patterns),
            "points": sum(p.total_points for p in patterns),
        }
    return report


def main():
    settings = load_settings()
    configure_logging(settings)
    parser = argparse.ArgumentParser(
        description="Validate the design pattern catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=settings.catalog_path,
        help="Path to catalog YAML"
    )
    parser.add_argument(
        "--lessons",
        type=Path,
        default=settings.lessons_dir,
        help="Path to lessons directory"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat missing lesson files as errors"
    )

    args = parser.parse_args()

    logger.info(f"Loading catalog: {args.catalog}")
    try:
        catalog = load_catalog(args.catalog)
    except (FileNotFoundError, yaml.YAMLError) as e:
        logger.error(f"Could not read catalog: {e}")
        sys.exit(1)
    except ValidationError as e:
        logger.error(f"Catalog failed validation with {e.error_count()} error(s):")
        for error in e.errors()[:10]:
            location = ".".join(str(part) for part in error["loc"])
            logger.error(f"  - {location}: {error['msg']}")
        sys.exit(1)

    stats = StatisticsCalculator(catalog)
    for category, counts in category_report(catalog).items():
        logger.info(
            f"  {category}: {counts['patterns']} patterns, "
            f"{counts['challenges']} challenges, {counts['points']} points"
        )
    logger.info(
        f"Total: {stats.total_patterns()} patterns, "
        f"{stats.total_challenges_available()} challenges, "
        f"{stats.total_points_available()} points"
    )

    missing = find_missing_lessons(catalog, args.lessons)
    if missing:
        logger.warning(f"{len(missing)} pattern(s) without a lesson file in {args.lessons}:")
        for pattern_id in missing[:10]:
            logger.warning(f"  - {pattern_id}")
        if len(missing) > 10:
            logger.warning(f"  ... and {len(missing) - 10} more")
        if args.strict:
            sys.exit(1)
    else:
        logger.info("All lesson files present")


if __name__ == "__main__":
    main()
