"""
Gallery → Shopify migration: duplicate pipeline CLI.

Reads the converted archive and WooCommerce Shopify CSVs, resolves
duplicates between them and writes one merged Shopify import file.

Usage:
    python main.py --primary data/archive.csv --secondary data/woo.csv \
        --output data/output/shopify_products.csv --report data/output/duplicates.xlsx
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from config import settings, configure_logging
from exceptions import AppError, ConfigurationError
from models.duplicate import (
    DuplicateDetectionConfig,
    DuplicateMatch,
    DuplicateResolutionConfig,
    ManualChoice,
    ResolutionStrategy,
)
from parsers import read_shopify_csv, write_shopify_csv
from services.migration_service import MigrationService

logger = structlog.get_logger(__name__)

CHOICE_KEYS = {
    "1": ManualChoice.PRIMARY,
    "2": ManualChoice.SECONDARY,
    "3": ManualChoice.BOTH,
}


async def prompt_manual_choice(duplicate: DuplicateMatch) -> ManualChoice:
    """Ask on the console which version of a duplicate to keep."""
    print(f"\nDuplicate: {duplicate.title}")
    print(f"  Archive:     SKU {duplicate.primary_sku}, price {duplicate.primary_price}, "
          f"artist {duplicate.primary_artist}, status {duplicate.primary_status}")
    print(f"  WooCommerce: SKU {duplicate.secondary_sku}, price {duplicate.secondary_price}, "
          f"artist {duplicate.secondary_artist}, status {duplicate.secondary_status}")
    print(f"  Match type:  {duplicate.match_type}")

    while True:
        answer = await asyncio.to_thread(
            input, "Keep [1] archive, [2] WooCommerce, [3] both: "
        )
        choice = CHOICE_KEYS.get(answer.strip())
        if choice is not None:
            return choice
        print("Please answer 1, 2 or 3.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Merge archive and WooCommerce Shopify CSVs, resolving duplicate artworks"
    )
    parser.add_argument("--primary", required=True, type=Path,
                        help="Shopify CSV converted from the gallery archive export")
    parser.add_argument("--secondary", required=True, type=Path,
                        help="Shopify CSV converted from WooCommerce")
    parser.add_argument("--output", required=True, type=Path,
                        help="Merged Shopify CSV to write")
    parser.add_argument("--report", type=Path, default=None,
                        help="Optional Excel duplicate report to write")
    parser.add_argument("--matching-strategy", default=settings.matching_strategy.value,
                        help="exact-title, normalized-title, advanced or fuzzy")
    parser.add_argument("--threshold", type=float, default=settings.similarity_threshold,
                        help="Similarity threshold for fuzzy matching (0-1]")
    parser.add_argument("--resolution", default=settings.resolution_strategy.value,
                        help="keep-both, prefer-primary, prefer-secondary or ask-manual")
    return parser


async def run(args: argparse.Namespace) -> int:
    detection_config = DuplicateDetectionConfig(
        matching_strategy=args.matching_strategy,
        similarity_threshold=args.threshold,
    )
    resolution_config = DuplicateResolutionConfig(strategy=args.resolution)
    if resolution_config.strategy == ResolutionStrategy.ASK_MANUAL:
        resolution_config.on_manual_choice = prompt_manual_choice

    primary = read_shopify_csv(args.primary)
    secondary = read_shopify_csv(args.secondary)

    service = MigrationService()
    result = await service.run(primary, secondary, detection_config, resolution_config)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    written = write_shopify_csv(result.products, args.output)

    if args.report is not None:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        excel = service.report_service.export_excel(result.report)
        args.report.write_bytes(excel.getvalue())
        logger.info("duplicate_report_saved", path=str(args.report))

    logger.info(
        "migration_complete",
        output=str(args.output),
        rows=written,
        duplicates=len(result.matches),
    )
    return 0 if result.success else 1


def main(argv: Optional[list[str]] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        return asyncio.run(run(args))
    except ConfigurationError as e:
        logger.error("configuration_error", code=e.code, message=e.message)
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 2
    except PydanticValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except AppError as e:
        logger.error("migration_failed", code=e.code, message=e.message, details=e.details)
        return 1


if __name__ == "__main__":
    sys.exit(main())
