"""
Migration service.

Runs the duplicate pipeline over converted archive and WooCommerce rows:
detect → resolve → report. Persistence and image upload happen elsewhere.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Optional
import structlog

from models.duplicate import (
    DuplicateDetectionConfig,
    DuplicateMatch,
    DuplicateResolutionConfig,
)
from models.product import ShopifyProduct
from models.report import DuplicateReport
from services.duplicate_detection_service import DuplicateDetectionService
from services.duplicate_report_service import DuplicateReportService
from services.duplicate_resolution_service import DuplicateResolutionService
from services.handle_registry import HandleRegistry
from utils.html_utils import extract_dimensions

logger = structlog.get_logger(__name__)


@dataclass
class MigrationResult:
    """Outcome of one duplicate pipeline run."""
    matches: list[DuplicateMatch]
    primary_products: list[ShopifyProduct]
    secondary_products: list[ShopifyProduct]
    report: DuplicateReport
    duplicate_handles: list[str] = field(default_factory=list)

    @property
    def products(self) -> list[ShopifyProduct]:
        """Both sets, archive rows first."""
        return [*self.primary_products, *self.secondary_products]

    @property
    def success(self) -> bool:
        """True if every main row ended with a unique handle."""
        return not self.duplicate_handles


def find_duplicate_handles(products: list[ShopifyProduct]) -> list[str]:
    """Handles used by more than one main row."""
    counts = Counter(p.handle for p in products if p.is_main_row)
    return sorted(handle for handle, count in counts.items() if count > 1)


def assign_missing_handles(
    products: list[ShopifyProduct],
    registry: HandleRegistry,
    source_type: str,
) -> int:
    """
    Give main rows without a handle one generated from their title.

    Returns:
        Number of handles assigned
    """
    assigned = 0
    for product in products:
        if product.is_main_row and not product.handle.strip():
            product.handle = registry.generate(product.title, product.sku, source_type)
            assigned += 1

    if assigned:
        logger.info("missing_handles_assigned", source=source_type, count=assigned)
    return assigned


class MigrationService:
    """Sequences detection, resolution and reporting."""

    def __init__(
        self,
        extract_dimensions: Callable[[str], str] = extract_dimensions,
        secondary_label: Optional[str] = None,
        secondary_handle_suffix: Optional[str] = None,
        report_service: Optional[DuplicateReportService] = None,
    ):
        self.extract_dimensions = extract_dimensions
        self.secondary_label = secondary_label
        self.secondary_handle_suffix = secondary_handle_suffix
        self.report_service = report_service or DuplicateReportService()

    async def run(
        self,
        primary_products: list[ShopifyProduct],
        secondary_products: list[ShopifyProduct],
        detection_config: DuplicateDetectionConfig,
        resolution_config: DuplicateResolutionConfig,
    ) -> MigrationResult:
        """
        Run the duplicate pipeline.

        Args:
            primary_products: Converted archive rows
            secondary_products: Converted WooCommerce rows
            detection_config: Matching strategy and threshold
            resolution_config: Resolution strategy and manual handler

        Returns:
            MigrationResult with the matches, resolved sets and report

        Raises:
            ConfigurationError: If the resolution configuration is invalid
        """
        logger.info(
            "duplicate_pipeline_started",
            primary_count=len(primary_products),
            secondary_count=len(secondary_products),
            matching_strategy=detection_config.matching_strategy.value,
            resolution_strategy=resolution_config.strategy.value,
        )

        registry = HandleRegistry(
            p.handle for p in [*primary_products, *secondary_products]
        )
        assign_missing_handles(primary_products, registry, source_type="archive")
        assign_missing_handles(secondary_products, registry, source_type="woocommerce")

        detector = DuplicateDetectionService(
            config=detection_config,
            extract_dimensions=self.extract_dimensions,
        )
        matches = detector.detect_duplicates(primary_products, secondary_products)

        # Report before resolution renames the titles it describes
        report = self.report_service.build_report(
            matches,
            matching_strategy=detection_config.matching_strategy,
            resolution_strategy=resolution_config.strategy,
        )

        resolver = DuplicateResolutionService(
            secondary_label=self.secondary_label,
            secondary_handle_suffix=self.secondary_handle_suffix,
            handle_registry=registry,
        )
        primary_products, secondary_products = await resolver.resolve_duplicates(
            matches, primary_products, secondary_products, resolution_config
        )

        duplicate_handles = find_duplicate_handles([*primary_products, *secondary_products])
        if duplicate_handles:
            logger.warning(
                "duplicate_handles_remaining",
                count=len(duplicate_handles),
                handles=duplicate_handles[:10],
            )

        logger.info(
            "duplicate_pipeline_completed",
            duplicates=len(matches),
            primary_count=len(primary_products),
            secondary_count=len(secondary_products),
        )

        return MigrationResult(
            matches=matches,
            primary_products=primary_products,
            secondary_products=secondary_products,
            report=report,
            duplicate_handles=duplicate_handles,
        )
