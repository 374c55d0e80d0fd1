"""
Duplicate resolution service.

Applies a resolution strategy to the matches found by detection:
rename the WooCommerce copy, drop one side, or ask for each pair.
Both product lists are updated in place and also returned.
"""

import inspect
from typing import Optional, Sequence
import structlog

from config import settings
from exceptions import (
    InvalidManualChoiceError,
    ManualChoiceHandlerMissingError,
    UnknownResolutionStrategyError,
)
from models.duplicate import (
    DuplicateMatch,
    DuplicateResolutionConfig,
    ManualChoice,
    ResolutionStrategy,
)
from models.product import ShopifyProduct
from services.handle_registry import HandleRegistry
from utils.text_utils import slugify_title

logger = structlog.get_logger(__name__)


class DuplicateResolutionService:
    """
    Duplicate resolution.

    Stateless between calls: every resolve_duplicates() call is a
    one-shot batch over the lists it is given.
    """

    def __init__(
        self,
        secondary_label: Optional[str] = None,
        secondary_handle_suffix: Optional[str] = None,
        handle_registry: Optional[HandleRegistry] = None,
    ):
        self.secondary_label = secondary_label or settings.secondary_label
        self.secondary_handle_suffix = secondary_handle_suffix or settings.secondary_handle_suffix
        self.handle_registry = handle_registry

    async def resolve_duplicates(
        self,
        duplicates: Sequence[DuplicateMatch],
        primary_products: list[ShopifyProduct],
        secondary_products: list[ShopifyProduct],
        config: DuplicateResolutionConfig,
    ) -> tuple[list[ShopifyProduct], list[ShopifyProduct]]:
        """
        Resolve duplicates between the archive and WooCommerce sets.

        Args:
            duplicates: Matches from DuplicateDetectionService
            primary_products: Archive rows, updated in place
            secondary_products: WooCommerce rows, updated in place
            config: Strategy, plus the manual choice handler for ask-manual

        Returns:
            Tuple of (primary products, secondary products)

        Raises:
            UnknownResolutionStrategyError: Strategy not recognized
            ManualChoiceHandlerMissingError: ask-manual without a handler
            InvalidManualChoiceError: Handler answered something unknown
        """
        strategy = self._validate_config(config)

        if not duplicates:
            return primary_products, secondary_products

        logger.warning(
            "duplicates_found",
            count=len(duplicates),
            strategy=strategy.value,
        )
        self._log_duplicates(duplicates)

        if strategy == ResolutionStrategy.KEEP_BOTH:
            self._keep_both_versions(duplicates, secondary_products)

        elif strategy == ResolutionStrategy.PREFER_PRIMARY:
            removed = self._remove_by_sku(
                secondary_products, {d.secondary_sku for d in duplicates}
            )
            logger.info("secondary_duplicates_removed", removed=removed)

        elif strategy == ResolutionStrategy.PREFER_SECONDARY:
            removed = self._remove_by_sku(
                primary_products, {d.primary_sku for d in duplicates}
            )
            logger.info("primary_duplicates_removed", removed=removed)

        else:
            await self._ask_for_each_duplicate(
                duplicates,
                primary_products,
                secondary_products,
                config.on_manual_choice,
            )

        return primary_products, secondary_products

    # ===================
    # CONFIGURATION
    # ===================

    @staticmethod
    def _validate_config(config: DuplicateResolutionConfig) -> ResolutionStrategy:
        try:
            strategy = ResolutionStrategy(config.strategy)
        except ValueError:
            raise UnknownResolutionStrategyError(
                config.strategy, valid=[s.value for s in ResolutionStrategy]
            )

        if strategy == ResolutionStrategy.ASK_MANUAL and config.on_manual_choice is None:
            raise ManualChoiceHandlerMissingError(strategy.value)

        return strategy

    @staticmethod
    def _log_duplicates(duplicates: Sequence[DuplicateMatch]) -> None:
        for position, dupe in enumerate(duplicates, start=1):
            logger.info(
                "duplicate_pair",
                position=position,
                title=dupe.title,
                primary_sku=dupe.primary_sku,
                primary_price=dupe.primary_price,
                primary_artist=dupe.primary_artist,
                primary_status=dupe.primary_status,
                secondary_sku=dupe.secondary_sku,
                secondary_price=dupe.secondary_price,
                secondary_artist=dupe.secondary_artist,
                secondary_status=dupe.secondary_status,
                match_type=dupe.match_type,
            )

    # ===================
    # STRATEGIES
    # ===================

    def _keep_both_versions(
        self,
        duplicates: Sequence[DuplicateMatch],
        secondary_products: list[ShopifyProduct],
    ) -> None:
        """Rename every matched WooCommerce product so both versions survive."""
        logger.info(
            "keeping_both_versions",
            title_suffix=self.secondary_label,
            handle_suffix=self.secondary_handle_suffix,
        )
        self._rename_secondary(
            secondary_products, {d.secondary_sku for d in duplicates}
        )

    async def _ask_for_each_duplicate(
        self,
        duplicates: Sequence[DuplicateMatch],
        primary_products: list[ShopifyProduct],
        secondary_products: list[ShopifyProduct],
        on_manual_choice,
    ) -> None:
        """
        Ask the handler about each pair, then apply every decision at once.

        The handler is awaited one pair at a time and never sees lists
        changed by an earlier answer in the same batch.
        """
        logger.info("asking_for_each_duplicate", count=len(duplicates))

        remove_from_secondary: set[str] = set()
        remove_from_primary: set[str] = set()
        rename_secondary: set[str] = set()

        for dupe in duplicates:
            answer = on_manual_choice(dupe)
            if inspect.isawaitable(answer):
                answer = await answer

            try:
                choice = ManualChoice(answer)
            except ValueError:
                raise InvalidManualChoiceError(answer, dupe.secondary_sku)

            logger.debug(
                "manual_choice_received",
                secondary_sku=dupe.secondary_sku,
                primary_sku=dupe.primary_sku,
                choice=choice.value,
            )

            if choice == ManualChoice.PRIMARY:
                remove_from_secondary.add(dupe.secondary_sku)
            elif choice == ManualChoice.SECONDARY:
                remove_from_primary.add(dupe.primary_sku)
            else:
                rename_secondary.add(dupe.secondary_sku)

        if remove_from_secondary:
            removed = self._remove_by_sku(secondary_products, remove_from_secondary)
            logger.info("secondary_duplicates_removed", removed=removed, chosen=len(remove_from_secondary))

        if remove_from_primary:
            removed = self._remove_by_sku(primary_products, remove_from_primary)
            logger.info("primary_duplicates_removed", removed=removed, chosen=len(remove_from_primary))

        if rename_secondary:
            self._rename_secondary(secondary_products, rename_secondary)

    # ===================
    # MUTATIONS
    # ===================

    @staticmethod
    def _remove_by_sku(products: list[ShopifyProduct], skus: set[str]) -> int:
        """
        Drop rows whose SKU is in skus.

        Rows without a SKU (image rows) are always kept.

        Returns:
            Number of rows removed
        """
        before = len(products)
        products[:] = [p for p in products if not p.sku or p.sku not in skus]
        return before - len(products)

    def _rename_secondary(self, products: list[ShopifyProduct], skus: set[str]) -> int:
        """
        Suffix title and handle of matched WooCommerce main rows.

        SKUs no longer present in the list are skipped.

        Returns:
            Number of rows renamed
        """
        renamed = 0

        for product in products:
            if not product.title or product.sku not in skus:
                continue

            old_title = product.title
            old_handle = product.handle

            new_handle = f"{old_handle}-{self.secondary_handle_suffix}"
            if self.handle_registry is not None:
                new_handle = self.handle_registry.reserve(new_handle)

            product.rename(f"{old_title} ({self.secondary_label})")
            product.handle = new_handle

            moved = self._update_related_image_rows(products, old_title, old_handle, new_handle)
            renamed += 1

            logger.info(
                "duplicate_renamed",
                old_title=old_title,
                new_title=product.title,
                old_handle=old_handle,
                new_handle=new_handle,
                image_rows=moved,
            )

        return renamed

    @staticmethod
    def _update_related_image_rows(
        products: list[ShopifyProduct],
        old_title: str,
        old_handle: str,
        new_handle: str,
    ) -> int:
        """
        Point the renamed product's image rows at its new handle.

        Image rows were keyed by the slug of the title when converted, so
        that slug is matched as well as the old handle. A handle still owned
        by another main row is left alone.
        """
        owned = {p.handle for p in products if p.title}
        old_handles = {
            h for h in (old_handle, slugify_title(old_title))
            if h and h not in owned
        }

        moved = 0
        for product in products:
            if product.title == "" and product.handle in old_handles:
                product.handle = new_handle
                moved += 1
        return moved


# Singleton instance for convenience
_duplicate_resolution_service: Optional[DuplicateResolutionService] = None

def get_duplicate_resolution_service() -> DuplicateResolutionService:
    """Get or create DuplicateResolutionService configured from settings."""
    global _duplicate_resolution_service
    if _duplicate_resolution_service is None:
        _duplicate_resolution_service = DuplicateResolutionService()
    return _duplicate_resolution_service
