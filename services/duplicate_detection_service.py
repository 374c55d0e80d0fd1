"""
Duplicate detection service.

Finds archive (primary) and WooCommerce (secondary) rows that describe the
same artwork. Archive rows are indexed by comparison key; each WooCommerce
row is looked up in the index instead of being compared against every archive row.
"""

from collections import defaultdict
from math import floor
from typing import Callable, Optional, Sequence
import structlog

from config import settings
from models.duplicate import (
    DuplicateDetectionConfig,
    DuplicateDimensions,
    DuplicateMatch,
    MatchingStrategy,
)
from models.product import ShopifyProduct
from utils.comparison_keys import generate_comparison_keys
from utils.html_utils import extract_dimensions as default_extract_dimensions
from utils.text_utils import normalize_artist, normalize_title, similarity

logger = structlog.get_logger(__name__)

KeyGenerator = Callable[[str, str, str, MatchingStrategy], list[str]]

TITLE_ARTIST = "title+artist"
TITLE_ONLY = "title only"
TITLE = "title"


class DuplicateDetectionService:
    """
    Duplicate detection between two product sets.

    Dimension extraction and key generation are injected so callers can
    swap in their own markup parser or bucketing.
    """

    def __init__(
        self,
        config: Optional[DuplicateDetectionConfig] = None,
        extract_dimensions: Callable[[str], str] = default_extract_dimensions,
        key_generator: KeyGenerator = generate_comparison_keys,
    ):
        self.config = config or DuplicateDetectionConfig(
            matching_strategy=settings.matching_strategy,
            similarity_threshold=settings.similarity_threshold,
        )
        self.extract_dimensions = extract_dimensions
        self.key_generator = key_generator

    @property
    def strategy(self) -> MatchingStrategy:
        return self.config.matching_strategy

    # ===================
    # DETECTION
    # ===================

    def detect_duplicates(
        self,
        primary_products: Sequence[ShopifyProduct],
        secondary_products: Sequence[ShopifyProduct],
    ) -> list[DuplicateMatch]:
        """
        Detect duplicates between the archive and WooCommerce sets.

        Args:
            primary_products: Archive rows (main and image rows)
            secondary_products: WooCommerce rows (main and image rows)

        Returns:
            Matches in the order WooCommerce rows were scanned. At most one
            match per WooCommerce row, except that fuzzy matching first
            collects every candidate above the threshold and then keeps the
            best one per WooCommerce SKU.
        """
        logger.info(
            "duplicate_detection_started",
            strategy=self.strategy.value,
            primary_count=len(primary_products),
            secondary_count=len(secondary_products),
        )

        index = self._build_candidate_index(primary_products)
        main_secondary = [p for p in secondary_products if p.title]

        matches: list[DuplicateMatch] = []
        for product in main_secondary:
            matches.extend(self._find_matches(product, index))

        matches = self._remove_duplicate_matches(matches)

        logger.info(
            "duplicate_detection_completed",
            strategy=self.strategy.value,
            indexed_keys=len(index),
            scanned=len(main_secondary),
            duplicates=len(matches),
        )
        return matches

    def _keys_for(self, product: ShopifyProduct) -> list[str]:
        return self.key_generator(
            product.title,
            product.vendor,
            self.extract_dimensions(product.body_html),
            self.strategy,
        )

    def _build_candidate_index(
        self,
        products: Sequence[ShopifyProduct],
    ) -> dict[str, list[ShopifyProduct]]:
        """
        Bucket archive main rows by comparison key.

        Main rows carry a status; image rows have neither status nor title.
        A row is appended under every key it produces.
        """
        index: dict[str, list[ShopifyProduct]] = defaultdict(list)

        for product in products:
            if not product.status or not product.title:
                continue
            for key in self._keys_for(product):
                index[key].append(product)

        return dict(index)

    def _find_matches(
        self,
        product: ShopifyProduct,
        index: dict[str, list[ShopifyProduct]],
    ) -> list[DuplicateMatch]:
        """Probe the index with one WooCommerce row."""
        if not product.title:
            return []

        matches: list[DuplicateMatch] = []
        fallback: Optional[DuplicateMatch] = None
        seen: set[int] = set()

        for key in self._keys_for(product):
            for candidate in index.get(key, ()):
                if id(candidate) in seen:
                    continue
                seen.add(id(candidate))

                match = self._create_match(product, candidate)
                if match is None:
                    continue

                if self.strategy == MatchingStrategy.FUZZY:
                    matches.append(match)
                elif self.strategy == MatchingStrategy.ADVANCED and match.match_type == TITLE_ONLY:
                    # Keep looking for a title+artist candidate first
                    if fallback is None:
                        fallback = match
                else:
                    return [match]

        if fallback is not None:
            return [fallback]
        return matches

    def _create_match(
        self,
        product: ShopifyProduct,
        candidate: ShopifyProduct,
    ) -> Optional[DuplicateMatch]:
        """
        Score a WooCommerce row against one archive candidate.

        Returns None when the pair does not qualify (below the fuzzy
        threshold, or no normalized title agreement for advanced).
        """
        match_type = TITLE
        score = 1.0

        if self.strategy == MatchingStrategy.FUZZY:
            score = similarity(product.title, candidate.title)
            if score < self.config.similarity_threshold:
                return None
            match_type = f"fuzzy ({floor(score * 100 + 0.5)}%)"

        elif self.strategy == MatchingStrategy.ADVANCED:
            title_match = normalize_title(product.title) == normalize_title(candidate.title)
            artist_match = normalize_artist(product.vendor) == normalize_artist(candidate.vendor)

            if not title_match:
                return None
            match_type = TITLE_ARTIST if artist_match else TITLE_ONLY

        logger.debug(
            "duplicate_candidate_accepted",
            secondary_sku=product.sku,
            primary_sku=candidate.sku,
            match_type=match_type,
        )

        return DuplicateMatch(
            title=product.title,
            primary_sku=candidate.sku,
            secondary_sku=product.sku,
            primary_price=candidate.price,
            secondary_price=product.price,
            primary_status=candidate.status,
            secondary_status=product.status,
            primary_artist=candidate.vendor or "N/A",
            secondary_artist=product.vendor or "N/A",
            dimensions=DuplicateDimensions(
                primary=self.extract_dimensions(candidate.body_html),
                secondary=self.extract_dimensions(product.body_html),
            ),
            match_type=match_type,
            similarity=score,
        )

    def _remove_duplicate_matches(self, matches: list[DuplicateMatch]) -> list[DuplicateMatch]:
        """
        Keep the best fuzzy match per WooCommerce SKU.

        Ties go to the first match seen. Other strategies already emit at
        most one match per row.
        """
        if self.strategy != MatchingStrategy.FUZZY:
            return matches

        by_sku: dict[str, list[DuplicateMatch]] = {}
        for match in matches:
            by_sku.setdefault(match.secondary_sku, []).append(match)

        return [
            max(group, key=lambda m: m.similarity)
            for group in by_sku.values()
        ]


# Singleton instance for convenience
_duplicate_detection_service: Optional[DuplicateDetectionService] = None

def get_duplicate_detection_service() -> DuplicateDetectionService:
    """Get or create DuplicateDetectionService configured from settings."""
    global _duplicate_detection_service
    if _duplicate_detection_service is None:
        _duplicate_detection_service = DuplicateDetectionService()
    return _duplicate_detection_service
