"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest

from models.duplicate import DuplicateDetectionConfig
from models.product import ShopifyProduct
from services.duplicate_detection_service import DuplicateDetectionService
from services.duplicate_resolution_service import DuplicateResolutionService
from tests.factories import ShopifyProductFactory


# ===================
# SERVICES
# ===================

@pytest.fixture
def make_detector():
    """
    Build a DuplicateDetectionService for a strategy.

    Usage:
        def test_something(make_detector):
            detector = make_detector("fuzzy", similarity_threshold=0.9)
    """
    def _make(strategy: str = "normalized-title", **config) -> DuplicateDetectionService:
        return DuplicateDetectionService(
            config=DuplicateDetectionConfig(matching_strategy=strategy, **config)
        )
    return _make


@pytest.fixture
def resolver() -> DuplicateResolutionService:
    """Resolution service with the default WooCommerce suffixes."""
    return DuplicateResolutionService(
        secondary_label="WooCommerce",
        secondary_handle_suffix="woo",
    )


# ===================
# SAMPLE DATA
# ===================

@pytest.fixture(autouse=True)
def reset_factories():
    """Keep generated SKUs stable per test."""
    ShopifyProductFactory.reset_counter()
    yield


@pytest.fixture
def archive_products() -> list[ShopifyProduct]:
    """Archive export rows: three artworks and one image row."""
    luna = ShopifyProductFactory.create(
        title="Luna Sobre el Mar",
        sku="ART-100",
        vendor="Dra. Carmen Ruiz",
        price="950.00",
        body_html="<p>Óleo</p><strong>Dimensions:</strong> 60h x 80w x 3d",
    )
    return [
        luna,
        ShopifyProductFactory.create_image_row(luna),
        ShopifyProductFactory.create(
            title="Sin Título",
            sku="ART-101",
            vendor="Jorge Mena",
            price="400.00",
        ),
        ShopifyProductFactory.create(
            title="Paisaje Andino",
            sku="ART-102",
            vendor="Ana Pérez",
            price="1500.00",
        ),
    ]


@pytest.fixture
def woo_products() -> list[ShopifyProduct]:
    """WooCommerce rows: two duplicates of the archive, one new piece."""
    luna = ShopifyProductFactory.create(
        title="Luna sobre el mar",
        sku="WOO-200",
        vendor="Carmen Ruiz",
        price="1100.00",
        handle="luna-sobre-el-mar",
        body_html="<strong>Dimensions:</strong> 60h x 80w x 3d",
    )
    return [
        luna,
        ShopifyProductFactory.create_image_row(luna),
        ShopifyProductFactory.create(
            title="S/T",
            sku="WOO-201",
            vendor="Jorge Mena",
            price="400.00",
            handle="st",
        ),
        ShopifyProductFactory.create(
            title="Retrato Azul",
            sku="WOO-202",
            vendor="Luis Toro",
            price="700.00",
        ),
    ]

