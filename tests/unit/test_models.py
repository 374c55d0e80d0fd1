"""
Tests for product and duplicate schemas.
"""

import pytest
from pydantic import ValidationError

from models.duplicate import DuplicateMatch, ManualChoice, MatchingStrategy
from models.product import ShopifyProduct


class TestShopifyProductCreate:

    def test_defaults_applied(self):
        product = ShopifyProduct.create(title="Red Vase", handle="red-vase")

        assert product.status == "active"
        assert product.published == "TRUE"
        assert product.product_category == "Art & Collectibles > Artwork"
        assert product.to_record()["Variant Inventory Policy"] == "deny"

    def test_explicit_values_beat_defaults(self):
        product = ShopifyProduct.create(title="Red Vase", status="draft")
        assert product.status == "draft"

    def test_accepts_headers(self):
        product = ShopifyProduct.create(**{"Title": "Red Vase", "Variant SKU": "A1"})

        assert product.title == "Red Vase"
        assert product.sku == "A1"

    def test_from_record_none_becomes_empty(self):
        product = ShopifyProduct.from_record({"Handle": "red-vase", "Title": None, "Variant Price": 12})

        assert product.title == ""
        assert product.price == "12"


class TestShopifyProductRows:

    def test_image_row_only_carries_image_fields(self):
        product = ShopifyProduct.create(title="Red Vase", handle="red-vase", sku="A1")

        image = product.create_image_row("https://cdn.example.com/a.webp", 2)

        assert image.handle == "red-vase"
        assert image.image_position == "2"
        assert image.image_alt_text == "Red Vase"
        assert image.sku == ""
        assert image.status == ""
        assert image.is_image_row
        assert product.is_main_row

    def test_rename_updates_derived_fields(self):
        product = ShopifyProduct.create(title="Red Vase", seo_title="Red Vase")

        product.rename("Red Vase (WooCommerce)")

        assert product.title == "Red Vase (WooCommerce)"
        assert product.seo_title == "Red Vase (WooCommerce)"
        assert product.image_alt_text == "Red Vase (WooCommerce)"

    def test_record_has_every_header_in_order(self):
        record = ShopifyProduct.create(title="Red Vase").to_record()

        assert list(record)[:len(ShopifyProduct.HEADERS)] == list(ShopifyProduct.HEADERS)
        assert len(ShopifyProduct.HEADERS) == 48


class TestStrategyEnums:

    @pytest.mark.parametrize("name", ["exact-title", "exactTitle", "exact_title", "EXACT TITLE"])
    def test_matching_strategy_spellings(self, name):
        assert MatchingStrategy(name) == MatchingStrategy.EXACT_TITLE

    def test_unknown_matching_strategy(self):
        with pytest.raises(ValueError):
            MatchingStrategy("phonetic")

    @pytest.mark.parametrize("answer,expected", [
        ("primary", ManualChoice.PRIMARY),
        ("artwork", ManualChoice.PRIMARY),
        ("WooCommerce", ManualChoice.SECONDARY),
        ("Both", ManualChoice.BOTH),
    ])
    def test_manual_choice_spellings(self, answer, expected):
        assert ManualChoice(answer) == expected


class TestDuplicateMatch:

    def test_is_immutable(self):
        match = DuplicateMatch(title="Red Vase", primary_sku="A1", secondary_sku="B1", match_type="title")

        with pytest.raises(ValidationError):
            match.title = "Blue Vase"

    def test_defaults(self):
        match = DuplicateMatch(title="Red Vase", primary_sku="A1", secondary_sku="B1", match_type="title")

        assert match.primary_artist == "N/A"
        assert match.similarity == 1.0
        assert match.dimensions.primary == ""
