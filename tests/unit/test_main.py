"""
Tests for the command-line entry point.
"""

import pytest
from openpyxl import load_workbook

from main import main
from parsers import read_shopify_csv, write_shopify_csv
from tests.factories import ShopifyProductFactory


@pytest.fixture
def csv_files(tmp_path):
    """Archive and WooCommerce CSVs sharing one "Red Vase"."""
    archive = ShopifyProductFactory.create(title="Red Vase", sku="A1", handle="red-vase")
    woo = ShopifyProductFactory.create(title="Red Vase", sku="B1", handle="red-vase")
    other = ShopifyProductFactory.create(title="Retrato Azul", sku="B2", handle="retrato-azul")

    primary = tmp_path / "archive.csv"
    secondary = tmp_path / "woo.csv"
    write_shopify_csv([archive], primary)
    write_shopify_csv([woo, ShopifyProductFactory.create_image_row(woo), other], secondary)
    return primary, secondary, tmp_path / "out" / "shopify_products.csv"


class TestMain:

    def test_keep_both_writes_merged_csv(self, csv_files, tmp_path):
        # Arrange
        primary, secondary, output = csv_files
        report = tmp_path / "out" / "duplicates.xlsx"

        # Act
        code = main([
            "--primary", str(primary),
            "--secondary", str(secondary),
            "--output", str(output),
            "--report", str(report),
            "--matching-strategy", "normalized-title",
            "--resolution", "keep-both",
        ])

        # Assert
        assert code == 0
        rows = read_shopify_csv(output)
        assert [p.title for p in rows if p.title] == ["Red Vase", "Red Vase (WooCommerce)", "Retrato Azul"]
        assert [p.handle for p in rows] == ["red-vase", "red-vase-woo", "red-vase-woo", "retrato-azul"]
        assert load_workbook(report)["Duplicates"]["F2"].value == "B1"

    def test_prefer_primary_drops_duplicate(self, csv_files):
        primary, secondary, output = csv_files

        code = main([
            "--primary", str(primary),
            "--secondary", str(secondary),
            "--output", str(output),
            "--resolution", "preferArtwork",
        ])

        assert code == 0
        assert [p.sku for p in read_shopify_csv(output) if p.title] == ["A1", "B2"]

    def test_ask_manual_reads_console(self, csv_files, monkeypatch):
        primary, secondary, output = csv_files
        answers = iter(["x", "2"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

        code = main([
            "--primary", str(primary),
            "--secondary", str(secondary),
            "--output", str(output),
            "--resolution", "ask-manual",
        ])

        assert code == 0
        assert [p.sku for p in read_shopify_csv(output) if p.title] == ["B1", "B2"]

    def test_unknown_resolution_exits_2(self, csv_files):
        primary, secondary, output = csv_files

        code = main([
            "--primary", str(primary),
            "--secondary", str(secondary),
            "--output", str(output),
            "--resolution", "merge",
        ])

        assert code == 2
        assert not output.exists()

    def test_unknown_matching_strategy_exits_2(self, csv_files):
        primary, secondary, output = csv_files

        code = main([
            "--primary", str(primary),
            "--secondary", str(secondary),
            "--output", str(output),
            "--matching-strategy", "phonetic",
        ])

        assert code == 2

    def test_unreadable_input_exits_1(self, csv_files, tmp_path):
        _, secondary, output = csv_files

        code = main([
            "--primary", str(tmp_path / "missing.csv"),
            "--secondary", str(secondary),
            "--output", str(output),
        ])

        assert code == 1

    def test_remaining_handle_collision_exits_1(self, tmp_path):
        primary = tmp_path / "archive.csv"
        secondary = tmp_path / "woo.csv"
        output = tmp_path / "out.csv"
        write_shopify_csv([ShopifyProductFactory.create(title="Red Vase", sku="A1", handle="vase")], primary)
        write_shopify_csv([ShopifyProductFactory.create(title="Blue Bowl", sku="B1", handle="vase")], secondary)

        code = main([
            "--primary", str(primary),
            "--secondary", str(secondary),
            "--output", str(output),
        ])

        assert code == 1
        assert output.exists()
