"""
Tests for the Shopify CSV parser.
"""

from io import StringIO

import pytest

from exceptions import ShopifyCSVMissingColumnsError, ShopifyCSVParseError
from models.product import ShopifyProduct
from parsers.shopify_csv_parser import read_shopify_csv, write_shopify_csv
from tests.factories import ShopifyProductFactory


SAMPLE_CSV = (
    "Handle,Title,Vendor,Variant SKU,Variant Price,Status,Artist Notes\n"
    "red-vase,Red Vase,Ana Pérez,A1,1200.00,active,signed\n"
    "red-vase,,,,,,\n"
    "sin-titulo,Sin Título,Jorge Mena,A2,NA,draft,\n"
)


class TestReadShopifyCSV:

    def test_reads_main_and_image_rows(self):
        products = read_shopify_csv(StringIO(SAMPLE_CSV))

        assert len(products) == 3
        assert products[0].title == "Red Vase"
        assert products[0].sku == "A1"
        assert products[1].is_image_row
        assert products[1].handle == "red-vase"

    def test_cells_read_as_text(self):
        products = read_shopify_csv(StringIO(SAMPLE_CSV))

        # "NA" must not become NaN
        assert products[2].price == "NA"
        assert products[0].price == "1200.00"

    def test_keeps_extra_columns(self):
        products = read_shopify_csv(StringIO(SAMPLE_CSV))
        assert products[0].to_record()["Artist Notes"] == "signed"

    def test_missing_required_columns(self):
        csv = "Handle,Vendor\nred-vase,Ana\n"

        with pytest.raises(ShopifyCSVMissingColumnsError) as exc_info:
            read_shopify_csv(StringIO(csv))

        assert exc_info.value.details["missing"] == ["Title", "Variant SKU"]

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(ShopifyCSVParseError) as exc_info:
            read_shopify_csv(tmp_path / "missing.csv")

        assert exc_info.value.code == "SHOPIFY_CSV_PARSE_ERROR"


class TestWriteShopifyCSV:

    def test_header_order(self):
        buffer = StringIO()
        write_shopify_csv([ShopifyProductFactory.create(title="Red Vase")], buffer)

        header = buffer.getvalue().splitlines()[0].split(",")
        assert header[:3] == ["Handle", "Title", "Body (HTML)"]
        assert header[-1] == "Status"

    def test_returns_row_count(self):
        product = ShopifyProductFactory.create(title="Red Vase")
        rows = [product, ShopifyProductFactory.create_image_row(product)]

        assert write_shopify_csv(rows, StringIO()) == 2

    def test_written_file_reads_back(self):
        # Arrange
        buffer = StringIO()
        products = read_shopify_csv(StringIO(SAMPLE_CSV))

        # Act
        write_shopify_csv(products, buffer)
        buffer.seek(0)
        reread = read_shopify_csv(buffer)

        # Assert
        assert [p.sku for p in reread] == ["A1", "", "A2"]
        assert reread[0].to_record()["Artist Notes"] == "signed"
        assert list(reread[0].to_record())[-1] == "Artist Notes"

    def test_extra_columns_follow_shopify_headers(self):
        product = ShopifyProduct.create(title="Red Vase", handle="red-vase", **{"Artist Notes": "signed"})
        buffer = StringIO()

        write_shopify_csv([product], buffer)

        header = buffer.getvalue().splitlines()[0].split(",")
        assert header[-1] == "Artist Notes"
        assert len(header) == len(ShopifyProduct.HEADERS) + 1
