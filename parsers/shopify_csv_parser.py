"""
Shopify product CSV reader and writer.

Reads a Shopify product import CSV into ShopifyProduct rows and writes rows
back in Shopify's column order.
"""

from io import StringIO
from pathlib import Path
from typing import Iterable, Union
import structlog

import pandas as pd

from exceptions import ShopifyCSVParseError, ShopifyCSVMissingColumnsError
from models.product import ShopifyProduct

logger = structlog.get_logger(__name__)

REQUIRED_COLUMNS = ["Handle", "Title", "Variant SKU"]

CSVSource = Union[str, Path, StringIO]


def read_shopify_csv(source: CSVSource) -> list[ShopifyProduct]:
    """
    Parse a Shopify product CSV.

    Every cell is read as text; empty cells become "".

    Args:
        source: File path or text buffer

    Returns:
        Rows in file order (main rows and image rows)

    Raises:
        ShopifyCSVParseError: If the file cannot be read
        ShopifyCSVMissingColumnsError: If Handle, Title or Variant SKU is missing
    """
    logger.info("parsing_shopify_csv", source=str(source) if not isinstance(source, StringIO) else "buffer")

    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False)
    except Exception as e:
        logger.error("shopify_csv_read_failed", error=str(e))
        raise ShopifyCSVParseError(
            message="Failed to read Shopify CSV file",
            details={"original_error": str(e)}
        )

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        logger.error("shopify_csv_missing_columns", missing=missing)
        raise ShopifyCSVMissingColumnsError(missing)

    products = [ShopifyProduct.from_record(record) for record in df.to_dict(orient="records")]

    logger.info(
        "shopify_csv_parsed",
        rows=len(products),
        main_rows=sum(1 for p in products if p.is_main_row),
    )
    return products


def write_shopify_csv(products: Iterable[ShopifyProduct], destination: CSVSource) -> int:
    """
    Write rows as a Shopify product CSV.

    Shopify headers come first in import order, then any extra columns in
    the order they were first seen.

    Returns:
        Number of rows written
    """
    records = [p.to_record() for p in products]

    columns = ShopifyProduct.get_headers()
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)

    df = pd.DataFrame(records, columns=columns).fillna("")
    df.to_csv(destination, index=False)

    logger.info("shopify_csv_written", rows=len(records), columns=len(columns))
    return len(records)
