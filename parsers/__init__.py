"""
Shopify CSV parsers module.
"""

from parsers.shopify_csv_parser import (
    read_shopify_csv,
    write_shopify_csv,
)

__all__ = [
    "read_shopify_csv",
    "write_shopify_csv",
]
