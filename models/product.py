"""
Shopify product row schema.

One ShopifyProduct is one row of a Shopify product import CSV: either the
main row of a product, or an image-only continuation row sharing the main
row's handle.
"""

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field


class ShopifyProduct(BaseModel):
    """
    Mutable Shopify CSV row.

    Attributes use snake_case; CSV headers are the aliases. Columns that are
    not modelled explicitly are kept as extra fields and written back out.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="allow",
    )

    # Shopify import column order
    HEADERS: ClassVar[tuple[str, ...]] = (
        "Handle", "Title", "Body (HTML)", "Vendor", "Product Category", "Type", "Tags",
        "Published", "Option1 Name", "Option1 Value", "Option2 Name", "Option2 Value",
        "Option3 Name", "Option3 Value", "Variant SKU", "Variant Grams",
        "Variant Inventory Tracker", "Variant Inventory Qty", "Variant Inventory Policy",
        "Variant Fulfillment Service", "Variant Price", "Variant Compare At Price",
        "Variant Requires Shipping", "Variant Taxable", "Variant Barcode", "Image Src",
        "Image Position", "Image Alt Text", "Gift Card", "SEO Title", "SEO Description",
        "Google Shopping / Google Product Category", "Google Shopping / Gender",
        "Google Shopping / Age Group", "Google Shopping / MPN", "Google Shopping / Condition",
        "Google Shopping / Custom Product", "Variant Image", "Variant Weight Unit",
        "Variant Tax Code", "Cost per item", "Included / United States",
        "Price / United States", "Compare At Price / United States",
        "Included / International", "Price / International",
        "Compare At Price / International", "Status",
    )

    # Values a freshly converted artwork starts with
    DEFAULTS: ClassVar[dict[str, str]] = {
        "Product Category": "Art & Collectibles > Artwork",
        "Option1 Name": "Type",
        "Option1 Value": "Original",
        "Variant Grams": "1000",
        "Variant Inventory Tracker": "shopify",
        "Variant Inventory Policy": "deny",
        "Variant Fulfillment Service": "manual",
        "Variant Requires Shipping": "TRUE",
        "Variant Taxable": "TRUE",
        "Gift Card": "FALSE",
        "Image Position": "1",
        "Published": "TRUE",
        "Status": "active",
    }

    handle: str = Field("", alias="Handle")
    title: str = Field("", alias="Title")
    body_html: str = Field("", alias="Body (HTML)")
    vendor: str = Field("", alias="Vendor")
    product_category: str = Field("", alias="Product Category")
    product_type: str = Field("", alias="Type")
    tags: str = Field("", alias="Tags")
    published: str = Field("", alias="Published")
    sku: str = Field("", alias="Variant SKU")
    price: str = Field("", alias="Variant Price")
    compare_at_price: str = Field("", alias="Variant Compare At Price")
    inventory_qty: str = Field("", alias="Variant Inventory Qty")
    image_src: str = Field("", alias="Image Src")
    image_position: str = Field("", alias="Image Position")
    image_alt_text: str = Field("", alias="Image Alt Text")
    seo_title: str = Field("", alias="SEO Title")
    seo_description: str = Field("", alias="SEO Description")
    status: str = Field("", alias="Status")

    # ===================
    # CONSTRUCTION
    # ===================

    @classmethod
    def create(cls, **fields: Any) -> "ShopifyProduct":
        """
        Create a main row with Shopify defaults applied.

        Accepts attribute names or CSV headers.
        """
        # Key everything by header so an explicit status="draft" beats the default "Status"
        by_header = {
            (cls.model_fields[key].alias if key in cls.model_fields else key): value
            for key, value in fields.items()
        }
        return cls.model_validate({**cls.DEFAULTS, **by_header})

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ShopifyProduct":
        """Build a row from a CSV record keyed by Shopify headers."""
        cleaned = {
            str(key): "" if value is None else str(value)
            for key, value in record.items()
        }
        return cls.model_validate(cleaned)

    def create_image_row(
        self,
        image_url: str,
        position: int,
        alt_text: Optional[str] = None
    ) -> "ShopifyProduct":
        """
        Build an image-only continuation row for this product.

        Only handle and image columns are populated.
        """
        return ShopifyProduct(
            handle=self.handle,
            image_src=image_url,
            image_position=str(position),
            image_alt_text=alt_text or self.title,
        )

    # ===================
    # ACCESSORS
    # ===================

    @property
    def is_image_row(self) -> bool:
        """Image rows carry no title."""
        return self.title == ""

    @property
    def is_main_row(self) -> bool:
        return not self.is_image_row

    def rename(self, title: str) -> None:
        """Change the title and the fields derived from it."""
        self.title = title
        self.seo_title = title
        self.image_alt_text = title

    def to_record(self) -> dict[str, str]:
        """
        Convert to a CSV record.

        Shopify headers first, in import order, then any extra columns.
        """
        dumped = self.model_dump(by_alias=True)
        record = {header: dumped.get(header, "") or "" for header in self.HEADERS}
        for key, value in dumped.items():
            if key not in record:
                record[key] = "" if value is None else value
        return record

    @classmethod
    def get_headers(cls) -> list[str]:
        return list(cls.HEADERS)
