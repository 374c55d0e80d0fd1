"""
Duplicate report schemas.

The report is what a human reviews after a migration run: one row per
duplicate pair plus summary counts.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from models.base import BaseSchema


class DuplicateReportRow(BaseModel):
    """
    One reviewed duplicate pair.

    Values are copied verbatim from the DuplicateMatch; no whitespace trimming.
    """

    title: str
    normalized_title: str
    primary_sku: str
    secondary_sku: str
    primary_artist: str
    secondary_artist: str
    primary_price: str
    secondary_price: str
    price_difference: Decimal = Field(..., ge=0, description="Absolute price gap")
    percent_price_difference: Decimal = Field(
        ...,
        ge=0,
        description="Gap relative to the larger price, in percent"
    )
    primary_status: str
    secondary_status: str
    primary_dimensions: str
    secondary_dimensions: str
    match_type: str
    similarity: float = Field(..., ge=0, le=1)
    same_artist: bool
    same_dimensions: bool
    resolution: str

    @property
    def is_generic_title(self) -> bool:
        return self.normalized_title == "untitled"


class GenericTitleStats(BaseSchema):
    """How many duplicates are only "untitled" pieces."""

    count: int = 0
    percentage: float = Field(0.0, ge=0, le=100)


class DuplicateReportSummary(BaseSchema):
    """Headline numbers for a duplicate report."""

    total_duplicates: int = 0
    generic_titles: int = 0
    artist_mismatches: int = 0
    large_price_differences: int = 0
    matching_strategy: str = ""
    resolution_strategy: str = ""
    match_types: dict[str, int] = Field(default_factory=dict)


class DuplicateReport(BaseSchema):
    """Full report: summary, generic-title stats and one row per pair."""

    summary: DuplicateReportSummary
    generic_title_stats: GenericTitleStats
    duplicates: list[DuplicateReportRow] = Field(default_factory=list)
