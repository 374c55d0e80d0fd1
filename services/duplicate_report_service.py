"""
Duplicate report service.

Turns detected matches into a reviewable report (price gaps, artist and
dimension agreement, generic titles) and exports it to Excel.
"""

import re
from collections import Counter
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from io import BytesIO
from typing import Optional, Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side, PatternFill
import structlog

from config import settings
from models.duplicate import DuplicateMatch, MatchingStrategy, ResolutionStrategy
from models.report import (
    DuplicateReport,
    DuplicateReportRow,
    DuplicateReportSummary,
    GenericTitleStats,
)
from utils.text_utils import UNTITLED, normalize_artist, normalize_dimensions, normalize_title

logger = structlog.get_logger(__name__)

RESOLUTION_LABELS = {
    ResolutionStrategy.KEEP_BOTH: "Keep both (WooCommerce renamed)",
    ResolutionStrategy.PREFER_PRIMARY: "Keep archive version",
    ResolutionStrategy.PREFER_SECONDARY: "Keep WooCommerce version",
    ResolutionStrategy.ASK_MANUAL: "Manual decision",
}

REPORT_COLUMNS = [
    ("#", 5),
    ("Title", 35),
    ("Archive Artist", 22),
    ("WooCommerce Artist", 22),
    ("Archive SKU", 16),
    ("WooCommerce SKU", 16),
    ("Archive Price", 14),
    ("WooCommerce Price", 14),
    ("Price Difference", 16),
    ("Price Difference %", 16),
    ("Archive Status", 14),
    ("WooCommerce Status", 14),
    ("Archive Dimensions", 20),
    ("WooCommerce Dimensions", 20),
    ("Match Type", 16),
    ("Similarity", 12),
    ("Same Artist", 12),
    ("Same Dimensions", 16),
    ("Resolution", 30),
]

TWO_PLACES = Decimal("0.01")
ONE_PLACE = Decimal("0.1")


def parse_price(value: Optional[str]) -> Decimal:
    """
    Parse a price string, ignoring currency symbols.

    "$1,200.50" → Decimal("1200.50"); unparseable → Decimal("0")
    """
    cleaned = re.sub(r"[^0-9.]", "", value or "")
    try:
        return Decimal(cleaned) if cleaned else Decimal("0")
    except InvalidOperation:
        return Decimal("0")


class DuplicateReportService:
    """Builds and exports duplicate review reports."""

    def __init__(self, large_price_difference: Optional[float] = None):
        threshold = settings.large_price_difference if large_price_difference is None else large_price_difference
        self.large_price_difference = Decimal(str(threshold))

    def build_report(
        self,
        duplicates: Sequence[DuplicateMatch],
        matching_strategy: Optional[Union[MatchingStrategy, str]] = None,
        resolution_strategy: Optional[Union[ResolutionStrategy, str]] = None,
    ) -> DuplicateReport:
        """
        Build the report for a set of matches.

        Args:
            duplicates: Matches from detection
            matching_strategy: Strategy used for detection (for the summary)
            resolution_strategy: Strategy applied (labels each row)

        Returns:
            DuplicateReport
        """
        resolution = ResolutionStrategy(resolution_strategy) if resolution_strategy else None
        matching = MatchingStrategy(matching_strategy) if matching_strategy else None

        rows = [self._build_row(dupe, resolution) for dupe in duplicates]

        generic = sum(1 for row in rows if row.is_generic_title)
        summary = DuplicateReportSummary(
            total_duplicates=len(rows),
            generic_titles=generic,
            artist_mismatches=sum(1 for row in rows if not row.same_artist),
            large_price_differences=sum(
                1 for row in rows if row.price_difference > self.large_price_difference
            ),
            matching_strategy=matching.value if matching else "",
            resolution_strategy=resolution.value if resolution else "",
            match_types=dict(Counter(row.match_type for row in rows)),
        )
        stats = GenericTitleStats(
            count=generic,
            percentage=round(generic / len(rows) * 100, 1) if rows else 0.0,
        )

        logger.info(
            "duplicate_report_built",
            total=summary.total_duplicates,
            generic_titles=summary.generic_titles,
            artist_mismatches=summary.artist_mismatches,
        )

        return DuplicateReport(summary=summary, generic_title_stats=stats, duplicates=rows)

    def _build_row(
        self,
        dupe: DuplicateMatch,
        resolution: Optional[ResolutionStrategy],
    ) -> DuplicateReportRow:
        primary_price = parse_price(dupe.primary_price)
        secondary_price = parse_price(dupe.secondary_price)
        difference = abs(primary_price - secondary_price)

        larger = max(primary_price, secondary_price)
        percent = (difference / larger * 100) if larger > 0 else Decimal("0")

        primary_dims = normalize_dimensions(dupe.dimensions.primary)
        secondary_dims = normalize_dimensions(dupe.dimensions.secondary)

        return DuplicateReportRow(
            title=dupe.title,
            normalized_title=normalize_title(dupe.title),
            primary_sku=dupe.primary_sku,
            secondary_sku=dupe.secondary_sku,
            primary_artist=dupe.primary_artist,
            secondary_artist=dupe.secondary_artist,
            primary_price=dupe.primary_price,
            secondary_price=dupe.secondary_price,
            price_difference=difference.quantize(TWO_PLACES, rounding=ROUND_HALF_UP),
            percent_price_difference=percent.quantize(ONE_PLACE, rounding=ROUND_HALF_UP),
            primary_status=dupe.primary_status,
            secondary_status=dupe.secondary_status,
            primary_dimensions=dupe.dimensions.primary,
            secondary_dimensions=dupe.dimensions.secondary,
            match_type=dupe.match_type,
            similarity=dupe.similarity,
            same_artist=normalize_artist(dupe.primary_artist) == normalize_artist(dupe.secondary_artist),
            same_dimensions=bool(primary_dims) and primary_dims == secondary_dims,
            resolution=RESOLUTION_LABELS[resolution] if resolution else "",
        )

    # ===================
    # EXPORT
    # ===================

    def export_excel(self, report: DuplicateReport) -> BytesIO:
        """
        Export a report to Excel.

        Creates:
        - "Duplicates" sheet with one row per pair
        - "Summary" sheet with headline counts

        Returns:
            BytesIO containing the Excel file
        """
        logger.info("exporting_duplicate_report", rows=len(report.duplicates))

        wb = Workbook()

        # Styles
        bold_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        thin_border = Border(bottom=Side(style="thin", color="000000"))
        generic_fill = PatternFill(start_color="FFF3CD", end_color="FFF3CD", fill_type="solid")
        price_fill = PatternFill(start_color="F8D7DA", end_color="F8D7DA", fill_type="solid")
        artist_fill = PatternFill(start_color="D1ECF1", end_color="D1ECF1", fill_type="solid")

        ws = wb.active
        ws.title = "Duplicates"

        for col, (header, width) in enumerate(REPORT_COLUMNS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = bold_font
            cell.border = thin_border
            ws.column_dimensions[cell.column_letter].width = width

        for index, row in enumerate(report.duplicates, start=1):
            values = [
                index,
                row.title,
                row.primary_artist,
                row.secondary_artist,
                row.primary_sku,
                row.secondary_sku,
                row.primary_price,
                row.secondary_price,
                float(row.price_difference),
                float(row.percent_price_difference),
                row.primary_status,
                row.secondary_status,
                row.primary_dimensions or "N/A",
                row.secondary_dimensions or "N/A",
                row.match_type,
                row.similarity,
                "Yes" if row.same_artist else "No",
                "Yes" if row.same_dimensions else "No",
                row.resolution,
            ]
            excel_row = index + 1
            for col, value in enumerate(values, start=1):
                ws.cell(row=excel_row, column=col, value=value)

            ws.cell(row=excel_row, column=16).number_format = "0.0%"

            # Same priority as the review page: generic title, then price, then artist
            fill = None
            if row.normalized_title == UNTITLED:
                fill = generic_fill
            elif row.price_difference > self.large_price_difference:
                fill = price_fill
            elif not row.same_artist:
                fill = artist_fill
            if fill is not None:
                for col in range(1, len(REPORT_COLUMNS) + 1):
                    ws.cell(row=excel_row, column=col).fill = fill

        ws.freeze_panes = "A2"

        summary_ws = wb.create_sheet("Summary")
        summary_ws.column_dimensions["A"].width = 30
        summary_ws.column_dimensions["B"].width = 20
        summary_ws["A1"] = "Duplicate Products Report"
        summary_ws["A1"].font = title_font

        summary = report.summary
        lines = [
            ("Total duplicates", summary.total_duplicates),
            ("Matching strategy", summary.matching_strategy or "N/A"),
            ("Resolution strategy", summary.resolution_strategy or "N/A"),
            ("Generic titles", summary.generic_titles),
            ("Generic titles %", report.generic_title_stats.percentage),
            ("Artist mismatches", summary.artist_mismatches),
            ("Large price differences", summary.large_price_differences),
        ]
        row_number = 3
        for label, value in lines:
            summary_ws[f"A{row_number}"] = label
            summary_ws[f"A{row_number}"].font = bold_font
            summary_ws[f"B{row_number}"] = value
            row_number += 1

        row_number += 1
        summary_ws[f"A{row_number}"] = "Match type"
        summary_ws[f"B{row_number}"] = "Count"
        summary_ws[f"A{row_number}"].font = bold_font
        summary_ws[f"B{row_number}"].font = bold_font
        summary_ws[f"A{row_number}"].border = thin_border
        summary_ws[f"B{row_number}"].border = thin_border
        for match_type, count in sorted(summary.match_types.items()):
            row_number += 1
            summary_ws[f"A{row_number}"] = match_type
            summary_ws[f"B{row_number}"] = count

        # Save to BytesIO
        output = BytesIO()
        wb.save(output)
        output.seek(0)

        return output


# Singleton instance for convenience
_duplicate_report_service: Optional[DuplicateReportService] = None

def get_duplicate_report_service() -> DuplicateReportService:
    """Get or create DuplicateReportService instance."""
    global _duplicate_report_service
    if _duplicate_report_service is None:
        _duplicate_report_service = DuplicateReportService()
    return _duplicate_report_service
