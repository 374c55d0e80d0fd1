"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.product import ShopifyProduct
from models.duplicate import (
    MatchingStrategy,
    ResolutionStrategy,
    ManualChoice,
    DuplicateDimensions,
    DuplicateMatch,
    DuplicateDetectionConfig,
    DuplicateResolutionConfig,
)
from models.report import (
    DuplicateReportRow,
    GenericTitleStats,
    DuplicateReportSummary,
    DuplicateReport,
)

__all__ = [
    # Base
    "BaseSchema",

    # Product
    "ShopifyProduct",

    # Duplicates
    "MatchingStrategy",
    "ResolutionStrategy",
    "ManualChoice",
    "DuplicateDimensions",
    "DuplicateMatch",
    "DuplicateDetectionConfig",
    "DuplicateResolutionConfig",

    # Report
    "DuplicateReportRow",
    "GenericTitleStats",
    "DuplicateReportSummary",
    "DuplicateReport",
]
