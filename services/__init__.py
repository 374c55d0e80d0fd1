"""
Business logic services.

Each service handles one stage of the duplicate pipeline.
"""

from services.duplicate_detection_service import (
    DuplicateDetectionService,
    get_duplicate_detection_service,
)
from services.duplicate_resolution_service import (
    DuplicateResolutionService,
    get_duplicate_resolution_service,
)
from services.duplicate_report_service import (
    DuplicateReportService,
    get_duplicate_report_service,
)
from services.handle_registry import HandleRegistry
from services.migration_service import MigrationService, MigrationResult

__all__ = [
    "DuplicateDetectionService",
    "get_duplicate_detection_service",
    "DuplicateResolutionService",
    "get_duplicate_resolution_service",
    "DuplicateReportService",
    "get_duplicate_report_service",
    "HandleRegistry",
    "MigrationService",
    "MigrationResult",
]
