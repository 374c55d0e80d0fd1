"""
Custom exception classes for the migration pipeline.

Every error carries a machine-readable code, a human message and a details
dict, so the CLI (or any caller) can report it uniformly.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "UNKNOWN_RESOLUTION_STRATEGY")
        message: Human-readable message
        status_code: Exit/HTTP-like status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a serializable error payload."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


# ===================
# CONFIGURATION ERRORS
# ===================

class ConfigurationError(ValidationError):
    """
    Invalid pipeline configuration.

    Raised before any record is processed. A configuration error aborts
    the whole migration run.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONFIGURATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details=details
        )


class UnknownResolutionStrategyError(ConfigurationError):
    """Resolution strategy name is not recognized."""

    def __init__(self, strategy: Any, valid: Optional[list[str]] = None):
        super().__init__(
            code="UNKNOWN_RESOLUTION_STRATEGY",
            message=f"Unknown duplicate resolution strategy: {strategy}",
            details={"provided": str(strategy), "valid": valid or []}
        )


class ManualChoiceHandlerMissingError(ConfigurationError):
    """The ask-manual strategy was selected without a choice callback."""

    def __init__(self, strategy: str = "ask-manual"):
        super().__init__(
            code="MANUAL_CHOICE_HANDLER_MISSING",
            message=f'Manual choice handler is required for "{strategy}" strategy',
            details={"strategy": strategy}
        )


# ===================
# RESOLUTION ERRORS
# ===================

class InvalidManualChoiceError(ValidationError):
    """Manual choice callback returned something other than primary/secondary/both."""

    def __init__(self, choice: Any, secondary_sku: str):
        super().__init__(
            code="INVALID_MANUAL_CHOICE",
            message=f"Invalid manual choice: {choice!r}",
            details={
                "provided": repr(choice),
                "secondary_sku": secondary_sku,
                "valid": ["primary", "secondary", "both"]
            }
        )


# ===================
# CSV PARSER ERRORS
# ===================

class ShopifyCSVParseError(ValidationError):
    """Shopify CSV file parsing failed."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="SHOPIFY_CSV_PARSE_ERROR",
            message=message,
            details=details
        )


class ShopifyCSVMissingColumnsError(ShopifyCSVParseError):
    """Required Shopify columns are absent from the file."""

    def __init__(self, missing: list[str]):
        super().__init__(
            message=f"Missing required columns: {', '.join(missing)}",
            details={"missing": missing}
        )
