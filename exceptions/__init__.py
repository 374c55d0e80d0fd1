"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,

    # Configuration
    ConfigurationError,
    UnknownResolutionStrategyError,
    ManualChoiceHandlerMissingError,

    # Resolution
    InvalidManualChoiceError,

    # Shopify CSV parser
    ShopifyCSVParseError,
    ShopifyCSVMissingColumnsError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",

    # Configuration
    "ConfigurationError",
    "UnknownResolutionStrategyError",
    "ManualChoiceHandlerMissingError",

    # Resolution
    "InvalidManualChoiceError",

    # Shopify CSV parser
    "ShopifyCSVParseError",
    "ShopifyCSVMissingColumnsError",
]
