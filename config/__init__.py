"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings
    configure_logging: structlog setup shared by the CLI and scripts
"""

from config.settings import settings, get_settings, Settings
from config.logging_config import configure_logging

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Logging
    "configure_logging",
]
