"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache

from models.duplicate import MatchingStrategy, ResolutionStrategy


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # DUPLICATE DETECTION
    # ===================
    matching_strategy: MatchingStrategy = Field(
        default=MatchingStrategy.ADVANCED,
        description="How archive and WooCommerce records are compared"
    )
    similarity_threshold: float = Field(
        default=0.8,
        gt=0,
        le=1,
        description="Minimum similarity for a fuzzy match"
    )

    # ===================
    # DUPLICATE RESOLUTION
    # ===================
    resolution_strategy: ResolutionStrategy = Field(
        default=ResolutionStrategy.KEEP_BOTH,
        description="What to do with a confirmed duplicate pair"
    )
    secondary_label: str = Field(
        default="WooCommerce",
        min_length=1,
        description="Appended to renamed secondary titles, e.g. 'Red Vase (WooCommerce)'"
    )
    secondary_handle_suffix: str = Field(
        default="woo",
        min_length=1,
        pattern="^[a-z0-9-]+$",
        description="Appended to renamed secondary handles, e.g. 'red-vase-woo'"
    )

    # ===================
    # REPORTING
    # ===================
    large_price_difference: float = Field(
        default=100,
        ge=0,
        description="Absolute price gap flagged in the duplicate report"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )

    @field_validator("matching_strategy", mode="before")
    @classmethod
    def parse_matching_strategy(cls, v):
        """Accept the same spellings as the CLI ("exactTitle", "exact_title")."""
        return MatchingStrategy(v)

    @field_validator("resolution_strategy", mode="before")
    @classmethod
    def parse_resolution_strategy(cls, v):
        return ResolutionStrategy(v)

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
