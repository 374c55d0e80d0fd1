"""
Duplicate detection and resolution schemas.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.base import lookup_enum_alias
from exceptions import UnknownResolutionStrategyError


class MatchingStrategy(str, Enum):
    """How archive and WooCommerce records are compared."""
    EXACT_TITLE = "exact-title"
    NORMALIZED_TITLE = "normalized-title"
    ADVANCED = "advanced"
    FUZZY = "fuzzy"

    @classmethod
    def _missing_(cls, value):
        return lookup_enum_alias(cls, value)


class ResolutionStrategy(str, Enum):
    """What to do with a confirmed duplicate pair."""
    KEEP_BOTH = "keep-both"
    PREFER_PRIMARY = "prefer-primary"
    PREFER_SECONDARY = "prefer-secondary"
    ASK_MANUAL = "ask-manual"

    @classmethod
    def _missing_(cls, value):
        return lookup_enum_alias(cls, value, aliases={
            "ask": cls.ASK_MANUAL,
            "preferartwork": cls.PREFER_PRIMARY,
            "preferwoo": cls.PREFER_SECONDARY,
        })


class ManualChoice(str, Enum):
    """Answer to a manual duplicate prompt."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    BOTH = "both"

    @classmethod
    def _missing_(cls, value):
        return lookup_enum_alias(cls, value, aliases={
            "artwork": cls.PRIMARY,
            "woo": cls.SECONDARY,
            "woocommerce": cls.SECONDARY,
        })


class DuplicateDimensions(BaseModel):
    """Dimensions of both sides, for human review only."""
    model_config = ConfigDict(frozen=True)

    primary: str = ""
    secondary: str = ""


class DuplicateMatch(BaseModel):
    """
    Suspected correspondence between one archive (primary) record and one
    WooCommerce (secondary) record.

    Immutable once created.
    """
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Secondary record title")
    primary_sku: str
    secondary_sku: str
    primary_price: str = ""
    secondary_price: str = ""
    primary_status: str = ""
    secondary_status: str = ""
    primary_artist: str = "N/A"
    secondary_artist: str = "N/A"
    dimensions: DuplicateDimensions = Field(default_factory=DuplicateDimensions)
    match_type: str = Field(
        ...,
        description="title, title+artist, title only, or fuzzy (NN%)",
        examples=["title+artist", "fuzzy (92%)"]
    )
    similarity: float = Field(1.0, ge=0, le=1)


class DuplicateDetectionConfig(BaseModel):
    """Detection settings."""

    matching_strategy: MatchingStrategy = MatchingStrategy.ADVANCED
    similarity_threshold: float = Field(
        0.8,
        gt=0,
        le=1,
        description="Minimum similarity for fuzzy matches"
    )

    @field_validator("matching_strategy", mode="before")
    @classmethod
    def parse_strategy(cls, v: Any) -> MatchingStrategy:
        """Accept loose spellings ("normalizedTitle", "fuzzy")."""
        return MatchingStrategy(v)


ManualChoiceHandler = Callable[
    [DuplicateMatch],
    Union[Awaitable[Union[ManualChoice, str]], ManualChoice, str]
]


class DuplicateResolutionConfig(BaseModel):
    """
    Resolution settings.

    on_manual_choice is only required for the ask-manual strategy.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    strategy: ResolutionStrategy = ResolutionStrategy.KEEP_BOTH
    on_manual_choice: Optional[ManualChoiceHandler] = None

    @field_validator("strategy", mode="before")
    @classmethod
    def parse_strategy(cls, v: Any) -> ResolutionStrategy:
        """Unknown strategy names are a configuration error."""
        try:
            return ResolutionStrategy(v)
        except ValueError:
            raise UnknownResolutionStrategyError(
                v, valid=[s.value for s in ResolutionStrategy]
            )
