"""
Comparison keys for duplicate candidate lookup.

A key only decides which archive records a WooCommerce record is compared
against. Acceptance is decided by the detection service.
"""

from typing import Union

from models.duplicate import MatchingStrategy
from utils.text_utils import normalize_title, normalize_artist


def generate_comparison_keys(
    title: str,
    artist: str,
    dimensions: str,
    strategy: Union[MatchingStrategy, str],
) -> list[str]:
    """
    Generate lookup keys for a record.

    Args:
        title: Product title
        artist: Vendor / artist name
        dimensions: Extracted dimensions (not part of any key yet)
        strategy: Matching strategy (enum member or its name)

    Returns:
        Keys in lookup order. Empty for an unknown strategy.
    """
    try:
        strategy = MatchingStrategy(strategy)
    except ValueError:
        return []

    title = title or ""

    if strategy == MatchingStrategy.EXACT_TITLE:
        return [title.lower().strip()]

    if strategy == MatchingStrategy.ADVANCED:
        normalized = normalize_title(title)
        return [f"{normalized}|{normalize_artist(artist)}", normalized]

    # normalized-title and fuzzy share the normalized title key;
    # fuzzy candidates are re-scored by similarity afterwards
    return [normalize_title(title)]
