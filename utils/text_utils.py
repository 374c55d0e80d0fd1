"""
Text utilities for comparing artwork titles, artists and dimensions.

Catalog titles come in Spanish and English with inconsistent accents,
punctuation and "untitled" spellings. These helpers collapse that cosmetic
variation so equivalent strings compare equal.
"""

import re
import unicodedata
from typing import Optional

from rapidfuzz.distance import Levenshtein


# Generic "untitled" spellings (compared after normalize_string)
GENERIC_TITLES = frozenset({
    "sin titulo",
    "sin título",
    "sin titulos",
    "s t",
    "s/t",
})

UNTITLED = "untitled"

# re.ASCII keeps \w and \d to [A-Za-z0-9_] and [0-9]
_NON_WORD_RE = re.compile(r"[^\w\s-]+", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")
_TITLE_PREFIX_RE = re.compile(
    r"^(?:(?:obra|pieza|serie|composicion|composición)\s+)+",
    re.IGNORECASE,
)
_TITLE_SUFFIX_RE = re.compile(
    r"(?:\s+(?:edicion|edición|reproduccion|reproducción))+$",
    re.IGNORECASE,
)
_ARTIST_PREFIX_RE = re.compile(r"^(?:sr|sra|dr|dra|prof|ing)\s+", re.IGNORECASE)
_ARTIST_SUFFIX_RE = re.compile(r"\s+(?:jr|sr|ii|iii|iv)$", re.IGNORECASE)
_DIMENSIONS_RE = re.compile(r"[^\d.hwdxcmin\s]", re.ASCII)


def strip_accents(text: str) -> str:
    """
    Remove diacritics from a string.

    "Composición" → "Composicion", "Peña" → "Pena"
    """
    # NFD decomposition separates base chars from accents
    normalized = unicodedata.normalize("NFD", text)

    # Remove accent marks (combining characters in Unicode category 'Mn')
    return "".join(c for c in normalized if unicodedata.category(c) != "Mn")


def normalize_string(text: Optional[str]) -> str:
    """
    Normalize free text for comparison.

    - "  Paisaje   Andino! " → "paisaje andino"
    - "Niño/Árbol" → "nino arbol"
    - "self-portrait" → "self-portrait"

    Args:
        text: Raw string (may be None)

    Returns:
        Lowercase, accent-free string with punctuation turned into single
        spaces. Empty string for empty input.
    """
    if not text:
        return ""

    normalized = strip_accents(text.lower())
    normalized = _NON_WORD_RE.sub(" ", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()


def normalize_title(title: Optional[str]) -> str:
    """
    Normalize an artwork title.

    Generic titles collapse to "untitled" ("Sin Título", "S/T").
    Leading generic nouns ("Obra", "Serie", ...) and trailing edition
    markers ("edición", "reproducción") are removed.

    Args:
        title: Raw title

    Returns:
        Normalized title. Applying it twice gives the same result.
    """
    normalized = normalize_string(title)
    if not normalized:
        return ""

    if normalized in GENERIC_TITLES:
        return UNTITLED

    normalized = _TITLE_PREFIX_RE.sub("", normalized)
    normalized = _TITLE_SUFFIX_RE.sub("", normalized)

    # "Obra sin título" is still an untitled piece
    if normalized in GENERIC_TITLES:
        return UNTITLED

    return normalized


def normalize_artist(artist: Optional[str]) -> str:
    """
    Normalize an artist name.

    "Dr. José Pérez Jr." → "jose perez"
    """
    normalized = normalize_string(artist)
    if not normalized:
        return ""

    normalized = _ARTIST_PREFIX_RE.sub("", normalized)
    normalized = _ARTIST_SUFFIX_RE.sub("", normalized)
    return normalized


def normalize_dimensions(dimensions: Optional[str]) -> str:
    """
    Normalize a dimensions string.

    "30 H x 40 W (cm)" → "30 h x 40 w cm"
    """
    if not dimensions:
        return ""

    normalized = _DIMENSIONS_RE.sub("", dimensions.lower())
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit-cost insert, delete and substitute."""
    return Levenshtein.distance(a, b)


def similarity(a: Optional[str], b: Optional[str]) -> float:
    """
    Similarity between two strings in [0, 1].

    Compares the normalized forms:
    1 - levenshtein / max(len). Both empty → 1.0, one empty → 0.0.

    Args:
        a: First string
        b: Second string

    Returns:
        1.0 for equivalent strings, approaching 0.0 as they diverge
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    norm_a = normalize_string(a)
    norm_b = normalize_string(b)

    if norm_a == norm_b:
        return 1.0

    max_len = max(len(norm_a), len(norm_b))
    distance = levenshtein_distance(norm_a, norm_b)
    return max(0.0, min(1.0, 1 - distance / max_len))


def slugify_title(title: Optional[str]) -> str:
    """
    Slug a title the way the converters keyed image rows.

    "Red Vase" → "red-vase". Accented characters are dropped, not
    transliterated: "Café Rojo" → "caf-rojo".
    """
    if not title:
        return ""

    slug = _WHITESPACE_RE.sub("-", title.lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def make_handle(title: Optional[str], max_length: int = 50) -> str:
    """
    Build a Shopify handle from a title.

    "  Paisaje Andino (Óleo)  " → "paisaje-andino-oleo"

    Args:
        title: Product title
        max_length: Maximum handle length

    Returns:
        URL-safe handle, or empty string if nothing usable remains
    """
    if not title:
        return ""

    handle = strip_accents(title.strip().lower())
    handle = re.sub(r"[^a-z0-9\s-]", "", handle)
    handle = _WHITESPACE_RE.sub("-", handle)
    handle = re.sub(r"-+", "-", handle)
    handle = handle.strip("-")
    return handle[:max_length]
