"""
Tests for comparison key generation.
"""

import pytest

from models.duplicate import MatchingStrategy
from utils.comparison_keys import generate_comparison_keys


class TestExactTitleKeys:

    def test_single_lowercased_key(self):
        keys = generate_comparison_keys("  Red Vase ", "Ana Pérez", "", MatchingStrategy.EXACT_TITLE)
        assert keys == ["red vase"]

    def test_accents_kept(self):
        keys = generate_comparison_keys("Sin Título", "", "", "exact-title")
        assert keys == ["sin título"]


class TestNormalizedTitleKeys:

    def test_single_normalized_key(self):
        keys = generate_comparison_keys("Sin Título", "", "", MatchingStrategy.NORMALIZED_TITLE)
        assert keys == ["untitled"]

    def test_fuzzy_uses_normalized_key(self):
        keys = generate_comparison_keys("Obra Marina", "", "", MatchingStrategy.FUZZY)
        assert keys == ["marina"]


class TestAdvancedKeys:

    def test_two_keys_title_artist_first(self):
        keys = generate_comparison_keys("Luna Sobre el Mar", "Dra. Carmen Ruiz", "60h x 80w", "advanced")
        assert keys == ["luna sobre el mar|carmen ruiz", "luna sobre el mar"]

    def test_two_keys_without_artist(self):
        keys = generate_comparison_keys("S/T", "", "", MatchingStrategy.ADVANCED)
        assert len(keys) == 2
        assert keys == ["untitled|", "untitled"]


class TestStrategyNames:

    @pytest.mark.parametrize("name", ["normalizedTitle", "normalized_title", "NORMALIZED-TITLE"])
    def test_loose_spellings_accepted(self, name):
        assert generate_comparison_keys("Sin Título", "", "", name) == ["untitled"]

    def test_unknown_strategy_gives_no_keys(self):
        assert generate_comparison_keys("Red Vase", "Ana", "", "phonetic") == []

    def test_dimensions_never_part_of_key(self):
        with_dims = generate_comparison_keys("Red Vase", "Ana", "30h x 40w", "advanced")
        without_dims = generate_comparison_keys("Red Vase", "Ana", "", "advanced")
        assert with_dims == without_dims
