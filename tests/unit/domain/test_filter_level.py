"""Unit tests for WordCategory and FilterLevel."""

import pytest

from chatfilter.domain.errors.word_list import UnknownCategoryError
from chatfilter.domain.models.filter_level import FilterLevel
from chatfilter.domain.models.word_category import WordCategory


class TestWordCategory:
    """Tests for WordCategory."""

    def test_order_is_most_severe_first(self) -> None:
        """Iteration order drives matcher ordering."""
        assert list(WordCategory) == [
            WordCategory.SLURS,
            WordCategory.EXTREME,
            WordCategory.MODERATE,
            WordCategory.MILD,
        ]

    def test_values_are_config_keys(self) -> None:
        """Values name the word list files."""
        assert [c.value for c in WordCategory] == [
            "slurs",
            "extreme",
            "moderate",
            "mild",
        ]

    @pytest.mark.parametrize("key", ["slurs", "SLURS", " Slurs "])
    def test_from_key(self, key: str) -> None:
        """Keys resolve case-insensitively."""
        assert WordCategory.from_key(key) is WordCategory.SLURS

    def test_from_key_unknown_raises(self) -> None:
        """Unknown keys raise UnknownCategoryError."""
        with pytest.raises(UnknownCategoryError) as exc_info:
            WordCategory.from_key("spicy")
        assert exc_info.value.key == "spicy"

    def test_every_category_has_display_name(self) -> None:
        """Display names exist for admin output."""
        for category in WordCategory:
            assert category.display_name


class TestFilterLevel:
    """Tests for FilterLevel."""

    def test_strict_blocks_everything(self) -> None:
        """STRICT blocks all categories."""
        assert FilterLevel.STRICT.blocked_categories == frozenset(WordCategory)

    def test_moderate_allows_mild(self) -> None:
        """MODERATE lets mild language through."""
        assert not FilterLevel.MODERATE.is_blocked(WordCategory.MILD)
        assert FilterLevel.MODERATE.is_blocked(WordCategory.MODERATE)

    def test_relaxed_blocks_extreme_and_slurs(self) -> None:
        """RELAXED blocks only the two most severe categories."""
        assert FilterLevel.RELAXED.blocked_categories == frozenset(
            {WordCategory.SLURS, WordCategory.EXTREME}
        )

    def test_minimal_blocks_only_slurs(self) -> None:
        """MINIMAL blocks only slurs."""
        assert FilterLevel.MINIMAL.blocked_categories == frozenset({WordCategory.SLURS})

    @pytest.mark.parametrize("level", list(FilterLevel))
    def test_slurs_blocked_at_every_level(self, level: FilterLevel) -> None:
        """Slurs are always blocked."""
        assert level.is_blocked(WordCategory.SLURS)

    def test_levels_are_nested(self) -> None:
        """Each level blocks a superset of the next, less strict one."""
        levels = list(FilterLevel)
        for stricter, looser in zip(levels, levels[1:]):
            assert looser.blocked_categories <= stricter.blocked_categories

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("STRICT", FilterLevel.STRICT),
            ("relaxed", FilterLevel.RELAXED),
            (" Minimal ", FilterLevel.MINIMAL),
        ],
    )
    def test_from_string(self, value: str, expected: FilterLevel) -> None:
        """Level names parse case-insensitively."""
        assert FilterLevel.from_string(value) is expected

    @pytest.mark.parametrize("value", [None, "", "bogus"])
    def test_from_string_falls_back_to_strict(self, value: str | None) -> None:
        """Unknown or empty names fall back to STRICT."""
        assert FilterLevel.from_string(value) is FilterLevel.STRICT

    def test_from_string_custom_default(self) -> None:
        """A custom fallback can be supplied."""
        assert (
            FilterLevel.from_string("bogus", default=FilterLevel.MINIMAL)
            is FilterLevel.MINIMAL
        )

    def test_every_level_has_description(self) -> None:
        """Descriptions exist for settings menus."""
        for level in FilterLevel:
            assert level.description
