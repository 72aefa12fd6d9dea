"""Filter strictness levels.

A FilterLevel is a named policy that expands to the set of categories a
viewer wants blocked. Slurs are blocked at every level.
"""

from __future__ import annotations

from enum import Enum

from chatfilter.domain.models.word_category import WordCategory


class FilterLevel(str, Enum):
    """Per-viewer strictness policy, strictest first."""

    STRICT = "STRICT"
    MODERATE = "MODERATE"
    RELAXED = "RELAXED"
    MINIMAL = "MINIMAL"

    @property
    def blocked_categories(self) -> frozenset[WordCategory]:
        """Categories this level blocks."""
        return _BLOCKED[self]

    @property
    def description(self) -> str:
        """Short description for settings menus and admin output."""
        return _DESCRIPTIONS[self]

    def is_blocked(self, category: WordCategory) -> bool:
        """Check whether this level blocks a category.

        Args:
            category: Category to test.

        Returns:
            True if messages matching the category are censored at this level.
        """
        return category in _BLOCKED[self]

    @classmethod
    def from_string(
        cls,
        value: str | None,
        default: FilterLevel | None = None,
    ) -> FilterLevel:
        """Parse a level name, falling back instead of raising.

        Stored preferences and config files may contain stale or misspelled
        level names; those resolve to ``default`` (STRICT unless given).

        Args:
            value: Level name, case-insensitive.
            default: Level returned when ``value`` is empty or unknown.

        Returns:
            The parsed FilterLevel.
        """
        fallback = default if default is not None else cls.STRICT
        if not value:
            return fallback
        try:
            return cls(value.strip().upper())
        except ValueError:
            return fallback


_BLOCKED: dict[FilterLevel, frozenset[WordCategory]] = {
    FilterLevel.STRICT: frozenset(WordCategory),
    FilterLevel.MODERATE: frozenset(
        {WordCategory.SLURS, WordCategory.EXTREME, WordCategory.MODERATE}
    ),
    FilterLevel.RELAXED: frozenset({WordCategory.SLURS, WordCategory.EXTREME}),
    FilterLevel.MINIMAL: frozenset({WordCategory.SLURS}),
}

_DESCRIPTIONS: dict[FilterLevel, str] = {
    FilterLevel.STRICT: "Blocks all profanity and offensive language",
    FilterLevel.MODERATE: "Allows mild language, blocks everything stronger",
    FilterLevel.RELAXED: "Only blocks extreme profanity and slurs",
    FilterLevel.MINIMAL: "Only blocks slurs",
}
