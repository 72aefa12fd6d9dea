"""Word categories (severity classes) for chat filtering.

Categories are disjoint tags, not a hierarchy. A configured word belongs
to exactly one category, but any subset of categories can be checked at
once. Member order is the order in which the matcher walks categories.
"""

from __future__ import annotations

from enum import Enum

from chatfilter.domain.errors.word_list import UnknownCategoryError


class WordCategory(str, Enum):
    """Severity class of a configured word or pattern.

    The value is the configuration key the category's word list is stored
    under (e.g. ``slurs.yml``).
    """

    SLURS = "slurs"
    EXTREME = "extreme"
    MODERATE = "moderate"
    MILD = "mild"

    @property
    def display_name(self) -> str:
        """Human-readable name for admin output."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_key(cls, key: str) -> WordCategory:
        """Resolve a category from its configuration key or member name.

        Args:
            key: Category key such as ``"slurs"`` or ``"SLURS"``.

        Returns:
            The matching WordCategory.

        Raises:
            UnknownCategoryError: If no category has that key.
        """
        normalized = key.strip().lower()
        for category in cls:
            if category.value == normalized:
                return category
        raise UnknownCategoryError(key)


_DISPLAY_NAMES: dict[WordCategory, str] = {
    WordCategory.SLURS: "Slurs",
    WordCategory.EXTREME: "Extreme Profanity",
    WordCategory.MODERATE: "Moderate Profanity",
    WordCategory.MILD: "Mild Language",
}
