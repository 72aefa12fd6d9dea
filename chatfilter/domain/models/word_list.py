"""Immutable word list snapshots.

A WordListSnapshot is built in full by a load and then published with a
single reference swap, so a reader that grabbed a snapshot keeps seeing a
consistent set of words, patterns and whitelist for the whole call.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from chatfilter.domain.models.word_category import WordCategory


@dataclass(frozen=True)
class CategoryWordList:
    """Words and compiled patterns for one category.

    Attributes:
        words: Lowercased literal words.
        patterns: Case-insensitive compiled patterns, in configured order.
    """

    words: frozenset[str] = frozenset()
    patterns: tuple[re.Pattern[str], ...] = ()


@dataclass(frozen=True)
class PatternLoadFailure:
    """A configured pattern that failed to compile and was skipped.

    Attributes:
        category: Category the pattern was listed under.
        source: The pattern text as configured.
        error: The compiler's error message.
    """

    category: WordCategory
    source: str
    error: str


_EMPTY_LIST = CategoryWordList()


@dataclass(frozen=True)
class WordListSnapshot:
    """Every category's lists plus the whitelist, as of one load.

    Attributes:
        lists: Category to word list mapping (read-only view).
        whitelist: Lowercased whitelisted phrases.
    """

    lists: Mapping[WordCategory, CategoryWordList] = field(
        default_factory=lambda: MappingProxyType({})
    )
    whitelist: frozenset[str] = frozenset()

    @classmethod
    def build(
        cls,
        lists: Mapping[WordCategory, CategoryWordList],
        whitelist: frozenset[str],
    ) -> WordListSnapshot:
        """Create a snapshot from freshly loaded lists.

        The mapping is copied so later changes to ``lists`` cannot leak in.
        """
        return cls(lists=MappingProxyType(dict(lists)), whitelist=whitelist)

    @classmethod
    def empty(cls) -> WordListSnapshot:
        """Create a snapshot with nothing configured."""
        return cls()

    def for_category(self, category: WordCategory) -> CategoryWordList:
        """Lists for ``category`` (empty if the category was not loaded)."""
        return self.lists.get(category, _EMPTY_LIST)

    @property
    def total_word_count(self) -> int:
        """Number of literal words across all categories."""
        return sum(len(wl.words) for wl in self.lists.values())

    @property
    def total_pattern_count(self) -> int:
        """Number of compiled patterns across all categories."""
        return sum(len(wl.patterns) for wl in self.lists.values())

    @property
    def whitelist_count(self) -> int:
        """Number of whitelisted phrases."""
        return len(self.whitelist)


@dataclass(frozen=True)
class LoadReport:
    """Outcome of one word list load.

    Attributes:
        snapshot: The snapshot that was published.
        failures: Patterns that failed to compile and were skipped.
    """

    snapshot: WordListSnapshot
    failures: tuple[PatternLoadFailure, ...] = ()

    @property
    def has_failures(self) -> bool:
        """True if any pattern was skipped."""
        return len(self.failures) > 0
