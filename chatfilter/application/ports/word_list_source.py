"""Word list source port.

Defines where WordListStore reads its raw configuration from. Sources
return unvalidated strings; lowercasing, deduplication and pattern
compilation happen in the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from chatfilter.domain.models.word_category import WordCategory


@dataclass(frozen=True)
class RawCategoryList:
    """Unprocessed word list entries for one category.

    Attributes:
        words: Literal words exactly as configured.
        patterns: Regular expression sources exactly as configured.
    """

    words: tuple[str, ...] = ()
    patterns: tuple[str, ...] = ()


class WordListSourceProtocol(Protocol):
    """Protocol for reading categorized word lists and the whitelist.

    Implementations may block on I/O; they are only called from
    ``WordListStore.load()``, never from the per-message path.
    """

    def read_category(self, category: WordCategory) -> RawCategoryList:
        """Read one category's words and patterns.

        Args:
            category: Category to read.

        Returns:
            The raw entries. A category with no configuration returns
            an empty RawCategoryList.

        Raises:
            WordListSourceError: If the configuration exists but cannot
                be read or has the wrong shape.
        """
        ...

    def read_whitelist(self) -> tuple[str, ...]:
        """Read the whitelisted phrases.

        Raises:
            WordListSourceError: If the configuration cannot be read.
        """
        ...
