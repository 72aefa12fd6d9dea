"""Word list source stubs for testing.

Usage:
    source = InMemoryWordListSource()
    source.set_words(WordCategory.MILD, ("darn",))
    source.set_whitelist(("darnit",))

    store = WordListStore(source)
    store.load()
"""

from __future__ import annotations

from chatfilter.application.ports.word_list_source import (
    RawCategoryList,
    WordListSourceProtocol,
)
from chatfilter.domain.errors.word_list import WordListSourceError
from chatfilter.domain.models.word_category import WordCategory


class InMemoryWordListSource(WordListSourceProtocol):
    """In-memory implementation of WordListSourceProtocol.

    Attributes:
        _words: Configured words per category.
        _patterns: Configured pattern sources per category.
        _whitelist: Configured whitelist.
        _read_count: Number of category reads (for test assertions).
    """

    def __init__(
        self,
        words: dict[WordCategory, tuple[str, ...]] | None = None,
        patterns: dict[WordCategory, tuple[str, ...]] | None = None,
        whitelist: tuple[str, ...] = (),
    ) -> None:
        """Initialize the stub.

        Args:
            words: Initial words per category.
            patterns: Initial pattern sources per category.
            whitelist: Initial whitelist.
        """
        self._words: dict[WordCategory, tuple[str, ...]] = dict(words or {})
        self._patterns: dict[WordCategory, tuple[str, ...]] = dict(patterns or {})
        self._whitelist: tuple[str, ...] = whitelist
        self._read_count: int = 0

    # Configuration methods for tests

    def set_words(self, category: WordCategory, words: tuple[str, ...]) -> None:
        """Replace the words for one category."""
        self._words[category] = words

    def set_patterns(self, category: WordCategory, patterns: tuple[str, ...]) -> None:
        """Replace the pattern sources for one category."""
        self._patterns[category] = patterns

    def set_whitelist(self, whitelist: tuple[str, ...]) -> None:
        """Replace the whitelist."""
        self._whitelist = whitelist

    @property
    def read_count(self) -> int:
        """Number of category reads performed."""
        return self._read_count

    # Protocol implementation

    def read_category(self, category: WordCategory) -> RawCategoryList:
        """Return the configured entries for ``category``."""
        self._read_count += 1
        return RawCategoryList(
            words=self._words.get(category, ()),
            patterns=self._patterns.get(category, ()),
        )

    def read_whitelist(self) -> tuple[str, ...]:
        """Return the configured whitelist."""
        return self._whitelist


class FailingWordListSourceStub(WordListSourceProtocol):
    """Source that fails on a chosen category, for reload error paths."""

    def __init__(
        self,
        fail_on: WordCategory = WordCategory.SLURS,
        reason: str = "simulated read failure",
    ) -> None:
        """Initialize the stub.

        Args:
            fail_on: Category whose read raises.
            reason: Reason carried by the raised error.
        """
        self._fail_on = fail_on
        self._reason = reason

    def read_category(self, category: WordCategory) -> RawCategoryList:
        """Raise for the configured category, return empty lists otherwise."""
        if category is self._fail_on:
            raise WordListSourceError(f"stub:{category.value}", self._reason)
        return RawCategoryList()

    def read_whitelist(self) -> tuple[str, ...]:
        """Return an empty whitelist."""
        return ()
