"""Word list store.

Holds the categorized words, compiled patterns and whitelist the matcher
consults. Lists are replaced only by ``load()``: the new snapshot is built
in full and then published with one reference assignment, so concurrent
readers see either the old lists or the new ones, never a mix.
"""

from __future__ import annotations

import re
import threading

import structlog

from chatfilter.application.ports.word_list_source import WordListSourceProtocol
from chatfilter.domain.errors.word_list import WordListSourceError
from chatfilter.domain.models.word_category import WordCategory
from chatfilter.domain.models.word_list import (
    CategoryWordList,
    LoadReport,
    PatternLoadFailure,
    WordListSnapshot,
)

logger = structlog.get_logger(__name__)


class WordListStore:
    """Read-mostly store of word lists, loaded from a WordListSourceProtocol.

    Reads never lock. ``load()`` serializes writers with a lock and swaps
    the snapshot reference once the new lists are complete.

    Attributes:
        _source: Where raw lists are read from.
        _snapshot: Currently published lists.
        _load_lock: Serializes concurrent loads.
    """

    def __init__(self, source: WordListSourceProtocol) -> None:
        """Initialize an empty store.

        Args:
            source: Source of raw word lists and the whitelist.
        """
        self._source = source
        self._snapshot = WordListSnapshot.empty()
        self._load_lock = threading.Lock()
        self._log = logger.bind(component="word_list_store")

    def load(self) -> LoadReport:
        """Read every category and the whitelist, then publish them.

        Words are lowercased and deduplicated; blank entries are dropped.
        Each pattern is compiled case-insensitively; one that fails is
        logged, reported in the returned LoadReport and skipped while the
        rest keep loading.

        Returns:
            LoadReport with the published snapshot and skipped patterns.

        Raises:
            WordListSourceError: If the source cannot be read. The
                previously published lists stay in place.
        """
        with self._load_lock:
            lists: dict[WordCategory, CategoryWordList] = {}
            failures: list[PatternLoadFailure] = []

            try:
                for category in WordCategory:
                    raw = self._source.read_category(category)
                    words = frozenset(
                        word.strip().lower() for word in raw.words if word.strip()
                    )
                    patterns = self._compile_patterns(category, raw.patterns, failures)
                    lists[category] = CategoryWordList(words=words, patterns=patterns)

                whitelist = frozenset(
                    phrase.strip().lower()
                    for phrase in self._source.read_whitelist()
                    if phrase.strip()
                )
            except WordListSourceError as exc:
                self._log.error(
                    "word_list_reload_failed",
                    source=exc.source,
                    reason=exc.reason,
                )
                raise

            snapshot = WordListSnapshot.build(lists, whitelist)
            self._snapshot = snapshot

        self._log.info(
            "word_lists_loaded",
            words=snapshot.total_word_count,
            patterns=snapshot.total_pattern_count,
            whitelisted=snapshot.whitelist_count,
            pattern_failures=len(failures),
        )
        return LoadReport(snapshot=snapshot, failures=tuple(failures))

    def _compile_patterns(
        self,
        category: WordCategory,
        sources: tuple[str, ...],
        failures: list[PatternLoadFailure],
    ) -> tuple[re.Pattern[str], ...]:
        """Compile one category's patterns, skipping ones that fail."""
        compiled: list[re.Pattern[str]] = []
        for source in sources:
            if not source:
                continue
            try:
                compiled.append(re.compile(source, re.IGNORECASE))
            except re.error as exc:
                self._log.warning(
                    "word_list_pattern_invalid",
                    category=category.value,
                    pattern=source,
                    error=str(exc),
                )
                failures.append(
                    PatternLoadFailure(category=category, source=source, error=str(exc))
                )
        return tuple(compiled)

    @property
    def snapshot(self) -> WordListSnapshot:
        """The currently published lists."""
        return self._snapshot

    def words(self, category: WordCategory) -> frozenset[str]:
        """Lowercased literal words for ``category``."""
        return self._snapshot.for_category(category).words

    def patterns(self, category: WordCategory) -> tuple[re.Pattern[str], ...]:
        """Compiled patterns for ``category``."""
        return self._snapshot.for_category(category).patterns

    def is_whitelisted(self, phrase: str) -> bool:
        """Check whether ``phrase`` is exactly a whitelisted phrase."""
        return phrase.strip().lower() in self._snapshot.whitelist

    @property
    def whitelisted_phrases(self) -> frozenset[str]:
        """All whitelisted phrases."""
        return self._snapshot.whitelist

    def word_count(self, category: WordCategory) -> int:
        """Number of literal words in ``category``."""
        return len(self.words(category))

    @property
    def total_word_count(self) -> int:
        """Number of literal words across all categories."""
        return self._snapshot.total_word_count

    @property
    def total_pattern_count(self) -> int:
        """Number of compiled patterns across all categories."""
        return self._snapshot.total_pattern_count

    @property
    def whitelist_count(self) -> int:
        """Number of whitelisted phrases."""
        return self._snapshot.whitelist_count
