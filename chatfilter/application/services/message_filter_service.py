"""Message filter service.

Public entry point for chat moderation. Callers hand in raw player text
plus a strictness policy and get back a verdict, a censored string or the
raw match data.

Censoring never trusts normalized offsets: separator stripping and repeat
collapsing are not length-preserving, so each match is re-found in the
lowercased original by searching for its ``matched_text``. A match that
cannot be found verbatim (typically a pattern hit that only exists in the
fully normalized text) is still reported by ``analyze`` but left
uncensored.

Usage:
    service = create_filter_service()

    service.filter_message("you are a d4rn fool", FilterLevel.STRICT)
    # "you are a **** fool"

    if service.contains_slurs(message):
        ...  # reject outright
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Union

import structlog

from chatfilter.application.ports.filter_metrics import FilterMetricsProtocol
from chatfilter.application.services.word_list_store import WordListStore
from chatfilter.application.services.word_matcher import (
    WordMatcher,
    has_letter_boundaries,
)
from chatfilter.domain.errors.configuration import FilterConfigurationError
from chatfilter.domain.models.filter_level import FilterLevel
from chatfilter.domain.models.filter_result import FilterResult, MatchKind
from chatfilter.domain.models.word_category import WordCategory
from chatfilter.domain.models.word_list import LoadReport
from chatfilter.domain.services.normalization import lowercase_aligned

logger = structlog.get_logger(__name__)

DEFAULT_CENSOR_CHAR = "*"
DEFAULT_MAX_MESSAGE_LENGTH = 1024

CategoryPolicy = Union[FilterLevel, Iterable[WordCategory]]


class ModerationOutcome(str, Enum):
    """What should happen to a chat message."""

    CLEAN = "CLEAN"
    CENSORED = "CENSORED"
    BLOCKED = "BLOCKED"


@dataclass(frozen=True)
class ModerationVerdict:
    """Decision for one message as seen by one viewer.

    Attributes:
        outcome: CLEAN, CENSORED or BLOCKED.
        text: Text to show the viewer (the original when CLEAN or BLOCKED).
        result: The matches behind the decision.
    """

    outcome: ModerationOutcome
    text: str
    result: FilterResult

    @property
    def is_blocked(self) -> bool:
        """True if the message must not be delivered at all."""
        return self.outcome is ModerationOutcome.BLOCKED


@dataclass(frozen=True)
class FilterStats:
    """Word list sizes for admin output."""

    word_count: int
    pattern_count: int
    whitelist_count: int
    words_by_category: dict[WordCategory, int]


def resolve_categories(policy: CategoryPolicy | None) -> frozenset[WordCategory]:
    """Expand a FilterLevel or an iterable of categories to a category set."""
    if policy is None:
        return frozenset()
    if isinstance(policy, FilterLevel):
        return policy.blocked_categories
    if isinstance(policy, WordCategory):
        return frozenset({policy})
    return frozenset(policy)


class MessageFilterService:
    """Facade over the word list store and matcher.

    ``filter_message``, ``analyze``, ``contains_blocked_category`` and
    ``moderate`` never raise for None or empty text and never perform
    I/O. Only ``reload`` reads configuration.
    A policy of None means the service's default level.

    Attributes:
        _store: Word list store.
        _matcher: Matcher compiled from the store.
        _censor_char: Character written over matched spans.
        _max_message_length: Longest prefix of a message that is scanned.
        _default_level: Level applied when a caller passes no policy.
        _metrics: Optional metrics recorder.
    """

    def __init__(
        self,
        store: WordListStore,
        matcher: WordMatcher,
        censor_char: str = DEFAULT_CENSOR_CHAR,
        max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH,
        default_level: FilterLevel = FilterLevel.STRICT,
        metrics: FilterMetricsProtocol | None = None,
    ) -> None:
        """Initialize the filter service.

        Args:
            store: Word list store (loaded by ``reload``).
            matcher: Matcher over ``store``.
            censor_char: Single replacement character for censored text.
            max_message_length: Messages longer than this are scanned over
                their first ``max_message_length`` characters only.
            default_level: Level used when ``policy`` is None.
            metrics: Optional metrics recorder.

        Raises:
            FilterConfigurationError: If censor_char is not one character
                or max_message_length is not positive.
        """
        if not isinstance(censor_char, str) or len(censor_char) != 1:
            raise FilterConfigurationError(
                "censor_char", censor_char, "must be exactly one character"
            )
        if max_message_length <= 0:
            raise FilterConfigurationError(
                "max_message_length", max_message_length, "must be positive"
            )

        self._store = store
        self._matcher = matcher
        self._censor_char = censor_char
        self._max_message_length = max_message_length
        self._default_level = default_level
        self._metrics = metrics
        self._reload_lock = threading.Lock()
        self._log = logger.bind(component="message_filter")

    @property
    def censor_char(self) -> str:
        """Character written over censored spans."""
        return self._censor_char

    @property
    def default_level(self) -> FilterLevel:
        """Level applied when no policy is given."""
        return self._default_level

    @property
    def word_list_store(self) -> WordListStore:
        """The underlying word list store."""
        return self._store

    def reload(self) -> LoadReport:
        """Re-read all word lists and recompile the matcher.

        Returns:
            LoadReport including any patterns that were skipped.

        Raises:
            WordListSourceError: If configuration cannot be read. The
                previous lists stay active.
        """
        with self._reload_lock:
            report = self._store.load()
            self._matcher.compile()

        for failure in report.failures:
            self._log.warning(
                "word_list_pattern_skipped",
                category=failure.category.value,
                pattern=failure.source,
                error=failure.error,
            )
        if self._metrics is not None:
            self._metrics.record_load(report)

        self._log.info(
            "word_lists_reloaded",
            words=report.snapshot.total_word_count,
            patterns=report.snapshot.total_pattern_count,
            whitelisted=report.snapshot.whitelist_count,
        )
        return report

    def analyze(self, text: str | None, policy: CategoryPolicy | None) -> FilterResult:
        """Find blocked content without censoring.

        Args:
            text: Raw message.
            policy: FilterLevel or categories to check. None uses the
                default level.

        Returns:
            FilterResult for the message (empty if nothing applies).
        """
        categories = resolve_categories(
            self._default_level if policy is None else policy
        )
        if not text or not categories:
            return FilterResult.empty(text)

        scanned = text
        if len(text) > self._max_message_length:
            self._log.debug(
                "message_truncated_for_scan",
                length=len(text),
                max_length=self._max_message_length,
            )
            scanned = text[: self._max_message_length]

        result = self._matcher.match(scanned, categories)
        if scanned is not text:
            result = FilterResult(original_message=text, matches=result.matches)

        if self._metrics is not None:
            self._metrics.record_analysis(result)
        return result

    def filter_message(self, text: str | None, policy: CategoryPolicy | None) -> str:
        """Censor blocked content for a viewer's policy.

        Args:
            text: Raw message.
            policy: FilterLevel or categories to block. None uses the
                default level.

        Returns:
            The message unchanged if nothing matched, otherwise a copy with
            every locatable matched span replaced by the censor character.
        """
        if not text:
            return ""
        result = self.analyze(text, policy)
        if not result.has_matches:
            return text

        censored = self.censor(result)
        if censored != text:
            if self._metrics is not None:
                self._metrics.record_censored()
            self._log.debug(
                "message_filtered",
                matches=len(result),
                categories=[c.value for c in result.categories],
            )
        return censored

    def censor(self, result: FilterResult) -> str:
        """Rewrite the original message of ``result`` with matches censored.

        Every occurrence of each match's text is censored, not just the
        first. Indices already censored by an earlier match are tracked so
        overlapping matches do not rewrite the same occurrence twice.
        Word matches are only censored where they stand as whole words, so
        "ass" leaves "class" alone.

        Args:
            result: Result from ``analyze``.

        Returns:
            The censored message (identical length to the original).
        """
        message = result.original_message
        if not result.has_matches:
            return message

        lowered = lowercase_aligned(message)
        chars = list(message)
        censored = [False] * len(message)

        for match in result.matches:
            needle = lowercase_aligned(match.matched_text)
            if not needle:
                continue
            whole_word = match.kind is MatchKind.WORD
            cursor = 0
            while True:
                index = lowered.find(needle, cursor)
                if index == -1:
                    break
                end = index + len(needle)
                if whole_word and not has_letter_boundaries(lowered, index, end):
                    cursor = index + 1
                    continue
                if not all(censored[index:end]):
                    for i in range(index, end):
                        chars[i] = self._censor_char
                        censored[i] = True
                cursor = end

        return "".join(chars)

    def contains_blocked_category(
        self,
        text: str | None,
        categories: CategoryPolicy | None,
    ) -> bool:
        """Check for blocked content without building a censored string."""
        return self.analyze(text, categories).has_matches

    def contains_slurs(self, text: str | None) -> bool:
        """Fast reject check for the highest-severity category."""
        return self.contains_blocked_category(text, {WordCategory.SLURS})

    def moderate(
        self,
        text: str | None,
        viewer_level: FilterLevel | None = None,
    ) -> ModerationVerdict:
        """Decide how a message should reach a viewer.

        Slurs block the message for everyone regardless of the viewer's
        level. Anything else is censored according to ``viewer_level``.

        Args:
            text: Raw message.
            viewer_level: The viewing player's filter level, or None for
                the default level.

        Returns:
            ModerationVerdict with the text to display.
        """
        message = text or ""
        slurs = self.analyze(message, {WordCategory.SLURS})
        if slurs.has_matches:
            return ModerationVerdict(
                outcome=ModerationOutcome.BLOCKED,
                text=message,
                result=slurs,
            )

        result = self.analyze(message, viewer_level)
        if not result.has_matches:
            return ModerationVerdict(
                outcome=ModerationOutcome.CLEAN,
                text=message,
                result=result,
            )

        censored = self.censor(result)
        if censored != message and self._metrics is not None:
            self._metrics.record_censored()
        return ModerationVerdict(
            outcome=ModerationOutcome.CENSORED,
            text=censored,
            result=result,
        )

    def stats(self) -> FilterStats:
        """Current word list sizes."""
        snapshot = self._store.snapshot
        return FilterStats(
            word_count=snapshot.total_word_count,
            pattern_count=snapshot.total_pattern_count,
            whitelist_count=snapshot.whitelist_count,
            words_by_category={
                category: len(snapshot.for_category(category).words)
                for category in WordCategory
            },
        )
