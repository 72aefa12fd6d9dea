"""Match records and per-message filter results.

Both types are created fresh for every analyzed message and never
persisted.

Offsets in a MatchedWord are positions in whichever normalized string the
match was found in: display-normalized text for literal words, fully
normalized text for patterns. They are NOT positions in the original
message; censoring re-resolves spans against the original text by
searching for ``matched_text``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from chatfilter.domain.models.word_category import WordCategory


class MatchKind(str, Enum):
    """What produced a match."""

    WORD = "word"
    PATTERN = "pattern"


@dataclass(frozen=True)
class MatchedWord:
    """A single blocked-content hit.

    Attributes:
        matched_text: Text that was matched, as it should be searched for
            in the lowercased original when censoring.
        source: The configured word or pattern text that produced the hit.
        category: Category the word or pattern is listed under.
        start: Start offset of the hit. The text it indexes depends on
            ``kind`` and on how the word was found:

            - PATTERN: the fully normalized message.
            - WORD, located: the display-normalized message, which for
              most input lines up with the original message.
            - WORD, not located: the separator-stripped view the word was
              accepted in (the whole message or its per-token form). This
              only happens when no occurrence can be placed in the
              display form.
        end: End offset (exclusive), in the same text as ``start``.
        kind: Whether a literal word or a custom pattern matched.
    """

    matched_text: str
    source: str
    category: WordCategory
    start: int
    end: int
    kind: MatchKind = MatchKind.WORD

    def __post_init__(self) -> None:
        """Validate offsets."""
        if self.start < 0 or self.end < self.start:
            raise ValueError(
                f"Invalid match span [{self.start}, {self.end}) for {self.source!r}"
            )

    @property
    def length(self) -> int:
        """Length of the matched text."""
        return len(self.matched_text)


@dataclass(frozen=True)
class FilterResult:
    """Ordered matches found in one message.

    Attributes:
        original_message: The message exactly as the caller supplied it.
        matches: Matches in category, then word, then pattern order.
    """

    original_message: str
    matches: tuple[MatchedWord, ...] = ()

    @classmethod
    def empty(cls, message: str | None) -> FilterResult:
        """Create a result with no matches."""
        return cls(original_message=message or "", matches=())

    @property
    def has_matches(self) -> bool:
        """True if anything matched."""
        return len(self.matches) > 0

    @property
    def categories(self) -> tuple[WordCategory, ...]:
        """Categories with at least one match, in first-match order."""
        return tuple(dict.fromkeys(m.category for m in self.matches))

    def matches_in(self, category: WordCategory) -> tuple[MatchedWord, ...]:
        """Matches belonging to one category."""
        return tuple(m for m in self.matches if m.category is category)

    def contains_category(self, category: WordCategory) -> bool:
        """True if any match belongs to ``category``."""
        return any(m.category is category for m in self.matches)

    def contains_any(self, categories: Iterable[WordCategory]) -> bool:
        """True if any match belongs to one of ``categories``."""
        wanted = frozenset(categories)
        return any(m.category in wanted for m in self.matches)

    def __len__(self) -> int:
        """Return the number of matches."""
        return len(self.matches)

    def __iter__(self):
        """Iterate over matches."""
        return iter(self.matches)
