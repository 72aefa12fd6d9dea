"""Category-aware word and pattern matcher.

Finds every configured word and pattern in a message after normalization.

Literal words:
    Each word is compiled to a regex whose letter runs may be stretched:
    a letter that appears once or twice in the word matches exactly that
    many copies or three and more, never anything in between. "dddarn"
    matches "darn" but "good" does not match "god". Candidates are
    searched in separator-stripped text that is NOT repeat-collapsed, so
    the two cases stay distinguishable, and must be whole words: the
    characters right before and after, if any, must not be letters. This
    keeps "ass" out of "class" and "hell" out of "hello".

    Candidates are searched in the whole message and in two per-token
    views (see ``normalize_words``), because stripping separators across
    the whole message glues neighbouring words together.

    Every whole-word occurrence of an accepted word is then located in the
    display-normalized message and reported on its own. When the display
    form lines up with the original index for index, each occurrence's
    ``matched_text`` is taken from the original, so censoring finds
    "d4rn" as well as "darn".

Custom patterns:
    Applied verbatim to the fully normalized message; every
    non-overlapping match is reported with offsets in that text.

Whitelist:
    A match is dropped if the lowercased message contains a whitelisted
    phrase that itself contains the matched text.
"""

from __future__ import annotations

import itertools
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import structlog

from chatfilter.application.services.word_list_store import WordListStore
from chatfilter.domain.models.filter_result import FilterResult, MatchedWord, MatchKind
from chatfilter.domain.models.word_category import WordCategory
from chatfilter.domain.models.word_list import WordListSnapshot
from chatfilter.domain.services.normalization import (
    SEPARATOR_CLASS,
    Normalizer,
    lowercase_aligned,
)

logger = structlog.get_logger(__name__)

# Shortest run that counts as stretching rather than spelling.
_STRETCH_MIN = 3
_LETTER = r"[^\W\d_]"
_LOCATOR_GAP = f"{SEPARATOR_CLASS}*"


@dataclass(frozen=True)
class CompiledWord:
    """A literal word with its precompiled search expressions.

    Attributes:
        word: The configured (lowercased) word.
        pattern: Whole-word, stretch-aware expression searched in the
            separator-stripped views.
        locator: Whole-word expression that also tolerates separators
            between letters; searched in display-normalized text.
        loose_locator: ``locator`` without the whole-word condition, used
            when a trailing leet symbol ("darn!" shows as "darni") hides
            the boundary in display text.
    """

    word: str
    pattern: re.Pattern[str]
    locator: re.Pattern[str]
    loose_locator: re.Pattern[str]


@dataclass(frozen=True)
class CompiledCategory:
    """Compiled words and custom patterns for one category."""

    words: tuple[CompiledWord, ...] = ()
    patterns: tuple[re.Pattern[str], ...] = ()


@dataclass(frozen=True)
class CompiledWordLists:
    """Everything the matcher needs, built from a single snapshot.

    Attributes:
        snapshot: The word lists these expressions were compiled from.
            The whitelist is read from here, so a match never combines
            expressions from one load with a whitelist from another.
        categories: Compiled lists per category.
    """

    snapshot: WordListSnapshot
    categories: Mapping[WordCategory, CompiledCategory]


_EMPTY_CATEGORY = CompiledCategory()


def _runs_expression(text: str, gap: str = "") -> str:
    """Expression matching ``text`` with each letter run stretchable.

    A run of k letters matches exactly k copies, or any run of at least
    ``_STRETCH_MIN`` copies. ``gap`` may appear between any two letters.
    """
    parts = []
    for char, group in itertools.groupby(text):
        count = len(list(group))
        unit = re.escape(char)
        step = f"(?:{gap}{unit})" if gap else unit
        if count >= _STRETCH_MIN:
            parts.append(f"{unit}{step}{{{count - 1},}}")
        else:
            exact = unit + step * (count - 1)
            parts.append(f"(?:{unit}{step}{{{_STRETCH_MIN - 1},}}|{exact})")
    return gap.join(parts)


def _whole_word(expression: str) -> str:
    """Wrap ``expression`` so it only matches between non-letters."""
    return f"(?<!{_LETTER})(?:{expression})(?!{_LETTER})"


def compile_word(word: str, normalizer: Normalizer) -> CompiledWord | None:
    """Compile one literal word.

    The word is normalized the same way messages are, per whitespace
    token, so configured phrases like "go away" match "go away" and
    "goaway" alike.

    Args:
        word: Lowercased configured word or phrase.
        normalizer: Normalizer applied to the word's tokens.

    Returns:
        The CompiledWord, or None if the word normalizes to nothing
        (e.g. it consisted only of separators).
    """
    tokens = [normalizer.normalize(token) for token in word.split()]
    tokens = [token for token in tokens if token]
    if not tokens:
        return None

    pattern = " ?".join(_runs_expression(token) for token in tokens)
    locator = _runs_expression("".join(tokens), gap=_LOCATOR_GAP)
    return CompiledWord(
        word=word,
        pattern=re.compile(_whole_word(pattern)),
        locator=re.compile(_whole_word(locator)),
        loose_locator=re.compile(locator),
    )


def has_letter_boundaries(text: str, start: int, end: int) -> bool:
    """Check that ``text[start:end]`` is not glued to a letter on either side."""
    if start > 0 and text[start - 1].isalpha():
        return False
    if end < len(text) and text[end].isalpha():
        return False
    return True


class WordMatcher:
    """Matches messages against the store's compiled word lists.

    Call ``compile()`` after every ``WordListStore.load()``; until then the
    matcher keeps using the lists it was last compiled from. Matching
    reads the compiled state once per call and holds no per-call state on
    the instance, so one matcher can serve any number of threads.

    Attributes:
        _store: Source of word lists.
        _normalizer: Text normalizer.
        _compiled: Current compiled state, or None before the first compile.
    """

    def __init__(
        self,
        store: WordListStore,
        normalizer: Normalizer | None = None,
    ) -> None:
        """Initialize the matcher.

        Args:
            store: Word list store to compile from.
            normalizer: Normalizer to use (a default one if None).
        """
        self._store = store
        self._normalizer = normalizer or Normalizer()
        self._compiled: CompiledWordLists | None = None
        self._log = logger.bind(component="word_matcher")

    def compile(self) -> CompiledWordLists:
        """Precompile every word and collect every pattern, per category.

        Returns:
            The newly published compiled state.
        """
        snapshot = self._store.snapshot
        categories: dict[WordCategory, CompiledCategory] = {}
        skipped = 0

        for category in WordCategory:
            word_list = snapshot.for_category(category)
            words: list[CompiledWord] = []
            for word in sorted(word_list.words):
                compiled = compile_word(word, self._normalizer)
                if compiled is None:
                    skipped += 1
                    continue
                words.append(compiled)
            categories[category] = CompiledCategory(
                words=tuple(words),
                patterns=word_list.patterns,
            )

        state = CompiledWordLists(
            snapshot=snapshot,
            categories=MappingProxyType(categories),
        )
        self._compiled = state

        self._log.info(
            "filter_matcher_compiled",
            words=sum(len(c.words) for c in categories.values()),
            patterns=sum(len(c.patterns) for c in categories.values()),
            skipped_words=skipped,
        )
        return state

    @property
    def is_compiled(self) -> bool:
        """True once ``compile()`` has run."""
        return self._compiled is not None

    def match(
        self,
        message: str | None,
        categories: Iterable[WordCategory],
    ) -> FilterResult:
        """Find every match of the requested categories in ``message``.

        Args:
            message: Raw message text. None or empty yields no matches.
            categories: Categories to check; others are skipped.

        Returns:
            FilterResult with matches in category, word, pattern order.
            A word seen several times yields one match per occurrence.
        """
        requested = frozenset(categories)
        if not message or not requested:
            return FilterResult.empty(message)

        state = self._compiled
        if state is None:
            state = self.compile()

        full = self._normalizer.normalize(message)
        display = self._normalizer.normalize_for_display(message)
        views = tuple(
            dict.fromkeys(
                (
                    self._normalizer.normalize(message, collapse=False),
                    self._normalizer.normalize_words(message, collapse=False),
                    self._normalizer.normalize_words(
                        message, trim_edges=True, collapse=False
                    ),
                )
            )
        )
        lowered = lowercase_aligned(message)
        aligned = len(display) == len(message) and (
            self._normalizer.is_index_aligned(message)
        )
        whitelist = tuple(
            phrase for phrase in state.snapshot.whitelist if phrase in lowered
        )

        matches: list[MatchedWord] = []
        for category in WordCategory:
            if category not in requested:
                continue
            compiled = state.categories.get(category, _EMPTY_CATEGORY)

            for compiled_word in compiled.words:
                for found in self._match_word(
                    compiled_word,
                    category,
                    views,
                    display,
                    lowered if aligned else display,
                ):
                    if _is_whitelisted(
                        whitelist, found.matched_text, compiled_word.word
                    ):
                        continue
                    matches.append(found)

            for pattern in compiled.patterns:
                for hit in pattern.finditer(full):
                    text = hit.group()
                    if not text or _is_whitelisted(whitelist, text):
                        continue
                    matches.append(
                        MatchedWord(
                            matched_text=text,
                            source=pattern.pattern,
                            category=category,
                            start=hit.start(),
                            end=hit.end(),
                            kind=MatchKind.PATTERN,
                        )
                    )

        return FilterResult(original_message=message, matches=tuple(matches))

    def _match_word(
        self,
        compiled_word: CompiledWord,
        category: WordCategory,
        views: tuple[str, ...],
        display: str,
        source_text: str,
    ) -> list[MatchedWord]:
        """Accept a word on a hit in any view, then report each occurrence.

        Occurrences are located in ``display`` and their text is read from
        ``source_text``, which shares its indexes. If the locator cannot
        place the word at all, the accepting view's hit is reported with
        offsets into that view.
        """
        accepted: re.Match[str] | None = None
        for view in views:
            accepted = compiled_word.pattern.search(view)
            if accepted is not None:
                break
        if accepted is None:
            return []

        spans = [hit.span() for hit in compiled_word.locator.finditer(display)]
        if not spans:
            loose = compiled_word.loose_locator.search(display)
            if loose is not None:
                spans = [loose.span()]

        if not spans:
            return [
                MatchedWord(
                    matched_text=accepted.group(),
                    source=compiled_word.word,
                    category=category,
                    start=accepted.start(),
                    end=accepted.end(),
                    kind=MatchKind.WORD,
                )
            ]

        return [
            MatchedWord(
                matched_text=source_text[start:end],
                source=compiled_word.word,
                category=category,
                start=start,
                end=end,
                kind=MatchKind.WORD,
            )
            for start, end in spans
        ]


def _is_whitelisted(whitelist: tuple[str, ...], *texts: str) -> bool:
    """True if a whitelisted phrase present in the message contains any of ``texts``."""
    for phrase in whitelist:
        for text in texts:
            if text and text.lower() in phrase:
                return True
    return False
