"""Unit tests for WordMatcher.

Tests:
- Whole-word boundaries ("class" does not contain "ass")
- Evasion resistance (separators, stretching, leet, homoglyphs)
- Positions and matched text for literal words
- Custom patterns run against fully normalized text
- Whitelist suppression
- Category selection and ordering
- Compiled state only changes on compile()
"""

import pytest

from chatfilter.application.services.word_list_store import WordListStore
from chatfilter.application.services.word_matcher import (
    WordMatcher,
    compile_word,
    has_letter_boundaries,
)
from chatfilter.domain.models.filter_result import MatchKind
from chatfilter.domain.models.word_category import WordCategory
from chatfilter.domain.services.normalization import Normalizer
from chatfilter.infrastructure.stubs.word_list_source_stub import InMemoryWordListSource

ALL = frozenset(WordCategory)


def _matcher(
    words: dict[WordCategory, tuple[str, ...]] | None = None,
    patterns: dict[WordCategory, tuple[str, ...]] | None = None,
    whitelist: tuple[str, ...] = (),
) -> WordMatcher:
    source = InMemoryWordListSource(words=words, patterns=patterns, whitelist=whitelist)
    store = WordListStore(source)
    store.load()
    matcher = WordMatcher(store)
    matcher.compile()
    return matcher


class TestCompileWord:
    """Tests for the per-word expressions."""

    def test_letters_tolerate_stretching(self) -> None:
        """A single letter matches one copy or three and more."""
        compiled = compile_word("darn", Normalizer())
        assert compiled is not None
        assert compiled.pattern.fullmatch("dddaaarrrnnn")
        assert compiled.pattern.fullmatch("darrrrn")

    def test_two_copies_of_a_single_letter_do_not_match(self) -> None:
        """Two copies read as a different word, not as stretching."""
        compiled = compile_word("god", Normalizer())
        assert compiled is not None
        assert compiled.pattern.fullmatch("gooood")
        assert not compiled.pattern.fullmatch("good")

    def test_double_letters_require_two(self) -> None:
        """A doubled letter in the word needs at least two copies."""
        compiled = compile_word("ass", Normalizer())
        assert compiled is not None
        assert compiled.pattern.fullmatch("ass")
        assert not compiled.pattern.fullmatch("as")
        assert compiled.pattern.fullmatch("assss")

    def test_locator_tolerates_separators(self) -> None:
        """The display locator skips separators between letters."""
        compiled = compile_word("darn", Normalizer())
        assert compiled is not None
        assert compiled.locator.fullmatch("d.a r_n")

    def test_separator_only_word_is_skipped(self) -> None:
        """Words that normalize to nothing cannot be compiled."""
        assert compile_word("...", Normalizer()) is None


class TestHasLetterBoundaries:
    """Tests for the whole-word check."""

    @pytest.mark.parametrize(
        ("text", "start", "end", "expected"),
        [
            ("ass", 0, 3, True),
            ("an ass here", 3, 6, True),
            ("class", 2, 5, False),
            ("asshat", 0, 3, False),
            ("(ass)", 1, 4, True),
            ("1ass2", 1, 4, True),
        ],
    )
    def test_boundaries(self, text: str, start: int, end: int, expected: bool) -> None:
        """Only adjacent letters break a boundary."""
        assert has_letter_boundaries(text, start, end) is expected


class TestWholeWordMatching:
    """Blocked words inside longer words are not matches."""

    @pytest.fixture
    def matcher(self) -> WordMatcher:
        """Matcher with 'ass' and 'hell' configured."""
        return _matcher(
            words={WordCategory.MODERATE: ("ass",), WordCategory.MILD: ("hell",)}
        )

    @pytest.mark.parametrize("message", ["classy", "a classic pass", "hello there"])
    def test_embedded_words_do_not_match(self, matcher: WordMatcher, message: str) -> None:
        """Substrings of benign words are ignored."""
        assert not matcher.match(message, ALL).has_matches

    @pytest.mark.parametrize("message", ["ass", "you ass", "go to hell", "hell."])
    def test_standalone_words_match(self, matcher: WordMatcher, message: str) -> None:
        """Standalone tokens match."""
        assert matcher.match(message, ALL).has_matches

    def test_word_with_doubled_letter_is_a_different_word(self) -> None:
        """"good" is not a stretched "god"."""
        matcher = _matcher(words={WordCategory.MILD: ("god",)})
        assert not matcher.match("good morning", ALL).has_matches
        assert not matcher.match("g.o.o.d morning", ALL).has_matches
        assert matcher.match("oh my gooood", ALL).has_matches

    def test_benign_word_does_not_hide_real_one(self, matcher: WordMatcher) -> None:
        """A later standalone occurrence is still found."""
        result = matcher.match("classy ass", ALL)
        assert [m.source for m in result] == ["ass"]


class TestEvasionResistance:
    """Obfuscated spellings are detected."""

    @pytest.fixture
    def matcher(self) -> WordMatcher:
        """Matcher with 'darn' and 'cope' configured."""
        return _matcher(words={WordCategory.MILD: ("darn", "cope")})

    @pytest.mark.parametrize(
        "message",
        [
            "d.a.r.n",
            "d-a-r-n",
            "d_a_r_n",
            "d*a*r*n",
            "d a r n",
            "dddaaarrrnnn",
            "d4rn",
            "DARN",
            "d\u00e0rn",
            "d\u0336a\u0336r\u0336n\u0336",
        ],
    )
    def test_darn_variants(self, matcher: WordMatcher, message: str) -> None:
        """Separators, stretching, leet, case, accents and zalgo."""
        result = matcher.match(message, {WordCategory.MILD})
        assert [m.source for m in result] == ["darn"]

    def test_cyrillic_homoglyphs(self, matcher: WordMatcher) -> None:
        """Every letter swapped for a Cyrillic look-alike."""
        result = matcher.match("\u0441\u043e\u0440\u0435", {WordCategory.MILD})
        assert [m.source for m in result] == ["cope"]

    def test_word_inside_sentence(self, matcher: WordMatcher) -> None:
        """Obfuscated words in a sentence keep their boundaries."""
        assert matcher.match("well d.a.r.n it all", ALL).has_matches

    def test_trailing_punctuation(self, matcher: WordMatcher) -> None:
        """A trailing '!' does not glue an 'i' onto the word."""
        assert matcher.match("oh darn!", ALL).has_matches


class TestMatchPositions:
    """Offsets and matched text of literal-word matches."""

    def test_leet_word_position_and_text(self) -> None:
        """Literal words are positioned in display text, text taken from the original."""
        matcher = _matcher(words={WordCategory.MILD: ("darn",)})
        (match,) = matcher.match("you are a d4rn fool", ALL).matches

        assert match.kind is MatchKind.WORD
        assert match.source == "darn"
        assert match.category is WordCategory.MILD
        assert (match.start, match.end) == (10, 14)
        assert match.matched_text == "d4rn"

    def test_separated_word_span_covers_separators(self) -> None:
        """The located span includes the inserted separators."""
        matcher = _matcher(words={WordCategory.MILD: ("darn",)})
        (match,) = matcher.match("hey d.a.r.n", ALL).matches
        assert match.matched_text == "d.a.r.n"
        assert (match.start, match.end) == (4, 11)

    def test_matched_text_is_lowercase(self) -> None:
        """Matched text comes from the lowercased original."""
        matcher = _matcher(words={WordCategory.MILD: ("darn",)})
        (match,) = matcher.match("DaRn", ALL).matches
        assert match.matched_text == "darn"

    def test_one_match_per_occurrence(self) -> None:
        """Each occurrence of a word is reported with its own span."""
        matcher = _matcher(words={WordCategory.MILD: ("darn",)})
        result = matcher.match("darn darn darn", ALL)
        assert [(m.start, m.end) for m in result] == [(0, 4), (5, 9), (10, 14)]

    def test_each_spelling_keeps_its_own_text(self) -> None:
        """Occurrences spelled differently report their own original text."""
        matcher = _matcher(words={WordCategory.MILD: ("darn",)})
        result = matcher.match("darn it, d4rn it all", ALL)
        assert [m.matched_text for m in result] == ["darn", "d4rn"]
        assert [(m.start, m.end) for m in result] == [(0, 4), (9, 13)]

    def test_embedded_occurrence_is_not_located(self) -> None:
        """Only whole-word occurrences are reported."""
        matcher = _matcher(words={WordCategory.MODERATE: ("ass",)})
        result = matcher.match("first class ass", ALL)
        assert [(m.start, m.end) for m in result] == [(12, 15)]

    def test_unaligned_message_takes_text_from_display_form(self) -> None:
        """A dropped mark and a decomposed syllable cancel out in length only."""
        matcher = _matcher(words={WordCategory.MILD: ("darn",)})
        (match,) = matcher.match("d\u0301arn \uac00", ALL).matches
        assert match.matched_text == "darn"
        assert (match.start, match.end) == (0, 4)

    def test_phrase_word(self) -> None:
        """Configured phrases match across a space."""
        matcher = _matcher(words={WordCategory.MODERATE: ("go away",)})
        (match,) = matcher.match("please go away now", ALL).matches
        assert match.matched_text == "go away"


class TestPatterns:
    """Custom per-category patterns."""

    def test_pattern_runs_on_normalized_text(self) -> None:
        """Patterns see the collapsed, separator-free text."""
        matcher = _matcher(patterns={WordCategory.MILD: ("b+a+d+",)})
        (match,) = matcher.match("baaaaad", ALL).matches

        assert match.kind is MatchKind.PATTERN
        assert match.source == "b+a+d+"
        assert match.matched_text == "baad"
        assert (match.start, match.end) == (0, 4)

    def test_all_non_overlapping_matches(self) -> None:
        """Every occurrence of a pattern is reported."""
        matcher = _matcher(patterns={WordCategory.MILD: ("bad",)})
        result = matcher.match("bad, bad", ALL)
        assert [(m.start, m.end) for m in result] == [(0, 3), (3, 6)]

    def test_pattern_is_case_insensitive(self) -> None:
        """Configured patterns ignore case even with uppercase sources."""
        matcher = _matcher(patterns={WordCategory.MILD: ("BAD",)})
        assert matcher.match("bad", ALL).has_matches

    def test_patterns_follow_words(self) -> None:
        """Within a category, word matches precede pattern matches."""
        matcher = _matcher(
            words={WordCategory.MILD: ("darn",)},
            patterns={WordCategory.MILD: ("b+a+d+",)},
        )
        result = matcher.match("bad darn", ALL)
        assert [m.kind for m in result] == [MatchKind.WORD, MatchKind.PATTERN]


class TestWhitelist:
    """Whitelist suppression."""

    def test_message_equal_to_whitelisted_phrase(self) -> None:
        """The whitelisted phrase itself produces no match."""
        matcher = _matcher(words={WordCategory.MILD: ("hell",)}, whitelist=("hell yeah",))
        assert not matcher.match("hell yeah", ALL).has_matches

    def test_whitelist_needs_phrase_in_message(self) -> None:
        """Without the phrase present, the word still matches."""
        matcher = _matcher(words={WordCategory.MILD: ("hell",)}, whitelist=("hell yeah",))
        assert matcher.match("hell no", ALL).has_matches

    def test_whitelisted_word_is_never_reported(self) -> None:
        """A word that is also whitelisted never matches."""
        matcher = _matcher(words={WordCategory.SLURS: ("xyzzy",)}, whitelist=("xyzzy",))
        assert not matcher.match("xyzzy is a magic word", ALL).has_matches

    def test_whitelisted_phrase_hides_contained_word(self) -> None:
        """A whitelisted phrase hides the blocked word inside it."""
        matcher = _matcher(words={WordCategory.MILD: ("cock",)}, whitelist=("cock pit",))
        assert not matcher.match("the cock pit", ALL).has_matches

    def test_whitelist_applies_to_patterns(self) -> None:
        """Pattern matches are suppressed too."""
        matcher = _matcher(patterns={WordCategory.MILD: ("thorp",)}, whitelist=("scunthorpe",))
        assert not matcher.match("Scunthorpe", ALL).has_matches


class TestCategorySelection:
    """Only requested categories are checked."""

    @pytest.fixture
    def matcher(self) -> WordMatcher:
        """Matcher with one word in each of two categories."""
        return _matcher(
            words={WordCategory.EXTREME: ("frak",), WordCategory.MILD: ("darn",)}
        )

    def test_unrequested_category_skipped(self, matcher: WordMatcher) -> None:
        """Mild words are ignored when only extreme is requested."""
        result = matcher.match("darn it", {WordCategory.EXTREME})
        assert not result.has_matches

    def test_empty_category_set(self, matcher: WordMatcher) -> None:
        """No categories means no matches."""
        assert not matcher.match("darn frak", set()).has_matches

    def test_empty_message(self, matcher: WordMatcher) -> None:
        """None and empty messages produce empty results."""
        assert not matcher.match(None, ALL).has_matches
        assert not matcher.match("", ALL).has_matches

    def test_category_order(self, matcher: WordMatcher) -> None:
        """Matches follow category order regardless of message order."""
        result = matcher.match("darn frak", ALL)
        assert [m.category for m in result] == [WordCategory.EXTREME, WordCategory.MILD]

    def test_word_in_two_categories_reported_twice(self) -> None:
        """No cross-category deduplication."""
        matcher = _matcher(
            words={WordCategory.MODERATE: ("darn",), WordCategory.MILD: ("darn",)}
        )
        result = matcher.match("darn", ALL)
        assert [m.category for m in result] == [WordCategory.MODERATE, WordCategory.MILD]


class TestCompiledState:
    """compile() controls which lists are used."""

    def test_uncompiled_matcher_compiles_on_first_match(self) -> None:
        """Matching before compile() compiles lazily."""
        store = WordListStore(InMemoryWordListSource(words={WordCategory.MILD: ("darn",)}))
        store.load()
        matcher = WordMatcher(store)

        assert not matcher.is_compiled
        assert matcher.match("darn", ALL).has_matches
        assert matcher.is_compiled

    def test_store_reload_needs_recompile(self) -> None:
        """Until compile() runs, the previous lists stay in use."""
        source = InMemoryWordListSource(words={WordCategory.MILD: ("darn",)})
        store = WordListStore(source)
        store.load()
        matcher = WordMatcher(store)
        matcher.compile()

        source.set_words(WordCategory.MILD, ("heck",))
        store.load()
        assert matcher.match("darn", ALL).has_matches
        assert not matcher.match("heck", ALL).has_matches

        matcher.compile()
        assert not matcher.match("darn", ALL).has_matches
        assert matcher.match("heck", ALL).has_matches

    def test_whitelist_comes_from_compiled_snapshot(self) -> None:
        """The whitelist in use belongs to the compiled lists."""
        source = InMemoryWordListSource(words={WordCategory.MILD: ("hell",)})
        store = WordListStore(source)
        store.load()
        matcher = WordMatcher(store)
        state = matcher.compile()

        assert state.snapshot is store.snapshot
        source.set_whitelist(("hell yeah",))
        store.load()
        assert matcher.match("hell yeah", ALL).has_matches
