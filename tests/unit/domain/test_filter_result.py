"""Unit tests for MatchedWord, FilterResult and word list snapshots."""

import re

import pytest

from chatfilter.domain.models.filter_result import FilterResult, MatchedWord, MatchKind
from chatfilter.domain.models.word_category import WordCategory
from chatfilter.domain.models.word_list import (
    CategoryWordList,
    LoadReport,
    PatternLoadFailure,
    WordListSnapshot,
)


def _match(text: str, category: WordCategory, start: int = 0) -> MatchedWord:
    return MatchedWord(
        matched_text=text,
        source=text,
        category=category,
        start=start,
        end=start + len(text),
    )


class TestMatchedWord:
    """Tests for MatchedWord."""

    def test_is_immutable(self) -> None:
        """Matches are frozen."""
        match = _match("darn", WordCategory.MILD)
        with pytest.raises(AttributeError):
            match.start = 3  # type: ignore[misc]

    def test_defaults_to_word_kind(self) -> None:
        """Kind defaults to WORD."""
        assert _match("darn", WordCategory.MILD).kind is MatchKind.WORD

    def test_length(self) -> None:
        """Length is the matched text's length."""
        assert _match("darn", WordCategory.MILD).length == 4

    def test_rejects_negative_start(self) -> None:
        """Spans must be well-formed."""
        with pytest.raises(ValueError):
            MatchedWord("x", "x", WordCategory.MILD, start=-1, end=0)

    def test_rejects_end_before_start(self) -> None:
        """End cannot precede start."""
        with pytest.raises(ValueError):
            MatchedWord("x", "x", WordCategory.MILD, start=5, end=2)


class TestFilterResult:
    """Tests for FilterResult derived views."""

    @pytest.fixture
    def result(self) -> FilterResult:
        """Result with one extreme and two mild matches."""
        return FilterResult(
            original_message="irrelevant",
            matches=(
                _match("heck", WordCategory.MILD),
                _match("frak", WordCategory.EXTREME, start=5),
                _match("darn", WordCategory.MILD, start=10),
            ),
        )

    def test_empty(self) -> None:
        """Empty results report no matches."""
        result = FilterResult.empty(None)
        assert result.original_message == ""
        assert not result.has_matches
        assert len(result) == 0

    def test_has_matches(self, result: FilterResult) -> None:
        """has_matches is derived from the match list."""
        assert result.has_matches
        assert len(result) == 3

    def test_matches_in_category(self, result: FilterResult) -> None:
        """Category view keeps match order."""
        mild = result.matches_in(WordCategory.MILD)
        assert [m.matched_text for m in mild] == ["heck", "darn"]

    def test_contains_category(self, result: FilterResult) -> None:
        """Membership queries by category."""
        assert result.contains_category(WordCategory.EXTREME)
        assert not result.contains_category(WordCategory.SLURS)

    def test_contains_any(self, result: FilterResult) -> None:
        """Membership queries by category set."""
        assert result.contains_any({WordCategory.SLURS, WordCategory.MILD})
        assert not result.contains_any({WordCategory.SLURS, WordCategory.MODERATE})

    def test_categories_in_first_match_order(self, result: FilterResult) -> None:
        """Categories are deduplicated in first-seen order."""
        assert result.categories == (WordCategory.MILD, WordCategory.EXTREME)

    def test_iterates_matches(self, result: FilterResult) -> None:
        """Iterating yields the matches."""
        assert list(result) == list(result.matches)


class TestWordListSnapshot:
    """Tests for WordListSnapshot and LoadReport."""

    def test_empty_snapshot(self) -> None:
        """Nothing configured means zero counts and empty lists."""
        snapshot = WordListSnapshot.empty()
        assert snapshot.total_word_count == 0
        assert snapshot.total_pattern_count == 0
        assert snapshot.whitelist_count == 0
        assert snapshot.for_category(WordCategory.MILD).words == frozenset()

    def test_counts(self) -> None:
        """Counts sum over categories."""
        snapshot = WordListSnapshot.build(
            {
                WordCategory.MILD: CategoryWordList(
                    words=frozenset({"darn", "heck"}),
                    patterns=(re.compile("b+a+d+"),),
                ),
                WordCategory.EXTREME: CategoryWordList(words=frozenset({"frak"})),
            },
            whitelist=frozenset({"darnit"}),
        )
        assert snapshot.total_word_count == 3
        assert snapshot.total_pattern_count == 1
        assert snapshot.whitelist_count == 1

    def test_build_copies_mapping(self) -> None:
        """Later changes to the source mapping do not leak in."""
        lists = {WordCategory.MILD: CategoryWordList(words=frozenset({"darn"}))}
        snapshot = WordListSnapshot.build(lists, frozenset())
        lists[WordCategory.EXTREME] = CategoryWordList(words=frozenset({"frak"}))
        assert snapshot.total_word_count == 1

    def test_lists_are_read_only(self) -> None:
        """The published mapping cannot be mutated."""
        snapshot = WordListSnapshot.build({}, frozenset())
        with pytest.raises(TypeError):
            snapshot.lists[WordCategory.MILD] = CategoryWordList()  # type: ignore[index]

    def test_load_report_failures(self) -> None:
        """has_failures reflects skipped patterns."""
        failure = PatternLoadFailure(WordCategory.MILD, "(", "missing )")
        assert LoadReport(WordListSnapshot.empty(), (failure,)).has_failures
        assert not LoadReport(WordListSnapshot.empty()).has_failures
