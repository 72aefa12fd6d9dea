"""Domain models for chatfilter."""

from chatfilter.domain.models.filter_level import FilterLevel
from chatfilter.domain.models.filter_result import FilterResult, MatchedWord, MatchKind
from chatfilter.domain.models.word_category import WordCategory
from chatfilter.domain.models.word_list import (
    CategoryWordList,
    LoadReport,
    PatternLoadFailure,
    WordListSnapshot,
)

__all__: list[str] = [
    "CategoryWordList",
    "FilterLevel",
    "FilterResult",
    "LoadReport",
    "MatchKind",
    "MatchedWord",
    "PatternLoadFailure",
    "WordCategory",
    "WordListSnapshot",
]
