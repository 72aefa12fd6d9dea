"""Application services for chatfilter."""

from chatfilter.application.services.message_filter_service import (
    FilterStats,
    MessageFilterService,
    ModerationOutcome,
    ModerationVerdict,
)
from chatfilter.application.services.word_list_store import WordListStore
from chatfilter.application.services.word_matcher import WordMatcher

__all__: list[str] = [
    "FilterStats",
    "MessageFilterService",
    "ModerationOutcome",
    "ModerationVerdict",
    "WordListStore",
    "WordMatcher",
]
