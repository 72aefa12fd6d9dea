"""Domain errors for chatfilter.

All exceptions inherit from ChatFilterError.
"""

from chatfilter.domain.errors.configuration import FilterConfigurationError
from chatfilter.domain.errors.word_list import (
    UnknownCategoryError,
    WordListError,
    WordListSourceError,
)

__all__: list[str] = [
    "FilterConfigurationError",
    "UnknownCategoryError",
    "WordListError",
    "WordListSourceError",
]
