"""Ports (Protocols) the application layer depends on."""

from chatfilter.application.ports.filter_metrics import FilterMetricsProtocol
from chatfilter.application.ports.word_list_source import (
    RawCategoryList,
    WordListSourceProtocol,
)

__all__: list[str] = [
    "FilterMetricsProtocol",
    "RawCategoryList",
    "WordListSourceProtocol",
]
