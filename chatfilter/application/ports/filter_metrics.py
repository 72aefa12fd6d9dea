"""Filter metrics port.

Lets the filter service report activity without depending on a metrics
backend. The service works without one.
"""

from __future__ import annotations

from typing import Protocol

from chatfilter.domain.models.filter_result import FilterResult
from chatfilter.domain.models.word_list import LoadReport


class FilterMetricsProtocol(Protocol):
    """Protocol for recording filter activity."""

    def record_analysis(self, result: FilterResult) -> None:
        """Record one analyzed message and its matches."""
        ...

    def record_censored(self) -> None:
        """Record that a message was rewritten by censoring."""
        ...

    def record_load(self, report: LoadReport) -> None:
        """Record the outcome of a word list load."""
        ...
