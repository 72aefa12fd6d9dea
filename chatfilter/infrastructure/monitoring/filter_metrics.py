"""Filter metrics for Prometheus exposition.

Counters for analyzed messages, matches per category, censored messages
and skipped patterns, plus a gauge of loaded word list sizes.
"""

from __future__ import annotations

import os

from prometheus_client import CollectorRegistry, Counter, Gauge

from chatfilter.application.ports.filter_metrics import FilterMetricsProtocol
from chatfilter.domain.models.filter_result import FilterResult
from chatfilter.domain.models.word_list import LoadReport


class FilterMetricsCollector(FilterMetricsProtocol):
    """Collects chat filter metrics for Prometheus.

    Attributes:
        messages_analyzed_total: Counter of analyze calls.
        matches_total: Counter of matches by category and kind.
        messages_censored_total: Counter of messages rewritten by censoring.
        pattern_load_failures_total: Counter of patterns skipped at load.
        word_list_entries: Gauge of loaded words, patterns and whitelist.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize filter metrics collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "chatfilter")

        self.messages_analyzed_total = Counter(
            name="chatfilter_messages_analyzed_total",
            documentation="Total messages analyzed for blocked content",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.matches_total = Counter(
            name="chatfilter_matches_total",
            documentation="Total blocked-content matches by category and kind",
            labelnames=["category", "kind", "service", "environment"],
            registry=self._registry,
        )

        self.messages_censored_total = Counter(
            name="chatfilter_messages_censored_total",
            documentation="Total messages rewritten by censoring",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.pattern_load_failures_total = Counter(
            name="chatfilter_pattern_load_failures_total",
            documentation="Total configured patterns skipped because they failed to compile",
            labelnames=["category", "service", "environment"],
            registry=self._registry,
        )

        self.word_list_entries = Gauge(
            name="chatfilter_word_list_entries",
            documentation="Loaded word list entries by kind",
            labelnames=["kind", "service", "environment"],
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Registry the metrics are registered in."""
        return self._registry

    def record_analysis(self, result: FilterResult) -> None:
        """Record one analyzed message and each of its matches."""
        self.messages_analyzed_total.labels(
            service=self._service_name,
            environment=self._environment,
        ).inc()
        for match in result.matches:
            self.matches_total.labels(
                category=match.category.value,
                kind=match.kind.value,
                service=self._service_name,
                environment=self._environment,
            ).inc()

    def record_censored(self) -> None:
        """Record one censored message."""
        self.messages_censored_total.labels(
            service=self._service_name,
            environment=self._environment,
        ).inc()

    def record_load(self, report: LoadReport) -> None:
        """Record list sizes and skipped patterns from a load."""
        sizes = {
            "words": report.snapshot.total_word_count,
            "patterns": report.snapshot.total_pattern_count,
            "whitelist": report.snapshot.whitelist_count,
        }
        for kind, size in sizes.items():
            self.word_list_entries.labels(
                kind=kind,
                service=self._service_name,
                environment=self._environment,
            ).set(size)

        for failure in report.failures:
            self.pattern_load_failures_total.labels(
                category=failure.category.value,
                service=self._service_name,
                environment=self._environment,
            ).inc()
