"""Prometheus metrics for chatfilter."""

from chatfilter.infrastructure.monitoring.filter_metrics import FilterMetricsCollector

__all__: list[str] = ["FilterMetricsCollector"]
