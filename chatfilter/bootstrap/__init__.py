"""Bootstrap wiring for chatfilter."""

from chatfilter.bootstrap.filter_service import create_filter_service

__all__ = ["create_filter_service"]
