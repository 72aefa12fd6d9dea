"""Configuration for chatfilter."""

from chatfilter.config.filter_config import (
    DEFAULT_CONFIG_PATH,
    FilterConfig,
    load_filter_config,
)

__all__: list[str] = ["DEFAULT_CONFIG_PATH", "FilterConfig", "load_filter_config"]
