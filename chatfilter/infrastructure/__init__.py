"""Infrastructure adapters for chatfilter (file sources, logging, metrics)."""
