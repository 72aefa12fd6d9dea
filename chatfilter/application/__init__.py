"""Application layer for chatfilter: ports and orchestrating services."""
