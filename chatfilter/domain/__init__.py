"""Domain layer for chatfilter.

Pure models and text transforms. Nothing in this package performs I/O.
"""
