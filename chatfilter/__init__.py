"""
chatfilter - Real-time chat moderation core

Normalizes player-submitted text against common evasion tricks
(look-alike characters, leet speak, separators, stretched letters,
zalgo decoration), matches it against category-tagged word lists and
patterns, and censors only the offending spans of the original message.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
