"""Word list errors.

Raised while reading or resolving word list configuration. None of these
are raised from the per-message filtering path.
"""

from __future__ import annotations

from chatfilter.domain.exceptions import ChatFilterError


class WordListError(ChatFilterError):
    """Base error for word list configuration problems."""

    pass


class WordListSourceError(WordListError):
    """Raised when a word list source cannot be read or is malformed.

    A missing category file is not an error (it loads as empty); an
    unreadable file, a YAML syntax error or a structurally wrong document
    is.

    Attributes:
        source: Identifier of the offending source (usually a file path).
        reason: Why the source could not be used.
    """

    def __init__(
        self,
        source: str,
        reason: str,
        message: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            source: Identifier of the offending source.
            reason: Why the source could not be used.
            message: Optional custom message (auto-generated if not provided).
        """
        self.source = source
        self.reason = reason

        if message is None:
            message = f"Word list source {source} is invalid: {reason}"

        super().__init__(message)


class UnknownCategoryError(WordListError):
    """Raised when a category key does not name a known WordCategory.

    Attributes:
        key: The key that could not be resolved.
    """

    def __init__(self, key: str, message: str | None = None) -> None:
        """Initialize the error.

        Args:
            key: The unresolvable category key.
            message: Optional custom message.
        """
        self.key = key

        if message is None:
            message = f"Unknown word category: {key!r}"

        super().__init__(message)
