"""Base exception classes for the chatfilter domain layer."""


class ChatFilterError(Exception):
    """Base exception for all chatfilter errors.

    All domain-specific exceptions MUST inherit from this class so
    callers can catch filter failures without catching everything.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
