"""Filter configuration errors."""

from __future__ import annotations

from chatfilter.domain.exceptions import ChatFilterError


class FilterConfigurationError(ChatFilterError):
    """Raised when a filter setting has an unusable value.

    Attributes:
        setting: Name of the offending setting.
        value: The rejected value.
        reason: Why the value was rejected.
    """

    def __init__(
        self,
        setting: str,
        value: object,
        reason: str,
        message: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            setting: Name of the offending setting.
            value: The rejected value.
            reason: Why the value was rejected.
            message: Optional custom message.
        """
        self.setting = setting
        self.value = value
        self.reason = reason

        if message is None:
            message = f"Invalid value {value!r} for {setting}: {reason}"

        super().__init__(message)
