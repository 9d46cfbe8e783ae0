"""Exceptions raised by the location obfuscator."""

from typing import Any


class InvalidArgument(ValueError):
    """Raised when obfuscation inputs are malformed.

    This is a caller bug: fail fast rather than fall back to a default
    key or radius, which would publish a predictable or exact location.

    Attributes:
        argument: Name of the offending parameter
        value: The rejected value (omitted from the message for location keys)
    """

    def __init__(self, argument: str, reason: str, value: Any = None):
        self.argument = argument
        self.reason = reason
        self.value = value
        super().__init__(f"Invalid {argument}: {reason}")
