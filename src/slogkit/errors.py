"""Custom exceptions for slogkit.

Encoding itself never raises for bad values (those are rendered inline as
``!ERROR:`` markers). These exceptions cover misconfiguration and
programming errors, which are not recoverable at runtime.
"""


class SlogkitError(Exception):
    """Base exception for slogkit errors."""


class ConfigError(SlogkitError, ValueError):
    """Raised when a logging configuration value is invalid.

    Attributes:
        field: Name of the offending configuration field.
        value: The rejected value.
    """

    def __init__(self, field: str, value: object, reason: str) -> None:
        """Initialize the exception.

        Args:
            field: Name of the offending configuration field.
            value: The rejected value.
            reason: Human-readable explanation.
        """
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class KindError(SlogkitError, TypeError):
    """Raised when a value of an unexpected kind reaches a formatter.

    This indicates a bug in the caller or in slogkit, not bad log data.
    """
