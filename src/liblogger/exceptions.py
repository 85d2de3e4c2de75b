"""
Exception hierarchy for the logging library.

Only configuration mistakes and invalid error codes raise. Failures of
the output streams are swallowed by the sinks, and the Panic payload lives
with the engine adapter because it is a control-flow signal rather than a library error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LoggerError(Exception):
    """Base class of every error raised by liblogger."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(LoggerError):
    """Invalid logger configuration."""

    pass


class UnknownLevelError(ConfigurationError, ValueError):
    """A severity level name or number that does not exist.

    Also a ``ValueError`` so pydantic reports it as a validation error.
    """

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Unknown log level {value!r}",
            code="UNKNOWN_LEVEL",
            details={"value": value},
        )


class InvalidCodeError(LoggerError, ValueError):
    """An error code that is not an unsigned 64-bit integer."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Error code must be an integer in [0, 2**64), got {value!r}",
            code="INVALID_CODE",
            details={"value": value},
        )
