"""
Severity levels.

PANIC sits between ERROR and FATAL. It is signaled by raising a payload
rather than by writing directly, see ``Log.panic_logger``.
"""

from __future__ import annotations

from enum import IntEnum

from liblogger.exceptions import UnknownLevelError


class Level(IntEnum):
    INFO = 0
    WARN = 1
    ERROR = 2
    PANIC = 3
    FATAL = 4

    @property
    def method_name(self) -> str:
        """Lowercase name used as the ``level`` value of an entry."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: Level | int | str) -> Level:
        """Parse a level from a member, an int or a case-insensitive name.

        ``"warning"`` and ``"critical"`` are accepted as aliases so values
        taken from stdlib-style configuration work unchanged.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise UnknownLevelError(value) from None

        name = str(value).strip().upper()
        name = _ALIASES.get(name, name)
        try:
            return cls[name]
        except KeyError:
            raise UnknownLevelError(value) from None


_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}
