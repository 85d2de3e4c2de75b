"""
Console formatter and color utilities.

JSON is the production format. The console rendering is meant for local
development and prints ``ts | LEVEL | caller | msg key=value ...`` with the
stack trace, if any, on the following lines.
"""

from __future__ import annotations

from datetime import datetime, timezone

from structlog.typing import EventDict

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "caller": "\033[35m",
    "key": "\033[34m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Handles human-readable console log rendering (fixed width, right-aligned)."""

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        "INFO": "\x1b[32m",
        "WARN": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "PANIC": "\x1b[1;31m",
        "FATAL": "\x1b[1;31m",
    }

    EXCLUDED_KEYS = {"level", "msg", "ts", "caller", "stacktrace"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    LEVEL_WIDTH = 5
    CALLER_WIDTH = 32
    SEPARATOR = " | "

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            if width <= 3:
                text = text[-width:]
            else:
                text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                # fromisoformat only understands microseconds
                head = raw_timestamp.rstrip("Z").partition(".")[0]
                dt = datetime.fromisoformat(head).replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def _colorize_level(cls, text: str, level_upper: str, use_color: bool) -> str:
        if not use_color:
            return text
        color = cls._LEVEL_COLORS.get(level_upper)
        if not color:
            return text
        return f"{color}{text}{cls._RESET}"

    @staticmethod
    def _maybe_color(text: str, color: str, use_color: bool) -> str:
        if not use_color:
            return text
        return colorize(text, color)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = True) -> str:
        """Format an event dict into an aligned string."""
        level_upper = str(event_dict.get("level", "info")).upper()
        message_text = str(event_dict.get("msg", ""))
        caller = str(event_dict.get("caller", ""))

        extras = []
        for k, v in event_dict.items():
            if k in cls.EXCLUDED_KEYS:
                continue
            extras.append(f"{cls._maybe_color(k, 'key', use_color)}={cls._maybe_color(str(v), 'dim', use_color)}")
        if extras:
            message_text = f"{message_text} " + " ".join(extras)

        line = "".join(
            [
                cls._maybe_color(
                    cls._fit_right(cls._format_timestamp(event_dict.get("ts")), cls.TIMESTAMP_WIDTH),
                    "timestamp",
                    use_color,
                ),
                cls.SEPARATOR,
                cls._colorize_level(cls._fit_right(level_upper, cls.LEVEL_WIDTH), level_upper, use_color),
                cls.SEPARATOR,
                cls._maybe_color(cls._fit_right(caller, cls.CALLER_WIDTH), "caller", use_color),
                cls.SEPARATOR,
                message_text,
            ]
        )

        stack = event_dict.get("stacktrace")
        if stack:
            line = f"{line}\n{stack}"
        return line
