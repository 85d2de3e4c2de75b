"""
Log sink abstractions and concrete implementations.

A sink is an output destination plus the predicate deciding which levels
it accepts. ``TeeSink`` fans an entry out to several sinks; each one
re-checks its own predicate, so disjoint predicates route every entry to
exactly one destination.
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from functools import partialmethod
from typing import Any, Callable, Literal, TextIO

import orjson
from structlog.typing import EventDict

from liblogger.logger import Level

from .formatters import ConsoleFormatter

LogFormat = Literal["console", "json"]
LevelEnabler = Callable[[Level], bool]


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(
        v,
        default=default,
        option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC | orjson.OPT_NON_STR_KEYS,
    ).decode()


# =============================================================================
# Level Enablers
# =============================================================================


def level_enabler(minimum: Level) -> LevelEnabler:
    def enabled(lvl: Level) -> bool:
        return lvl >= minimum

    return enabled


def low_priority_enabler(minimum: Level) -> LevelEnabler:
    """Levels strictly below ERROR that also pass the minimum."""

    def enabled(lvl: Level) -> bool:
        return lvl < Level.ERROR and lvl >= minimum

    return enabled


def high_priority_enabler(minimum: Level) -> LevelEnabler:
    """ERROR and above, gated by the minimum."""

    def enabled(lvl: Level) -> bool:
        return lvl >= Level.ERROR and lvl >= minimum

    return enabled


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks.

    Sinks double as the logger wrapped by the structlog engine: the
    engine calls the method named after the level (``info``, ``warn``,
    ...) with the processed event dict.
    """

    @abstractmethod
    def enabled(self, level: Level) -> bool:
        """Whether entries of ``level`` are accepted."""
        ...

    @abstractmethod
    def emit(self, level: Level, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    def sync(self) -> None:
        """Flush buffered output."""

    def close(self) -> None:
        """Close the sink and release resources."""
        self.sync()

    def write(self, level: Level, event_dict: EventDict) -> None:
        if self.enabled(level):
            self.emit(level, event_dict)

    info = partialmethod(write, Level.INFO)
    warn = partialmethod(write, Level.WARN)
    error = partialmethod(write, Level.ERROR)
    panic = partialmethod(write, Level.PANIC)
    fatal = partialmethod(write, Level.FATAL)


class StdioSink(BaseSink):
    """Standard I/O sink with configurable format.

    Writes are serialized with a lock so records from concurrent callers
    never interleave.

    Args:
        enabler: Level predicate of this sink
        fmt: Output format - "json" (one object per line) or "console"
        stream: Output stream (default: stderr)
    """

    def __init__(self, enabler: LevelEnabler, fmt: LogFormat = "json", stream: TextIO | None = None):
        self._enabler = enabler
        self._fmt = fmt
        self._stream = stream or sys.stderr
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream

    def enabled(self, level: Level) -> bool:
        return self._enabler(level)

    def emit(self, level: Level, event_dict: EventDict) -> None:
        if self._fmt == "json":
            output = orjson_dumps(event_dict)
        else:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            output = ConsoleFormatter.format(event_dict, use_color=use_color)

        with self._lock:
            self._stream.write(output + "\n")
            self._stream.flush()

    def sync(self) -> None:
        with self._lock:
            self._stream.flush()

    def close(self) -> None:
        # Never close the process-wide stdio streams
        self.sync()


class TeeSink(BaseSink):
    """Routing core duplicating entries to every wrapped sink."""

    def __init__(self, *sinks: BaseSink):
        self._sinks = list(sinks)

    @property
    def sinks(self) -> list[BaseSink]:
        return list(self._sinks)

    def enabled(self, level: Level) -> bool:
        return any(sink.enabled(level) for sink in self._sinks)

    def emit(self, level: Level, event_dict: EventDict) -> None:
        for sink in self._sinks:
            try:
                sink.write(level, event_dict)
            except Exception:
                pass  # A broken sink must not break the others or the caller

    def sync(self) -> None:
        errors: list[Exception] = []
        for sink in self._sinks:
            try:
                sink.sync()
            except Exception as exc:
                errors.append(exc)
        if errors:
            raise errors[0]

    def close(self) -> None:
        for sink in self._sinks:
            sink.close()


def level_of(sink: BaseSink) -> Level | None:
    """Lowest level accepted by ``sink``, or None if it accepts nothing."""
    for lvl in Level:
        if sink.enabled(lvl):
            return lvl
    return None
