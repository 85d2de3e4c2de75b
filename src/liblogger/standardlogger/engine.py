"""
Structured-logging engine binding.

``StandardLog`` only talks to the ``Engine`` protocol. ``StructlogEngine``
implements it on top of structlog: a ``BoundLoggerBase`` subclass that
wraps a routing sink with its own processor chain, so building a logger
never touches the global ``structlog.configure`` state.
"""

from __future__ import annotations

import time
from typing import Any, Mapping, Protocol, runtime_checkable

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from liblogger.logger import Level

from .sinks import BaseSink

LEVEL_KEY = "level"
TIME_KEY = "ts"
CALLER_KEY = "caller"
MESSAGE_KEY = "msg"
STACKTRACE_KEY = "stacktrace"

_HEAD_KEYS = (LEVEL_KEY, TIME_KEY, CALLER_KEY, MESSAGE_KEY)


@runtime_checkable
class Engine(Protocol):
    """Capabilities the adapter needs from a structured-logging engine."""

    def write(
        self,
        level: Level,
        msg: str,
        fields: Mapping[str, Any] | None = None,
        *,
        caller: str | None = None,
        stack: str | None = None,
    ) -> None: ...

    def bind(self, **fields: Any) -> Engine: ...

    def enabled(self, level: Level) -> bool: ...

    def sync(self) -> None: ...

    def core(self) -> BaseSink: ...


# =============================================================================
# Structlog Processors
# =============================================================================


def rfc3339_nano(ns: int) -> str:
    """Format epoch nanoseconds as RFC 3339 UTC, trailing fraction zeros trimmed."""
    seconds, nanos = divmod(ns, 1_000_000_000)
    base = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(seconds))
    frac = f"{nanos:09d}".rstrip("0")
    return f"{base}.{frac}Z" if frac else f"{base}Z"


def add_log_level(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the level name, e.g. ``warn`` (not structlog's ``warning``)."""
    event_dict[LEVEL_KEY] = method_name
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add RFC 3339 timestamp with nanoseconds.

    Sortable, human readable and understood by line-oriented log
    shippers without custom parsing rules.
    """
    event_dict[TIME_KEY] = rfc3339_nano(time.time_ns())
    return event_dict


def order_keys(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Put level, ts, caller and msg first and the stack trace last."""
    ordered = {key: event_dict.pop(key) for key in _HEAD_KEYS if key in event_dict}
    stack = event_dict.pop(STACKTRACE_KEY, None)
    ordered.update(event_dict)
    if stack is not None:
        ordered[STACKTRACE_KEY] = stack
    return ordered


def pass_to_sink(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> tuple[tuple[EventDict], dict]:
    """Hand the event dict to the sink unrendered; sinks own their encoding."""
    return (event_dict,), {}


def default_processors() -> list[Processor]:
    return [
        add_log_level,
        add_timestamp,
        order_keys,
        pass_to_sink,
    ]


# =============================================================================
# Engine
# =============================================================================


class StructlogEngine(structlog.BoundLoggerBase):
    """structlog-backed ``Engine`` writing to a ``BaseSink``."""

    _logger: BaseSink

    @classmethod
    def wrap(cls, core: BaseSink, context: Mapping[str, Any] | None = None) -> StructlogEngine:
        """Wrap ``core`` with ``context`` bound as persistent fields."""
        return cls(core, default_processors(), dict(context or {}))

    def write(
        self,
        level: Level,
        msg: str,
        fields: Mapping[str, Any] | None = None,
        *,
        caller: str | None = None,
        stack: str | None = None,
    ) -> None:
        if not self._logger.enabled(level):
            return

        event_kw = dict(fields) if fields else {}
        if caller is not None:
            event_kw[CALLER_KEY] = caller
        if stack is not None:
            event_kw[STACKTRACE_KEY] = stack
        event_kw[MESSAGE_KEY] = msg

        try:
            # event=None leaves user keys named "event" untouched.
            args, kw = self._process_event(level.method_name, None, event_kw)
        except structlog.DropEvent:
            return
        getattr(self._logger, level.method_name)(*args, **kw)

    def enabled(self, level: Level) -> bool:
        return self._logger.enabled(level)

    def sync(self) -> None:
        self._logger.sync()

    def core(self) -> BaseSink:
        return self._logger
