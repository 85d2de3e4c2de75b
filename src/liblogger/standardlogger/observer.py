"""
In-memory sink that records entries for assertions in tests.

Usage::

    sink, logs = observer.new(Level.INFO)
    log = StandardLog(StructlogEngine.wrap(TeeSink(sink, get_core(other))))
    log.info("hello")
    assert logs.all()[0].message == "hello"
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from structlog.typing import EventDict

from liblogger.logger import Level

from .sinks import BaseSink, LevelEnabler, level_enabler


@dataclass(frozen=True)
class LoggedEntry:
    level: Level
    message: str
    context: dict[str, Any] = field(default_factory=dict)


class ObservedLogs:
    """Thread-safe collection of observed entries."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[LoggedEntry] = []

    def add(self, entry: LoggedEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def all(self) -> list[LoggedEntry]:
        with self._lock:
            return list(self._entries)

    def take_all(self) -> list[LoggedEntry]:
        with self._lock:
            entries, self._entries = self._entries, []
        return entries

    def filter_message(self, message: str) -> list[LoggedEntry]:
        return [entry for entry in self.all() if entry.message == message]

    def filter_level(self, level: Level) -> list[LoggedEntry]:
        return [entry for entry in self.all() if entry.level == level]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class ObserverSink(BaseSink):
    def __init__(self, enabler: LevelEnabler, logs: ObservedLogs):
        self._enabler = enabler
        self._logs = logs

    def enabled(self, level: Level) -> bool:
        return self._enabler(level)

    def emit(self, level: Level, event_dict: EventDict) -> None:
        context = dict(event_dict)
        message = str(context.pop("msg", ""))
        self._logs.add(LoggedEntry(level=level, message=message, context=context))


def new(enabler: Level | LevelEnabler = Level.INFO) -> tuple[ObserverSink, ObservedLogs]:
    """Create an observer sink and the collection it records into."""
    if isinstance(enabler, Level):
        enabler = level_enabler(enabler)
    logs = ObservedLogs()
    return ObserverSink(enabler, logs), logs
