"""
structlog-based implementation of the ``Log`` contract.

Entries below ERROR are written to stdout and ERROR and above to stderr,
one JSON object per line. Each logger carries its labels as persistent
fields plus a ``tags`` list of the label keys.

PANIC is signaled by raising a ``PanicContainer``. A ``panic_logger()``
block up the stack writes the payload as a PANIC entry and re-raises it,
so the exception keeps propagating exactly as if nothing had observed it.
"""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Optional, TextIO

from liblogger.config import LoggerSettings
from liblogger.exceptions import InvalidCodeError
from liblogger.logger import Fields, Labels, Level, Log

from .engine import Engine, StructlogEngine
from .sinks import BaseSink, StdioSink, TeeSink, high_priority_enabler, low_priority_enabler
from .util import (
    TAGS_KEY,
    caller_frame,
    exception_stack,
    frame_caller,
    frame_stack,
    get_labels_as_engine_fields,
    get_labels_keys,
    get_level_as_engine_level,
    get_logger_fields_as_engine_fields,
    traceback_caller,
)

CODE_KEY = "code"
MAX_CODE = 2**64 - 1


def check_code(code: Any) -> int:
    """Return ``code`` if it is an unsigned 64-bit integer, else raise ``InvalidCodeError``."""
    if isinstance(code, bool) or not isinstance(code, int) or not 0 <= code <= MAX_CODE:
        raise InvalidCodeError(code)
    return code


class PanicContainer(Exception):
    """Payload raised by ``Log.panic``/``Log.panicw``.

    Carries the message, error code and fields of the panic call together
    with the call site, so a recovery point further up the stack can
    write the entry with the original context.
    """

    def __init__(
        self,
        msg: str,
        code: int,
        fields: Optional[Mapping[str, Any]] = None,
        *,
        caller: Optional[str] = None,
        stack: Optional[str] = None,
    ) -> None:
        super().__init__(msg)
        self.msg = msg
        self.code = check_code(code)
        self.fields = Fields(fields or {})
        self.caller = caller
        self.stack = stack
        self.consumed = False


# =============================================================================
# Options
# =============================================================================


@dataclass
class LoggerOptions:
    settings: Optional[LoggerSettings] = None
    log_level: Optional[Level | int] = None
    stdout: Optional[TextIO] = None
    stderr: Optional[TextIO] = None
    exit_func: Callable[[int], Any] = os._exit


Option = Callable[[LoggerOptions], None]


def with_log_level(log_level: Level | int) -> Option:
    """Set the minimum level, overriding settings."""

    def apply(options: LoggerOptions) -> None:
        options.log_level = log_level

    return apply


def with_settings(settings: LoggerSettings) -> Option:
    """Use explicit settings instead of reading the environment."""

    def apply(options: LoggerOptions) -> None:
        options.settings = settings

    return apply


def with_output(stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> Option:
    """Redirect the low-priority (stdout) and high-priority (stderr) streams."""

    def apply(options: LoggerOptions) -> None:
        if stdout is not None:
            options.stdout = stdout
        if stderr is not None:
            options.stderr = stderr

    return apply


def with_exit_func(exit_func: Callable[[int], Any]) -> Option:
    """Replace the process termination used by FATAL calls.

    The default ``os._exit`` cannot be intercepted; swap it only where the
    fatal path itself has to be observed, e.g. in tests.
    """

    def apply(options: LoggerOptions) -> None:
        options.exit_func = exit_func

    return apply


# =============================================================================
# Logger
# =============================================================================


class StandardLog(Log):
    def __init__(
        self,
        engine: Engine,
        *,
        add_caller: bool = True,
        stacktrace_level: Level = Level.ERROR,
        exit_func: Callable[[int], Any] = os._exit,
    ) -> None:
        self.engine = engine
        self.add_caller = add_caller
        self.stacktrace_level = stacktrace_level
        self.exit_func = exit_func

    def info(self, msg: str) -> None:
        self._write(Level.INFO, msg)

    def infow(self, msg: str, fields: Fields) -> None:
        self._write(Level.INFO, msg, fields=fields)

    def warn(self, msg: str) -> None:
        self._write(Level.WARN, msg)

    def warnw(self, msg: str, fields: Fields) -> None:
        self._write(Level.WARN, msg, fields=fields)

    def error(self, msg: str, code: int) -> None:
        self._write(Level.ERROR, msg, code)

    def errorw(self, msg: str, code: int, fields: Fields) -> None:
        self._write(Level.ERROR, msg, code, fields)

    def fatal(self, msg: str, code: int) -> None:
        self._write(Level.FATAL, msg, code)
        self.flush()
        self.exit_func(1)

    def fatalw(self, msg: str, code: int, fields: Fields) -> None:
        self._write(Level.FATAL, msg, code, fields)
        self.flush()
        self.exit_func(1)

    def panic(self, msg: str, code: int) -> None:
        raise self._new_panic(msg, code, None)

    def panicw(self, msg: str, code: int, fields: Fields) -> None:
        raise self._new_panic(msg, code, fields)

    @contextmanager
    def panic_logger(self) -> Iterator[None]:
        try:
            yield
        except PanicContainer as panic_data:
            if not panic_data.consumed and self.engine.enabled(Level.PANIC):
                panic_data.consumed = True
                fields = get_logger_fields_as_engine_fields(panic_data.fields)
                fields.pop(CODE_KEY, None)
                fields.pop(TAGS_KEY, None)
                self.engine.bind(code=panic_data.code).write(
                    Level.PANIC,
                    panic_data.msg,
                    fields,
                    caller=panic_data.caller if self.add_caller else None,
                    stack=panic_data.stack if Level.PANIC >= self.stacktrace_level else None,
                )
            raise
        except (SystemExit, GeneratorExit):
            raise
        except BaseException as exc:
            if self.engine.enabled(Level.PANIC):
                self.engine.write(
                    Level.PANIC,
                    _describe(exc),
                    caller=traceback_caller(exc.__traceback__) if self.add_caller else None,
                    stack=exception_stack(exc) if Level.PANIC >= self.stacktrace_level else None,
                )
            raise

    def flush(self) -> None:
        try:
            self.engine.sync()
        except Exception:
            pass  # Best effort; stdio sync failures are expected on some platforms

    def close(self) -> None:
        self.flush()

    def _write(
        self,
        level: Level,
        msg: str,
        code: Optional[int] = None,
        fields: Optional[Fields] = None,
    ) -> None:
        # Must be called directly by the public method so the caller sits two frames up.
        if code is not None:
            check_code(code)
        if not self.engine.enabled(level):
            return

        engine = self.engine
        encoded = get_logger_fields_as_engine_fields(fields)
        encoded.pop(TAGS_KEY, None)
        if code is not None:
            encoded.pop(CODE_KEY, None)
            engine = engine.bind(code=code)

        caller = stack = None
        if self.add_caller or level >= self.stacktrace_level:
            frame = caller_frame(2)
            if self.add_caller:
                caller = frame_caller(frame)
            if level >= self.stacktrace_level:
                stack = frame_stack(frame)

        engine.write(level, msg, encoded, caller=caller, stack=stack)

    def _new_panic(self, msg: str, code: int, fields: Optional[Fields]) -> PanicContainer:
        frame = caller_frame(2)
        return PanicContainer(
            msg,
            code,
            fields,
            caller=frame_caller(frame) if self.add_caller else None,
            stack=frame_stack(frame) if Level.PANIC >= self.stacktrace_level else None,
        )


def _describe(value: BaseException) -> str:
    try:
        text = str(value)
    except Exception:
        text = ""
    return text or type(value).__name__


def new(labels: Optional[Mapping[str, str]] = None, *opts: Option) -> Log:
    """Build a logger writing JSON lines to stdout (below ERROR) and stderr (ERROR and above).

    Args:
        labels: Persistent fields of every entry. Snapshotted, so later
            changes to the mapping do not affect the logger.
        *opts: ``with_log_level``, ``with_settings``, ``with_output``,
            ``with_exit_func``.
    """
    options = LoggerOptions()
    for opt in opts:
        opt(options)

    settings = options.settings or LoggerSettings()
    log_level = get_level_as_engine_level(options.log_level if options.log_level is not None else settings.level)
    fmt = settings.format.value

    core = TeeSink(
        StdioSink(high_priority_enabler(log_level), fmt, options.stderr or sys.stderr),
        StdioSink(low_priority_enabler(log_level), fmt, options.stdout or sys.stdout),
    )

    snapshot = Labels(labels or {})
    context: dict[str, Any] = get_labels_as_engine_fields(snapshot)
    context[TAGS_KEY] = get_labels_keys(snapshot)

    return StandardLog(
        StructlogEngine.wrap(core, context),
        add_caller=settings.add_caller,
        stacktrace_level=settings.stacktrace_level,
        exit_func=options.exit_func,
    )


def get_core(log: StandardLog) -> BaseSink:
    """Routing core of ``log``, for composing with other sinks in tests."""
    return log.engine.core()
