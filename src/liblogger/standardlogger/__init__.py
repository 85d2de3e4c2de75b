"""
structlog-based logger: dual-sink JSON output with panic capture.

Library: structlog for the processor pipeline, orjson for JSON rendering.
"""

from .engine import Engine, StructlogEngine
from .sinks import BaseSink, StdioSink, TeeSink, level_of
from .standardlogger import (
    LoggerOptions,
    Option,
    PanicContainer,
    StandardLog,
    get_core,
    new,
    with_exit_func,
    with_log_level,
    with_output,
    with_settings,
)

__all__ = [
    "BaseSink",
    "Engine",
    "LoggerOptions",
    "Option",
    "PanicContainer",
    "StandardLog",
    "StdioSink",
    "StructlogEngine",
    "TeeSink",
    "get_core",
    "level_of",
    "new",
    "with_exit_func",
    "with_log_level",
    "with_output",
    "with_settings",
]
