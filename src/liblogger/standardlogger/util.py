"""
Translation between the logging contract and the engine representation.
"""

from __future__ import annotations

import os
import sys
import traceback
from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from types import FrameType, TracebackType
from typing import Any

from liblogger.logger import Fields, Labels, Level

TAGS_KEY = "tags"

# orjson rejects integers outside this range
_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1


def get_level_as_engine_level(lvl: Level | int) -> Level:
    """Coerce a level, falling back to INFO for unknown numbers."""
    try:
        return Level(lvl)
    except ValueError:
        return Level.INFO


def get_labels_as_engine_fields(labels: Mapping[str, str]) -> dict[str, str]:
    return {str(k): str(v) for k, v in labels.items()}


def get_labels_keys(labels: Labels | Mapping[str, str]) -> list[str]:
    return [str(k) for k in labels]


def get_logger_fields_as_engine_fields(logger_fields: Fields | Mapping[str, Any] | None) -> dict[str, Any]:
    """Translate per-call fields into JSON-safe values.

    Later keys win when a mapping yields the same key twice after
    conversion to ``str``.
    """
    if not logger_fields:
        return {}
    return {str(k): encode_value(v) for k, v in logger_fields.items()}


def encode_value(value: Any) -> Any:
    """Encode one field value.

    Rules:
    - str, int, float, bool, None: unchanged
    - int outside the signed/unsigned 64-bit range: ``str(value)``
    - bytes: decoded as UTF-8, undecodable bytes replaced
    - datetime, date, time: ISO 8601
    - Enum: its value, encoded recursively
    - mappings: dict with str keys, values encoded recursively
    - list, tuple, set, frozenset: list, items encoded recursively
    - exceptions and everything else: ``str(value)``
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        if isinstance(value, Enum):
            return encode_value(value.value)
        if isinstance(value, int) and not isinstance(value, bool) and not _INT_MIN <= value <= _INT_MAX:
            return str(value)
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return encode_value(value.value)
    if isinstance(value, Mapping):
        return {str(k): encode_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [encode_value(v) for v in value]
    return str(value)


# =============================================================================
# Caller Attribution
# =============================================================================


def caller_frame(skip: int) -> FrameType:
    """Return the frame ``skip`` levels above the function calling this one."""
    return sys._getframe(skip + 1)


def short_caller(filename: str, lineno: int) -> str:
    """Render ``<parent dir>/<file>:<line>``, e.g. ``standardlogger/test_standardlogger.py:42``."""
    parent, base = os.path.split(filename)
    parent = os.path.basename(parent)
    path = f"{parent}/{base}" if parent else base
    return f"{path}:{lineno}"


def frame_caller(frame: FrameType) -> str:
    return short_caller(frame.f_code.co_filename, frame.f_lineno)


def frame_stack(frame: FrameType) -> str:
    return "".join(traceback.format_stack(frame)).rstrip("\n")


def traceback_caller(tb: TracebackType | None) -> str | None:
    """Location of the innermost frame of a traceback, where the exception was raised."""
    if tb is None:
        return None
    summary = traceback.extract_tb(tb)[-1]
    return short_caller(summary.filename, summary.lineno or 0)


def exception_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip("\n")
