"""
Per-call structured fields.
"""

from __future__ import annotations

from typing import Any


class Fields(dict[str, Any]):
    """One-shot key/value context attached to a single log call."""


F = Fields
