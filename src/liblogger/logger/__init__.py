"""
Logging contract: levels, labels, fields and the ``Log`` interface.

Implementations live in sibling packages (see ``liblogger.standardlogger``).
"""

from .fields import F, Fields
from .labels import L, Labels
from .levels import Level
from .log import Log

__all__ = ["F", "Fields", "L", "Labels", "Level", "Log"]
