"""
liblogger: a structured logging facade.

Application code depends on ``liblogger.logger.Log`` and ``Labels``;
``liblogger.standardlogger`` provides the structlog-backed implementation.

Usage:
    from liblogger import L, F, new

    log = new(L(product="Persistor"))
    log.infow("started", F(workers=4))

    with log.panic_logger():
        log.panicw("cannot continue", 1000, F(reason="disk full"))
"""

from .logger import F, Fields, L, Labels, Level, Log
from .standardlogger import new, with_log_level

__all__ = ["F", "Fields", "L", "Labels", "Level", "Log", "new", "with_log_level"]
