"""
The logging contract application code depends on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from types import TracebackType

from .fields import Fields


class Log(ABC):
    """Leveled structured logging with error codes.

    ERROR, FATAL and PANIC calls require a numeric error code so operators
    can alert on codes independent of message text. The ``*w`` variants
    take additional per-call fields.
    """

    @abstractmethod
    def info(self, msg: str) -> None: ...

    @abstractmethod
    def infow(self, msg: str, fields: Fields) -> None: ...

    @abstractmethod
    def warn(self, msg: str) -> None: ...

    @abstractmethod
    def warnw(self, msg: str, fields: Fields) -> None: ...

    @abstractmethod
    def error(self, msg: str, code: int) -> None: ...

    @abstractmethod
    def errorw(self, msg: str, code: int, fields: Fields) -> None: ...

    @abstractmethod
    def fatal(self, msg: str, code: int) -> None:
        """Write the entry, flush and terminate the process."""

    @abstractmethod
    def fatalw(self, msg: str, code: int, fields: Fields) -> None: ...

    @abstractmethod
    def panic(self, msg: str, code: int) -> None:
        """Raise a panic payload. Nothing is written until a recovery point sees it."""

    @abstractmethod
    def panicw(self, msg: str, code: int, fields: Fields) -> None: ...

    @abstractmethod
    def panic_logger(self) -> AbstractContextManager[None]:
        """Recovery point that logs an escaping exception and re-raises it.

        Usage::

            with log.panic_logger():
                do_work()
        """

    @abstractmethod
    def flush(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    def __enter__(self) -> Log:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
