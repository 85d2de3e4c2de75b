import io
import json
import typing as t

import pytest

from liblogger.config import LoggerSettings
from liblogger.logger import Labels
from liblogger.standardlogger import StandardLog, new, with_exit_func, with_output, with_settings

_ENV_KEYS = ("LIBLOGGER_LEVEL", "LIBLOGGER_FORMAT", "LIBLOGGER_ADD_CALLER", "LIBLOGGER_STACKTRACE_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep LIBLOGGER_* variables of the host out of every test."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield


class Streams(t.NamedTuple):
    stdout: io.StringIO
    stderr: io.StringIO
    exit_codes: list[int]

    @staticmethod
    def _entries(stream: io.StringIO) -> list[dict[str, t.Any]]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    def out_entries(self) -> list[dict[str, t.Any]]:
        return self._entries(self.stdout)

    def err_entries(self) -> list[dict[str, t.Any]]:
        return self._entries(self.stderr)


@pytest.fixture
def streams() -> Streams:
    return Streams(io.StringIO(), io.StringIO(), [])


@pytest.fixture
def make_logger(streams):
    """Factory building a logger that writes into the ``streams`` fixture."""

    def factory(labels: t.Optional[t.Mapping[str, str]] = None, *opts, **settings: t.Any) -> StandardLog:
        log = new(
            Labels({"key0": "val0"} if labels is None else labels),
            with_settings(LoggerSettings(**settings)),
            with_output(stdout=streams.stdout, stderr=streams.stderr),
            with_exit_func(streams.exit_codes.append),
            *opts,
        )
        assert isinstance(log, StandardLog)
        return log

    return factory
