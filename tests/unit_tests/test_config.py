import pytest
from pydantic import ValidationError

from liblogger.config import LogFormat, LoggerSettings
from liblogger.logger import Level


def test_defaults():
    settings = LoggerSettings()

    assert settings.level is Level.INFO
    assert settings.format is LogFormat.JSON
    assert settings.add_caller is True
    assert settings.stacktrace_level is Level.ERROR


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("warn", Level.WARN), ("WARNING", Level.WARN), ("error", Level.ERROR), ("3", Level.PANIC)],
)
def test_level_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("LIBLOGGER_LEVEL", raw)

    assert LoggerSettings().level is expected


def test_other_fields_from_env(monkeypatch):
    monkeypatch.setenv("LIBLOGGER_FORMAT", "console")
    monkeypatch.setenv("LIBLOGGER_ADD_CALLER", "false")
    monkeypatch.setenv("LIBLOGGER_STACKTRACE_LEVEL", "panic")

    settings = LoggerSettings()
    assert settings.format is LogFormat.CONSOLE
    assert settings.add_caller is False
    assert settings.stacktrace_level is Level.PANIC


def test_unknown_level_is_rejected(monkeypatch):
    monkeypatch.setenv("LIBLOGGER_LEVEL", "verbose")

    with pytest.raises(ValidationError):
        LoggerSettings()


def test_settings_are_frozen():
    settings = LoggerSettings()

    with pytest.raises(ValidationError):
        settings.level = Level.FATAL


def test_new_reads_environment(monkeypatch, capsys):
    from liblogger.logger import Labels
    from liblogger.standardlogger import new

    monkeypatch.setenv("LIBLOGGER_LEVEL", "warn")
    log = new(Labels(app="env"))
    log.info("dropped")
    log.warn("kept")

    out = capsys.readouterr().out
    assert "dropped" not in out
    assert '"msg":"kept"' in out


def test_console_format_end_to_end(make_logger, streams):
    log = make_logger(None, format=LogFormat.CONSOLE)
    log.warn("readable")

    line = streams.stdout.getvalue()
    assert "WARN" in line
    assert "readable key0=val0" in line
