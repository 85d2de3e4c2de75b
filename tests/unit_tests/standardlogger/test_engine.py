import re

from liblogger.logger import Level
from liblogger.standardlogger import observer
from liblogger.standardlogger.engine import (
    Engine,
    StructlogEngine,
    add_timestamp,
    order_keys,
    rfc3339_nano,
)

RFC3339_NANO = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,9})?Z$")


class TestRfc3339Nano:
    def test_epoch(self) -> None:
        assert rfc3339_nano(0) == "1970-01-01T00:00:00Z"

    def test_trailing_zeros_trimmed(self) -> None:
        assert rfc3339_nano(1_500_000_000) == "1970-01-01T00:00:01.5Z"

    def test_full_precision(self) -> None:
        assert rfc3339_nano(1_714_558_830_123_456_789) == "2024-05-01T10:20:30.123456789Z"


def test_add_timestamp():
    event_dict = add_timestamp(None, "info", {})
    assert RFC3339_NANO.match(event_dict["ts"])


def test_order_keys():
    event_dict = {"stacktrace": "s", "a": 1, "msg": "m", "ts": "t", "level": "error", "caller": "c"}

    assert list(order_keys(None, "error", event_dict)) == ["level", "ts", "caller", "msg", "a", "stacktrace"]


class TestStructlogEngine:
    def test_implements_engine_protocol(self) -> None:
        sink, _ = observer.new()
        assert isinstance(StructlogEngine.wrap(sink), Engine)

    def test_write(self) -> None:
        sink, logs = observer.new()
        engine = StructlogEngine.wrap(sink, {"product": "Persistor"})

        engine.write(Level.WARN, "careful", {"objId": 43}, caller="app/main.py:1")

        entry = logs.all()[0]
        assert entry.level is Level.WARN
        assert entry.message == "careful"
        assert entry.context["level"] == "warn"
        assert entry.context["product"] == "Persistor"
        assert entry.context["objId"] == 43
        assert entry.context["caller"] == "app/main.py:1"
        assert "stacktrace" not in entry.context

    def test_write_below_sink_level_is_dropped(self) -> None:
        sink, logs = observer.new(Level.ERROR)
        engine = StructlogEngine.wrap(sink)

        engine.write(Level.INFO, "dropped")

        assert len(logs) == 0
        assert not engine.enabled(Level.WARN)
        assert engine.enabled(Level.FATAL)

    def test_bind_returns_new_engine(self) -> None:
        sink, logs = observer.new()
        engine = StructlogEngine.wrap(sink, {"a": "1"})

        bound = engine.bind(code=7)
        bound.write(Level.ERROR, "with code")
        engine.write(Level.ERROR, "without code")

        first, second = logs.all()
        assert first.context["code"] == 7
        assert "code" not in second.context
        assert isinstance(bound, StructlogEngine)

    def test_field_named_event_is_kept(self) -> None:
        sink, logs = observer.new()
        StructlogEngine.wrap(sink, {"event": "ingest"}).write(Level.INFO, "real", {"event": "login"})

        entry = logs.all()[0]
        assert entry.message == "real"
        assert entry.context["event"] == "login"

    def test_message_wins_over_field_named_msg(self) -> None:
        sink, logs = observer.new()
        StructlogEngine.wrap(sink).write(Level.INFO, "real", {"msg": "fake"})

        assert logs.all()[0].message == "real"

    def test_core(self) -> None:
        sink, _ = observer.new()
        assert StructlogEngine.wrap(sink).core() is sink
