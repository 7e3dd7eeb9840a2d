"""Unit tests for logger.py."""

import json
import re

from slogkit.handler import Handler, HandlerOptions
from slogkit.level import DEBUG, WARN, LevelVar
from slogkit.logger import Logger
from slogkit.value import Attr


def _lines(sink) -> list[dict]:
    records = [json.loads(line) for line in sink.getvalue().splitlines()]
    for r in records:
        r.pop("time")
    return records


class TestLogger:
    """Tests for Logger class."""

    def test_level_methods(self, sink) -> None:
        log = Logger(Handler.json(sink))
        log.fx("f")
        log.debug("d")
        log.info("i")
        log.warn("w")
        log.error("e")
        log.log(WARN + 1, "custom")
        assert [r["level"] for r in _lines(sink)] == [
            "FX",
            "DEBUG",
            "INFO",
            "WARN",
            "ERROR",
            "WARN+1",
        ]

    def test_args_and_kwargs(self, sink) -> None:
        """Should log positional pairs first, then keyword arguments."""
        log = Logger(Handler.json(sink))
        log.info("request", "method", "GET", Attr.of("ok", True), status=200)
        assert _lines(sink) == [
            {"level": "INFO", "msg": "request", "method": "GET", "ok": True, "status": 200}
        ]

    def test_bad_key(self, sink) -> None:
        Logger(Handler.json(sink)).info("m", 42)
        assert _lines(sink) == [{"level": "INFO", "msg": "m", "!BADKEY": 42}]

    def test_time_is_set(self, sink) -> None:
        Logger(Handler.json(sink)).info("m")
        parsed = json.loads(sink.getvalue())
        assert re.match(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}", parsed["time"])

    def test_disabled_levels_skipped(self, sink) -> None:
        var = LevelVar(WARN)
        log = Logger(Handler.json(sink, HandlerOptions(level=var)))
        log.info("hidden")
        log.warn("shown")
        var.set(DEBUG)
        log.debug("now shown")
        assert [r["msg"] for r in _lines(sink)] == ["shown", "now shown"]
        assert log.enabled(DEBUG)

    def test_with_attrs_and_group(self, sink) -> None:
        log = Logger(Handler.json(sink)).with_attrs("svc", "api").with_group("req")
        log.info("m", id=1)
        assert _lines(sink) == [{"level": "INFO", "msg": "m", "svc": "api", "req": {"id": 1}}]

    def test_with_nothing_returns_self(self, sink) -> None:
        log = Logger(Handler.json(sink))
        assert log.with_attrs() is log
        assert log.with_group("") is log

    def test_source_points_at_caller(self, sink) -> None:
        """Should record the location of the logging call."""
        log = Logger(Handler.json(sink, HandlerOptions(add_source=True)))
        log.info("here")
        source = json.loads(sink.getvalue())["source"]
        assert source["file"] == __file__
        assert source["function"].endswith("TestLogger.test_source_points_at_caller")
        assert isinstance(source["line"], int)

    def test_handler_property(self, sink) -> None:
        handler = Handler.json(sink)
        assert Logger(handler).handler is handler
