"""Tests for the pretty (colored) encoding."""

import click

from slogkit.builder import HandlerBuilder
from slogkit.colors import NO_COLOR_MAP
from slogkit.handler import Handler, HandlerOptions, Mode
from slogkit.level import ERROR, FX, INFO
from slogkit.record import Record
from slogkit.value import Attr, EMPTY_ATTR


class TestPrettyHandler:
    """Tests for Handler in pretty mode."""

    def test_colored_level_unquoted_values(self, sink, fixed_time) -> None:
        """Should color only the level and leave strings unquoted."""
        record = Record(fixed_time, INFO, "hello world", (Attr.of("a", "x y"),))
        Handler.pretty(sink).emit(record)
        level = click.style("INFO", fg="bright_green")
        assert sink.getvalue().decode() == (
            f"time=2024-01-15 10:30:00 level={level} msg=hello world a=x y\n"
        )

    def test_level_colors(self, sink) -> None:
        handler = Handler.pretty(sink)
        handler.emit(Record(None, ERROR, "e"))
        handler.emit(Record(None, FX, "f"))
        lines = sink.getvalue().decode().splitlines()
        assert lines[0] == f"level={click.style('ERROR', fg='red')} msg=e"
        assert lines[1] == f"level={click.style('FX', fg='cyan')} msg=f"

    def test_unknown_level_uses_default_color(self, sink) -> None:
        Handler.pretty(sink).emit(Record(None, INFO + 1, "m"))
        expected = f"level={click.style('INFO+1', fg='white')} msg=m\n"
        assert sink.getvalue().decode() == expected

    def test_colors_disabled(self, sink) -> None:
        handler = Handler(sink, mode=Mode.PRETTY, colors=NO_COLOR_MAP)
        handler.emit(Record(None, INFO, "m"))
        assert sink.getvalue() == b"level=INFO msg=m\n"

    def test_custom_time_layout(self, sink, fixed_time) -> None:
        handler = Handler(sink, mode=Mode.PRETTY, colors=NO_COLOR_MAP, time_layout="%H:%M")
        handler.emit(Record(fixed_time, INFO, "m"))
        assert sink.getvalue() == b"time=10:30 level=INFO msg=m\n"

    def test_raw_bytes_when_insecure(self, sink) -> None:
        handler = Handler(sink, mode=Mode.PRETTY, colors=NO_COLOR_MAP)
        handler.emit(Record(None, INFO, "m", (Attr.of("raw", b"a b"),)))
        assert sink.getvalue() == b"level=INFO msg=m raw=a b\n"

    def test_safe_pretty_quotes(self, sink) -> None:
        builder = HandlerBuilder().with_pretty().with_color(NO_COLOR_MAP).with_safe()
        builder.with_writer(sink).build().emit(Record(None, INFO, "a b"))
        assert sink.getvalue() == b'level=INFO msg="a b"\n'

    def test_replaced_level_still_colored(self, sink) -> None:
        """Should color the level value after replace_attr."""

        def drop_nothing(groups, a):
            return a

        handler = Handler.pretty(sink, HandlerOptions(replace_attr=drop_nothing))
        handler.emit(Record(None, INFO, "m"))
        level = click.style("INFO", fg="bright_green")
        assert sink.getvalue().decode() == f"level={level} msg=m\n"

    def test_keys_never_colored(self, sink) -> None:
        """Should not color the key when the level is renamed."""

        def rename(groups, a):
            if a.key == "level":
                return Attr("severity", a.value)
            if a.key == "msg":
                return EMPTY_ATTR
            return a

        handler = Handler.pretty(sink, HandlerOptions(replace_attr=rename))
        handler.emit(Record(None, INFO, "m"))
        level = click.style("INFO", fg="bright_green")
        assert sink.getvalue().decode() == f"severity={level}\n"
