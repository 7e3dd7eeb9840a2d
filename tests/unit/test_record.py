"""Unit tests for record.py."""

from slogkit.level import INFO, Level
from slogkit.record import Record, Source
from slogkit.value import Attr, Kind, Value


class TestSource:
    """Tests for Source class."""

    def test_group_value_all_fields(self) -> None:
        v = Source("pkg.func", "/src/app.py", 42).group_value()
        assert v.kind is Kind.GROUP
        assert [a.key for a in v.as_group()] == ["function", "file", "line"]
        assert v.as_group()[2].value == Value.int64(42)

    def test_group_value_skips_empty_fields(self) -> None:
        v = Source(file="/src/app.py").group_value()
        assert [a.key for a in v.as_group()] == ["file"]

    def test_empty_source_is_empty_group(self) -> None:
        assert Source().group_value().is_empty_group()


class TestRecord:
    """Tests for Record class."""

    def test_level_coerced(self, fixed_time) -> None:
        r = Record(fixed_time, 2, "m")
        assert isinstance(r.level, Level)
        assert str(r.level) == "INFO+2"

    def test_empty_groups_dropped(self, fixed_time) -> None:
        r = Record(fixed_time, INFO, "m", (Attr("g", Value.group()), Attr.of("a", 1)))
        assert r.attrs == (Attr.of("a", 1),)
        assert r.num_attrs == 1

    def test_add_attrs_returns_copy(self, fixed_time) -> None:
        """Should leave the original record unchanged."""
        r = Record(fixed_time, INFO, "m", (Attr.of("a", 1),))
        r2 = r.add_attrs("b", 2, Attr("e", Value.group()))
        assert r.num_attrs == 1
        assert r2.attrs == (Attr.of("a", 1), Attr.of("b", 2))
        assert r2.message == "m"
