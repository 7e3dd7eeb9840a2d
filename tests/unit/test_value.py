"""Unit tests for value.py."""

from datetime import datetime, timedelta, timezone

import pytest

from slogkit.errors import KindError
from slogkit.level import WARN
from slogkit.value import (
    BAD_KEY,
    EMPTY_ATTR,
    MAX_LOG_VALUE_CALLS,
    Attr,
    Kind,
    Value,
    args_to_attrs,
    group,
)


class Token:
    """Redacts itself when logged."""

    def log_value(self):
        return "REDACTED"


class Chain:
    """Resolves to another resolvable object, n times."""

    def __init__(self, n):
        self.n = n

    def log_value(self):
        if self.n == 0:
            return 7
        return Chain(self.n - 1)


class Forever:
    def log_value(self):
        return self


class Failing:
    def log_value(self):
        raise RuntimeError("boom")


class TestValueOf:
    """Tests for Value.of kind inference."""

    @pytest.mark.parametrize(
        "obj,kind",
        [
            ("s", Kind.STRING),
            (True, Kind.BOOL),
            (1, Kind.INT64),
            (-(1 << 63), Kind.INT64),
            ((1 << 63), Kind.UINT64),
            ((1 << 64), Kind.ANY),
            (1.5, Kind.FLOAT64),
            (timedelta(seconds=1), Kind.DURATION),
            (datetime(2024, 1, 1, tzinfo=timezone.utc), Kind.TIME),
            (Token(), Kind.LOG_VALUER),
            (None, Kind.ANY),
            ({"a": 1}, Kind.ANY),
            ([], Kind.ANY),
        ],
    )
    def test_infers_kind(self, obj, kind: Kind) -> None:
        assert Value.of(obj).kind is kind

    def test_subclasses_are_any(self) -> None:
        """Should keep int subclasses opaque so their rendering is used."""
        v = Value.of(WARN)
        assert v.kind is Kind.ANY
        assert v.as_any() is WARN

    def test_value_passthrough(self) -> None:
        v = Value.string("x")
        assert Value.of(v) is v

    def test_attr_list_is_group(self) -> None:
        v = Value.of([Attr.of("a", 1)])
        assert v.kind is Kind.GROUP
        assert v.as_group() == (Attr.of("a", 1),)

    def test_duration_nanoseconds(self) -> None:
        assert Value.of(timedelta(milliseconds=3)).as_duration() == 3_000_000


class TestAccessors:
    """Tests for Value accessors."""

    def test_matching_kind(self) -> None:
        assert Value.string("x").as_str() == "x"
        assert Value.int64(3).as_int() == 3
        assert Value.uint64(3).as_uint() == 3
        assert Value.float64(2).as_float() == 2.0
        assert Value.boolean(1).as_bool() is True
        assert Value.duration(5).as_duration() == 5

    def test_wrong_kind_raises(self) -> None:
        """Should raise KindError naming both kinds."""
        with pytest.raises(KindError, match="Value kind is String, not Int64"):
            Value.string("x").as_int()

    def test_kind_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            Value.int64(1).as_str()

    def test_as_any_any_kind(self) -> None:
        assert Value.int64(1).as_any() == 1


class TestGroupValue:
    """Tests for group values."""

    def test_empty_group(self) -> None:
        assert Value.group().is_empty_group()
        assert not Value.string("").is_empty_group()

    def test_empty_members_dropped(self) -> None:
        """Should drop members that are themselves empty groups."""
        v = Value.group(Attr("e", Value.group()), Attr.of("a", 1))
        assert v.as_group() == (Attr.of("a", 1),)

    def test_group_helper(self) -> None:
        attr = group("request", "method", "GET", "status", 200)
        assert attr.key == "request"
        assert str(attr) == "request=[method=GET status=200]"


class TestResolve:
    """Tests for Value.resolve."""

    def test_non_resolvable_unchanged(self) -> None:
        v = Value.int64(1)
        assert v.resolve() is v

    def test_resolves_log_valuer(self) -> None:
        assert Value.of(Token()).resolve() == Value.string("REDACTED")

    def test_resolves_chain(self) -> None:
        assert Value.of(Chain(5)).resolve() == Value.int64(7)

    def test_exception_becomes_error_value(self) -> None:
        """Should resolve to an ANY value holding the raised exception."""
        v = Value.of(Failing()).resolve()
        assert v.kind is Kind.ANY
        assert isinstance(v.as_any(), RuntimeError)
        assert str(v.as_any()) == "boom"

    def test_infinite_chain_gives_up(self) -> None:
        """Should stop after MAX_LOG_VALUE_CALLS and report the type."""
        v = Value.of(Forever()).resolve()
        assert v.kind is Kind.ANY
        assert str(v.as_any()) == "LogValue called too many times on Value of type Forever"

    def test_chain_at_limit_resolves(self) -> None:
        v = Value.of(Chain(MAX_LOG_VALUE_CALLS - 1)).resolve()
        assert v == Value.int64(7)


class TestValueStr:
    """Tests for Value.__str__."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Value.string("x y"), "x y"),
            (Value.boolean(False), "false"),
            (Value.int64(-3), "-3"),
            (Value.float64(1e6), "1e+06"),
            (Value.duration(1_500_000), "1.5ms"),
            (Value.any(None), "None"),
        ],
    )
    def test_str(self, value: Value, expected: str) -> None:
        assert str(value) == expected

    def test_equality(self) -> None:
        assert Value.int64(1) == Value.int64(1)
        assert Value.int64(1) != Value.uint64(1)
        assert Value.string("1") != Value.int64(1)


class TestAttr:
    """Tests for Attr."""

    def test_empty_attr(self) -> None:
        assert EMPTY_ATTR.is_empty()
        assert not Attr("", Value.string("")).is_empty()
        assert not Attr("k", Value.any(None)).is_empty()

    def test_str(self) -> None:
        assert str(Attr.of("a", 1.5)) == "a=1.5"


class TestArgsToAttrs:
    """Tests for args_to_attrs function."""

    def test_pairs(self) -> None:
        assert args_to_attrs(["a", 1, "b", "x"]) == [Attr.of("a", 1), Attr.of("b", "x")]

    def test_attrs_passed_through(self) -> None:
        attr = Attr.of("k", True)
        assert args_to_attrs([attr, "a", 2]) == [attr, Attr.of("a", 2)]

    def test_trailing_key(self) -> None:
        """Should turn a dangling string into a BAD_KEY attr."""
        assert args_to_attrs(["a", 1, "oops"]) == [
            Attr.of("a", 1),
            Attr(BAD_KEY, Value.string("oops")),
        ]

    def test_non_string_key(self) -> None:
        assert args_to_attrs([42]) == [Attr.of(BAD_KEY, 42)]
