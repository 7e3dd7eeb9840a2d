"""Unit tests for level.py."""

import pytest

from slogkit.level import (
    DEBUG,
    ERROR,
    FX,
    FX_ERROR,
    INFO,
    WARN,
    Level,
    LevelVar,
    canonical_level_name,
    level_name,
    parse_level,
)


class TestLevelNames:
    """Tests for level_name and canonical_level_name."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            (DEBUG, "DEBUG"),
            (INFO, "INFO"),
            (WARN, "WARN"),
            (ERROR, "ERROR"),
            (2, "INFO+2"),
            (-2, "DEBUG+2"),
            (7, "WARN+3"),
            (12, "ERROR+4"),
            (-10, "DEBUG-6"),
        ],
    )
    def test_canonical_names(self, level: int, expected: str) -> None:
        """Should name levels relative to the nearest lower named level."""
        assert canonical_level_name(level) == expected

    def test_lifecycle_levels_have_short_names(self) -> None:
        """Should use FX and FX_ERROR for the lifecycle levels."""
        assert level_name(FX) == "FX"
        assert level_name(FX_ERROR) == "FX_ERROR"
        assert canonical_level_name(FX) == "DEBUG-4"

    def test_other_levels_use_canonical_names(self) -> None:
        assert level_name(-6) == "DEBUG-2"
        assert level_name(INFO + 1) == "INFO+1"


class TestLevel:
    """Tests for Level class."""

    def test_is_int(self) -> None:
        """Should compare and add like an int."""
        assert Level(4) == WARN
        assert WARN > INFO
        assert INFO + 2 == 2

    def test_str_and_marshal(self) -> None:
        """Should render as its display name."""
        assert str(Level(2)) == "INFO+2"
        assert WARN.marshal_text() == "WARN"
        assert FX.marshal_json() == '"FX"'

    def test_repr(self) -> None:
        assert repr(ERROR) == "Level(8)"


class TestParseLevel:
    """Tests for parse_level function."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("info", INFO),
            ("INFO", INFO),
            ("Warning", WARN),
            ("warn", WARN),
            ("fx", FX),
            ("FX_ERROR", FX_ERROR),
            ("debug", DEBUG),
            ("error", ERROR),
        ],
    )
    def test_known_names(self, name: str, expected: Level) -> None:
        """Should accept known names case-insensitively."""
        assert parse_level(name) == expected

    def test_unknown_name(self) -> None:
        """Should raise ValueError listing the valid names."""
        with pytest.raises(ValueError, match="level must be one of"):
            parse_level("verbose")


class TestLevelVar:
    """Tests for LevelVar class."""

    def test_default_is_info(self) -> None:
        assert LevelVar().level() == INFO

    def test_set(self) -> None:
        """Should return the most recently set level."""
        var = LevelVar(DEBUG)
        var.set(ERROR)
        assert var.level() == ERROR
        assert isinstance(var.level(), Level)
        assert repr(var) == "LevelVar(ERROR)"
