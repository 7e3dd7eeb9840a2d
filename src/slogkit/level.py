"""Severity levels and their display names.

Levels are integers: larger is more severe. The named levels are spaced four
apart so that values in between (``INFO + 2``) remain meaningful, and two
custom levels below DEBUG are reserved for application lifecycle events.
"""

from __future__ import annotations


class Level(int):
    """A log severity that renders as its display name.

    A ``Level`` is an ``int`` for comparisons and arithmetic, but marshals to
    its name (``INFO``, ``WARN+1``, ``FX``) in text and JSON output.
    """

    def __str__(self) -> str:
        return level_name(self)

    def __repr__(self) -> str:
        return f"Level({int(self)})"

    def marshal_text(self) -> str:
        return level_name(self)

    def marshal_json(self) -> str:
        return '"' + level_name(self) + '"'


FX = Level(-8)
FX_ERROR = Level(-7)
DEBUG = Level(-4)
INFO = Level(0)
WARN = Level(4)
ERROR = Level(8)

# Short names for the two lifecycle levels; everything else uses the
# canonical BASE[+-N] form.
_CUSTOM_NAMES: dict[int, str] = {
    FX: "FX",
    FX_ERROR: "FX_ERROR",
}

# Map of lowercase configuration names to levels.
LEVELS_BY_NAME: dict[str, Level] = {
    "fx": FX,
    "fx_error": FX_ERROR,
    "debug": DEBUG,
    "info": INFO,
    "warn": WARN,
    "warning": WARN,
    "error": ERROR,
}


def _offset_name(base: str, delta: int) -> str:
    if delta == 0:
        return base
    return f"{base}{delta:+d}"


def canonical_level_name(level: int) -> str:
    """Return the canonical name of a level, relative to the nearest named level.

    Args:
        level: Severity value.

    Returns:
        ``DEBUG``, ``INFO``, ``WARN`` or ``ERROR``, suffixed with a signed
        offset when the level lies between named levels (e.g. ``INFO+2``,
        ``DEBUG-4``).
    """
    if level < INFO:
        return _offset_name("DEBUG", level - DEBUG)
    if level < WARN:
        return _offset_name("INFO", level - INFO)
    if level < ERROR:
        return _offset_name("WARN", level - WARN)
    return _offset_name("ERROR", level - ERROR)


def level_name(level: int) -> str:
    """Return the display name of a level, honoring the custom short names."""
    name = _CUSTOM_NAMES.get(int(level))
    if name is not None:
        return name
    return canonical_level_name(level)


def parse_level(name: str) -> Level:
    """Parse a configuration level name (case-insensitive).

    Args:
        name: One of the keys of LEVELS_BY_NAME, in any case.

    Returns:
        The matching Level.

    Raises:
        ValueError: If the name is not a known level.
    """
    try:
        return LEVELS_BY_NAME[name.casefold()]
    except KeyError:
        raise ValueError(
            f"level must be one of {sorted(LEVELS_BY_NAME)}, got {name!r}"
        ) from None


class LevelVar:
    """A minimum level that can be changed while handlers are using it.

    Pass a LevelVar as ``HandlerOptions.level`` to adjust verbosity at
    runtime; every handler sharing the options sees the change.
    """

    def __init__(self, level: int = INFO) -> None:
        self._level = Level(level)

    def level(self) -> Level:
        return self._level

    def set(self, level: int) -> None:
        self._level = Level(level)

    def __repr__(self) -> str:
        return f"LevelVar({level_name(self._level)})"
