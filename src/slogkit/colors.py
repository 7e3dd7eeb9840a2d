"""Level to terminal color mapping for pretty output.

Colors are click color names and are rendered with click.style(), which
emits the SGR escape for the color and a reset after the text.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

import click

from slogkit.level import DEBUG, ERROR, FX, FX_ERROR, INFO, WARN

# A color table maps a level value to a click color name. A None entry
# means "do not color this level".
LevelColorMap = Mapping[int, str | None]

# Sentinel for "no color"; colorize() returns text unchanged for it.
NO_COLOR = None

# Color used when a level is missing from the table.
DEFAULT_LEVEL_COLOR = "white"

DEFAULT_COLOR_MAP: LevelColorMap = MappingProxyType(
    {
        FX: "cyan",
        FX_ERROR: "bright_red",
        DEBUG: "blue",
        INFO: "bright_green",
        WARN: "yellow",
        ERROR: "red",
    }
)

# Used by the safe encodings (text, JSON), which never color output.
EMPTY_COLOR_MAP: LevelColorMap = MappingProxyType({})


class UniformColorMap(Mapping[int, str | None]):
    """A color table that gives every level the same color.

    ``UniformColorMap(NO_COLOR)`` turns coloring off in pretty mode.
    """

    def __init__(self, color: str | None) -> None:
        self._color = color

    def __getitem__(self, level: int) -> str | None:
        return self._color

    def __iter__(self) -> Iterator[int]:
        return iter(())

    def __len__(self) -> int:
        return 0


NO_COLOR_MAP: LevelColorMap = UniformColorMap(NO_COLOR)


def get_color(colors: LevelColorMap | None, level: int) -> str | None:
    """Get the display color for a level.

    Args:
        colors: Color table, or None to disable coloring entirely.
        level: Severity value.

    Returns:
        Color name suitable for click.style(), DEFAULT_LEVEL_COLOR when the
        level is not in the table, or NO_COLOR when coloring is disabled.
    """
    if colors is None:
        return NO_COLOR
    return colors.get(int(level), DEFAULT_LEVEL_COLOR)


def colorize(text: str, color: str | None) -> str:
    """Wrap text in the SGR codes for color (no-op for NO_COLOR)."""
    if color is NO_COLOR:
        return text
    return click.style(text, fg=color)
