"""Map 3a colors to CSS color strings for vector output."""

import re
from typing import Protocol

from art3a.core.color import Color, ColorMode

# Standard 16-color palette (CSS colors)
PALETTE_16 = [
    "#000000",  # 0 - Black
    "#800000",  # 1 - Red
    "#008000",  # 2 - Green
    "#808000",  # 3 - Yellow
    "#000080",  # 4 - Blue
    "#800080",  # 5 - Magenta
    "#008080",  # 6 - Cyan
    "#c0c0c0",  # 7 - White
    "#4e4e4e",  # 8 - Bright Black
    "#ff0000",  # 9 - Bright Red
    "#00ff00",  # 10 - Bright Green
    "#ffff00",  # 11 - Bright Yellow
    "#0000ff",  # 12 - Bright Blue
    "#ff00ff",  # 13 - Bright Magenta
    "#00ffff",  # 14 - Bright Cyan
    "#ffffff",  # 15 - Bright White
]

DEFAULT_FG = "#ffffff"
DEFAULT_BG = "#000000"

# Channel levels of the 6x6x6 cube in the 256-color palette
CUBE_LEVELS = (0, 95, 135, 175, 215, 255)

_UNSAFE = re.compile(r'[^A-Za-z0-9#_-]')


class ColorMapper(Protocol):
    """Anything that turns a color into a CSS color string."""

    def __call__(self, color: Color, foreground: bool) -> str: ...


def color_256_to_css(index: int) -> str:
    """CSS color for a 256-color palette index."""
    if index < 16:
        return PALETTE_16[index]
    if index < 232:
        idx = index - 16
        r, g, b = idx // 36, (idx % 36) // 6, idx % 6
        return f"#{CUBE_LEVELS[r]:02x}{CUBE_LEVELS[g]:02x}{CUBE_LEVELS[b]:02x}"
    gray = 8 + (index - 232) * 10
    return f"#{gray:02x}{gray:02x}{gray:02x}"


class CssColorMap:
    """
    Default color mapper with optional per-color overrides.

    Overrides are keyed by (color, foreground). Their values are
    sanitized to letters, digits, '#', '-' and '_' so they cannot break
    out of an attribute.
    """

    def __init__(self, overrides: dict[tuple[Color, bool], str] | None = None):
        self.overrides = dict(overrides or {})

    def __call__(self, color: Color, foreground: bool) -> str:
        override = self.overrides.get((color, foreground))
        if override is not None:
            return _UNSAFE.sub('', override)

        if color.mode == ColorMode.DEFAULT:
            return DEFAULT_FG if foreground else DEFAULT_BG
        elif color.mode == ColorMode.STANDARD_16:
            assert isinstance(color.value, int)
            return PALETTE_16[color.value]
        elif color.mode == ColorMode.EXTENDED_256:
            assert isinstance(color.value, int)
            return color_256_to_css(color.value)
        else:  # TRUE_COLOR
            assert isinstance(color.value, tuple)
            r, g, b = color.value
            return f"#{r:02x}{g:02x}{b:02x}"
