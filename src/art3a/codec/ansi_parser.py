"""Parser for single lines of SGR-colored text."""

import re
from typing import Iterator

from art3a.core.chars import check_char
from art3a.core.color import Color, ColorPair


class AnsiLineParser:
    """
    Stateful parser that splits a line of ANSI text into colored glyphs.

    Only SGR color sequences are interpreted. Other CSI sequences and OSC
    strings are skipped. Cursor movement is not emulated.
    """

    # Regex for CSI sequences: ESC [ params command
    CSI_PATTERN = re.compile(r'\x1b\[([0-9;:?]*)([ -/]*[@-~])')
    # OSC strings end at BEL or ST (ESC \), or run to the end of the line
    OSC_PATTERN = re.compile(r'\x1b\].*?(?:\x07|\x1b\\|$)', re.DOTALL)

    def __init__(self) -> None:
        self.fg = Color.NONE
        self.bg = Color.NONE

    def reset(self) -> None:
        self.fg = Color.NONE
        self.bg = Color.NONE

    @property
    def pair(self) -> ColorPair | None:
        """Current colors, or None when both channels are default."""
        if self.fg.is_default and self.bg.is_default:
            return None
        return ColorPair(self.fg, self.bg)

    def parse(self, line: str) -> Iterator[tuple[str, ColorPair | None]]:
        """Yield (glyph, colors) for every printable character of line."""
        i = 0
        while i < len(line):
            char = line[i]
            if char == '\x1b':
                match = self.CSI_PATTERN.match(line, i)
                if match:
                    if match.group(2) == 'm':
                        self._handle_sgr(match.group(1))
                    i = match.end()
                    continue
                match = self.OSC_PATTERN.match(line, i)
                if match:
                    i = match.end()
                    continue
                # Unhandled escape - skip
                i += 1
                continue

            stored = check_char(char)
            if stored is not None:
                yield stored, self.pair
            i += 1

    def _handle_sgr(self, params_str: str) -> None:
        """Handle SGR (Select Graphic Rendition) parameters."""
        params: list[int] = []
        for p in params_str.replace(':', ';').split(';'):
            params.append(int(p) if p.isdigit() else (0 if p == '' else -1))
        if not params:
            params = [0]

        i = 0
        while i < len(params):
            p = params[i]

            if p == 0:
                self.reset()
            elif 30 <= p <= 37 or 90 <= p <= 97 or p == 39:
                self.fg = Color.from_sgr(p)
            elif 40 <= p <= 47 or 100 <= p <= 107 or p == 49:
                self.bg = Color.from_sgr(p)
            elif p in (38, 48):
                color, consumed = self._extended_color(params[i + 1:])
                if color is not None:
                    if p == 38:
                        self.fg = color
                    else:
                        self.bg = color
                i += consumed

            i += 1

    @staticmethod
    def _extended_color(rest: list[int]) -> tuple[Color | None, int]:
        """Decode the parameters after 38/48; returns (color, params consumed)."""
        if len(rest) >= 2 and rest[0] == 5:
            if 0 <= rest[1] <= 255:
                return Color.from_256(rest[1]), 2
            return None, 2
        if len(rest) >= 4 and rest[0] == 2:
            r, g, b = rest[1:4]
            if all(0 <= c <= 255 for c in (r, g, b)):
                return Color.from_rgb(r, g, b), 4
            return None, 4
        return None, len(rest)


def parse_ansi_line(line: str) -> list[tuple[str, ColorPair | None]]:
    """Parse one line; colors start from the terminal default."""
    return list(AnsiLineParser().parse(line))
