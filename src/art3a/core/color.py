"""Color representation for 3a art."""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from art3a.core.constants import (
    BUILTIN_COLOR_CHARS,
    COLOR_ALIASES,
    COLOR_NAMES,
    CSI,
)


class ColorMode(Enum):
    """Color mode for ANSI sequences."""
    DEFAULT = "default"     # Terminal default (SGR 39, 49)
    STANDARD_16 = "16"      # Standard 16-color (SGR 30-37, 40-47, 90-97, 100-107)
    EXTENDED_256 = "256"    # Extended 256-color (SGR 38;5;n, 48;5;n)
    TRUE_COLOR = "rgb"      # 24-bit true color (SGR 38;2;r;g;b, 48;2;r;g;b)


@dataclass(frozen=True)
class Color:
    """
    Represents a single color channel value.

    Supports the terminal default, 16-color, 256-color, and true color
    modes. Colors compare and hash structurally.
    """
    mode: ColorMode
    value: int | tuple[int, int, int] | None = None

    # Terminal default
    NONE: ClassVar["Color"]

    # Standard 16 colors (index 0-15)
    BLACK: ClassVar["Color"]
    RED: ClassVar["Color"]
    GREEN: ClassVar["Color"]
    YELLOW: ClassVar["Color"]
    BLUE: ClassVar["Color"]
    MAGENTA: ClassVar["Color"]
    CYAN: ClassVar["Color"]
    WHITE: ClassVar["Color"]
    BRIGHT_BLACK: ClassVar["Color"]
    BRIGHT_RED: ClassVar["Color"]
    BRIGHT_GREEN: ClassVar["Color"]
    BRIGHT_YELLOW: ClassVar["Color"]
    BRIGHT_BLUE: ClassVar["Color"]
    BRIGHT_MAGENTA: ClassVar["Color"]
    BRIGHT_CYAN: ClassVar["Color"]
    BRIGHT_WHITE: ClassVar["Color"]

    @classmethod
    def from_16(cls, index: int) -> "Color":
        """Create a Color from a 16-color index (8-15 are the bright variants)."""
        if not 0 <= index <= 15:
            raise ValueError(f"16-color index must be 0-15, got {index}")
        return cls(ColorMode.STANDARD_16, index)

    @classmethod
    def from_sgr(cls, code: int) -> "Color":
        """Create a Color from an SGR code (30-37, 40-47, 90-97, 100-107, 39, 49)."""
        if code in (39, 49):
            return cls.NONE
        if 30 <= code <= 37:
            return cls(ColorMode.STANDARD_16, code - 30)
        elif 40 <= code <= 47:
            return cls(ColorMode.STANDARD_16, code - 40)
        elif 90 <= code <= 97:
            return cls(ColorMode.STANDARD_16, code - 90 + 8)
        elif 100 <= code <= 107:
            return cls(ColorMode.STANDARD_16, code - 100 + 8)
        else:
            raise ValueError(f"Invalid SGR color code: {code}")

    @classmethod
    def from_256(cls, index: int) -> "Color":
        """Create a Color from a 256-color index."""
        if not 0 <= index <= 255:
            raise ValueError(f"256-color index must be 0-255, got {index}")
        return cls(ColorMode.EXTENDED_256, index)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        """Create a Color from RGB values."""
        if not all(0 <= c <= 255 for c in (r, g, b)):
            raise ValueError(f"RGB values must be 0-255, got ({r}, {g}, {b})")
        return cls(ColorMode.TRUE_COLOR, (r, g, b))

    @classmethod
    def from_builtin(cls, char: str) -> "Color":
        """
        Create a Color from a built-in color channel character.

        '0'-'7' are the normal colors black..white, '8'-'f' the bright
        ones. Any other character yields the terminal default.
        """
        index = BUILTIN_COLOR_CHARS.find(char) if len(char) == 1 else -1
        if index < 0:
            return cls.NONE
        return cls(ColorMode.STANDARD_16, index)

    @classmethod
    def parse(cls, text: str) -> "Color":
        """
        Parse a color from its text form.

        Accepts a color name ("red", "bright-green", "gray"), six hex
        digits ("ff8000"), or a 256-color index ("0"-"255").

        Raises:
            ValueError: If the text is not a valid color.
        """
        s = text.strip().lower()
        if s in COLOR_NAMES:
            return cls(ColorMode.STANDARD_16, COLOR_NAMES.index(s))
        if s in COLOR_ALIASES:
            index = COLOR_ALIASES[s]
            return cls.NONE if index is None else cls(ColorMode.STANDARD_16, index)
        if len(s) == 6 and all(c in "0123456789abcdef" for c in s):
            return cls.from_rgb(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
        if s.isdigit() and len(s) <= 3:
            return cls.from_256(int(s))
        raise ValueError(f"Invalid color: {text!r}")

    @property
    def is_default(self) -> bool:
        """True for the terminal default color."""
        return self.mode == ColorMode.DEFAULT

    def to_sgr_fg(self) -> str:
        """Return SGR parameters for foreground color."""
        if self.mode == ColorMode.DEFAULT:
            return "39"
        elif self.mode == ColorMode.STANDARD_16:
            assert isinstance(self.value, int)
            if self.value < 8:
                return str(30 + self.value)
            else:
                return str(90 + self.value - 8)
        elif self.mode == ColorMode.EXTENDED_256:
            return f"38;5;{self.value}"
        else:  # TRUE_COLOR
            assert isinstance(self.value, tuple)
            r, g, b = self.value
            return f"38;2;{r};{g};{b}"

    def to_sgr_bg(self) -> str:
        """Return SGR parameters for background color."""
        if self.mode == ColorMode.DEFAULT:
            return "49"
        elif self.mode == ColorMode.STANDARD_16:
            assert isinstance(self.value, int)
            if self.value < 8:
                return str(40 + self.value)
            else:
                return str(100 + self.value - 8)
        elif self.mode == ColorMode.EXTENDED_256:
            return f"48;5;{self.value}"
        else:  # TRUE_COLOR
            assert isinstance(self.value, tuple)
            r, g, b = self.value
            return f"48;2;{r};{g};{b}"

    def to_ansi(self, foreground: bool = True) -> str:
        """Return the escape sequence selecting this color."""
        params = self.to_sgr_fg() if foreground else self.to_sgr_bg()
        return f"{CSI}{params}m"

    def __str__(self) -> str:
        if self.mode == ColorMode.DEFAULT:
            return ""
        elif self.mode == ColorMode.STANDARD_16:
            assert isinstance(self.value, int)
            return COLOR_NAMES[self.value]
        elif self.mode == ColorMode.EXTENDED_256:
            return str(self.value)
        assert isinstance(self.value, tuple)
        r, g, b = self.value
        return f"{r:02x}{g:02x}{b:02x}"


# Initialize class-level color constants
Color.NONE = Color(ColorMode.DEFAULT)
Color.BLACK = Color(ColorMode.STANDARD_16, 0)
Color.RED = Color(ColorMode.STANDARD_16, 1)
Color.GREEN = Color(ColorMode.STANDARD_16, 2)
Color.YELLOW = Color(ColorMode.STANDARD_16, 3)
Color.BLUE = Color(ColorMode.STANDARD_16, 4)
Color.MAGENTA = Color(ColorMode.STANDARD_16, 5)
Color.CYAN = Color(ColorMode.STANDARD_16, 6)
Color.WHITE = Color(ColorMode.STANDARD_16, 7)
Color.BRIGHT_BLACK = Color(ColorMode.STANDARD_16, 8)
Color.BRIGHT_RED = Color(ColorMode.STANDARD_16, 9)
Color.BRIGHT_GREEN = Color(ColorMode.STANDARD_16, 10)
Color.BRIGHT_YELLOW = Color(ColorMode.STANDARD_16, 11)
Color.BRIGHT_BLUE = Color(ColorMode.STANDARD_16, 12)
Color.BRIGHT_MAGENTA = Color(ColorMode.STANDARD_16, 13)
Color.BRIGHT_CYAN = Color(ColorMode.STANDARD_16, 14)
Color.BRIGHT_WHITE = Color(ColorMode.STANDARD_16, 15)


@dataclass(frozen=True)
class ColorPair:
    """
    A foreground and background color, the unit stored in a palette.

    Text form is "fg:<color> bg:<color>" with either half optional.
    """
    fg: Color = field(default_factory=lambda: Color.NONE)
    bg: Color = field(default_factory=lambda: Color.NONE)

    @classmethod
    def parse(cls, text: str) -> "ColorPair":
        """
        Parse "fg:red bg:blue" style text.

        Raises:
            ValueError: On an unknown token, an invalid color, or a
                channel given twice.
        """
        fg: Color | None = None
        bg: Color | None = None
        for token in text.split():
            if token.startswith("fg:"):
                if fg is not None:
                    raise ValueError(f"Duplicate fg in color pair: {text!r}")
                fg = Color.parse(token[3:])
            elif token.startswith("bg:"):
                if bg is not None:
                    raise ValueError(f"Duplicate bg in color pair: {text!r}")
                bg = Color.parse(token[3:])
            else:
                raise ValueError(f"Invalid color pair: {text!r}")
        return cls(fg or Color.NONE, bg or Color.NONE)

    @classmethod
    def from_builtin(cls, char: str) -> "ColorPair":
        """Pair for a built-in color channel character (foreground only)."""
        return cls(fg=Color.from_builtin(char))

    @property
    def is_default(self) -> bool:
        return self.fg.is_default and self.bg.is_default

    def invert(self) -> "ColorPair":
        """Return a pair with foreground and background swapped."""
        return ColorPair(self.bg, self.fg)

    def to_ansi(self) -> str:
        """Escape sequence setting both channels."""
        return f"{CSI}{self.fg.to_sgr_fg()}m{CSI}{self.bg.to_sgr_bg()}m"

    def __str__(self) -> str:
        parts = []
        if not self.fg.is_default:
            parts.append(f"fg:{self.fg}")
        if not self.bg.is_default:
            parts.append(f"bg:{self.bg}")
        return " ".join(parts)
