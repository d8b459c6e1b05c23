"""Shared constants for 3a art processing."""

import string

# ANSI escape sequences
ESC = "\x1b"
CSI = f"{ESC}["
RESET = f"{CSI}0m"
RESET_COLORS = f"{CSI}39m{CSI}49m"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"

# Format markers
FORMAT_MAGIC = "@3a"
NO_COLOR_CHAR = "_"

# Frame timing (milliseconds)
DEFAULT_DELAY_MS = 50
LEGACY_DEFAULT_DELAY_MS = 50

# Standard 16-color names, index = color value
COLOR_NAMES: tuple[str, ...] = (
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white",
    "bright-black", "bright-red", "bright-green", "bright-yellow",
    "bright-blue", "bright-magenta", "bright-cyan", "bright-white",
)

# Extra spellings accepted when parsing
COLOR_ALIASES = {
    "gray": 8,
    "grey": 8,
    "default": None,
}

# Built-in color channel characters: '0'-'f' select a 16-color foreground
BUILTIN_COLOR_CHARS = "0123456789abcdef"

# Names assigned to palette entries on write, in order
PALETTE_NAME_ALPHABET = (
    BUILTIN_COLOR_CHARS
    + "ghijklmnopqrstuvwxyz"
    + string.ascii_uppercase
    + "!\"#$%&'()*+,-./:;<=>?@[\\]^`{|}~"
)

# Legacy files number the 16 colors with red and blue swapped (and
# yellow and cyan), this maps legacy codes to current ones
LEGACY_COLOR_TRANSLATION = str.maketrans("13469bce", "4613ce9b")

# Header keys understood by the legacy reader
LEGACY_KEYS = frozenset(
    ("title", "author", "loop", "preview", "delay", "colors", "width", "height", "utf8")
)
