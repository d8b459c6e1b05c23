"""
art3a: Python library for animated 3a ASCII art

Read, edit, and export animated ASCII artwork stored in the 3a text format.

Quick Start:
    >>> import art3a
    >>> art = art3a.load("blink.3a")
    >>> art.print(0, 0, 0, "hello")
    >>> art.save("blink.3a")
    >>> svg = art.render_to_svg()

Features:
    - Read and write the current 3a format, read the legacy one
    - Frames sharing one color palette, with tri-state color edits
    - Frame editing: insert, duplicate, remove, reorder, shift
    - Export to ANSI, asciicast v2, SVG, JSON, or plain text
"""

__version__ = "0.1.0"

# Core types
from art3a.core.art import Art
from art3a.core.cell import CLEAR, KEEP, Cell, SetColor
from art3a.core.color import Color, ColorPair
from art3a.core.frame import Frame
from art3a.core.header import Header
from art3a.core.palette import Palette

# Codec
from art3a.codec.options import ParseResult, ReadOptions
from art3a.codec.parser import loads, parse
from art3a.codec.writer import dumps

# Convenience functions
from art3a.io.reader import load
from art3a.io.writer import save

__all__ = [
    # Version
    "__version__",
    # Core types
    "Art",
    "Cell",
    "Color",
    "ColorPair",
    "Frame",
    "Header",
    "Palette",
    "SetColor",
    "KEEP",
    "CLEAR",
    # Codec
    "ParseResult",
    "ReadOptions",
    "parse",
    "loads",
    "dumps",
    # I/O
    "load",
    "save",
]
