"""Core data structures for 3a art representation."""

from art3a.core.art import Art
from art3a.core.cell import CLEAR, KEEP, Cell, Clear, ColorEdit, Keep, SetColor
from art3a.core.color import Color, ColorMode, ColorPair
from art3a.core.frame import Frame
from art3a.core.header import Header
from art3a.core.palette import Palette

__all__ = [
    "Art",
    "Cell",
    "ColorEdit",
    "Keep",
    "Clear",
    "SetColor",
    "KEEP",
    "CLEAR",
    "Color",
    "ColorMode",
    "ColorPair",
    "Frame",
    "Header",
    "Palette",
]
