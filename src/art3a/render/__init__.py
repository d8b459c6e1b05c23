"""Renderers for exporting 3a art to various formats."""

from art3a.render.ansi import AnsiRenderer
from art3a.render.asciicast import AsciicastRenderer
from art3a.render.colormap import ColorMapper, CssColorMap
from art3a.render.font import FontMetrics, MonospaceFont, PillowFontMetrics
from art3a.render.json_format import JsonRenderer
from art3a.render.svg import SvgRenderer
from art3a.render.text import TextRenderer

__all__ = [
    "AnsiRenderer",
    "AsciicastRenderer",
    "SvgRenderer",
    "JsonRenderer",
    "TextRenderer",
    "ColorMapper",
    "CssColorMap",
    "FontMetrics",
    "MonospaceFont",
    "PillowFontMetrics",
]
