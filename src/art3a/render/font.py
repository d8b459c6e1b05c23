"""Font metrics used to lay out glyphs in vector output.

`MonospaceFont` assumes every glyph fills exactly one cell.
`PillowFontMetrics` measures glyphs with a real font file so wide or
narrow glyphs can be squeezed into their cell:

    from art3a.render.font import PillowFontMetrics
    font = PillowFontMetrics("DejaVuSansMono.ttf", size=20)
    svg = SvgRenderer(font=font).render(art)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

try:
    from PIL import ImageFont
    HAS_PIL = True
except ImportError:
    HAS_PIL = False


def _check_pil() -> None:
    """Raise ImportError if PIL is not available."""
    if not HAS_PIL:
        raise ImportError(
            "Pillow is required for font measurement. "
            "Install with: uv pip install art3a[image]"
        )


class FontMetrics(Protocol):
    """Source of glyph geometry for the SVG renderer."""

    family: str
    size: int

    def cell_size(self) -> tuple[int, int]:
        """Width and height of one character cell, in pixels."""
        ...

    def glyph_size(self, char: str) -> tuple[int, int]:
        """Advance width and height of a glyph, in pixels."""
        ...

    def baseline_offset(self) -> tuple[int, int]:
        """Offset of the glyph origin inside its cell."""
        ...


@dataclass(frozen=True)
class MonospaceFont:
    """Fixed cell metrics; every glyph is exactly one cell wide."""
    family: str = "Courier New"
    size: int = 20
    width: int = 12
    height: int = 20
    offset_x: int = 0
    offset_y: int = 2

    def cell_size(self) -> tuple[int, int]:
        return self.width, self.height

    def glyph_size(self, char: str) -> tuple[int, int]:
        return self.width, self.height

    def baseline_offset(self) -> tuple[int, int]:
        return self.offset_x, self.offset_y


class PillowFontMetrics:
    """
    Measure glyphs with a TrueType/OpenType font through Pillow.

    The cell size is taken from the advance width of 'M' and the font's
    ascent plus descent, unless given explicitly. Without a path the
    TrueType font bundled with Pillow is used.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        size: int = 20,
        family: str | None = None,
        cell: tuple[int, int] | None = None,
        offset: tuple[int, int] = (0, 2),
    ):
        _check_pil()
        self.path = None if path is None else Path(path)
        self.size = size
        if self.path is None:
            self._font = ImageFont.load_default(size)
            self.family = family or self._font.getname()[0] or "sans-serif"
        else:
            self._font = ImageFont.truetype(str(self.path), size)
            self.family = family or self.path.stem
        if cell is None:
            ascent, descent = self._font.getmetrics()
            cell = (round(self._font.getlength("M")), ascent + descent)
        self._cell = cell
        self._offset = offset
        self._cache: dict[str, tuple[int, int]] = {}

    def cell_size(self) -> tuple[int, int]:
        return self._cell

    def glyph_size(self, char: str) -> tuple[int, int]:
        size = self._cache.get(char)
        if size is None:
            size = (round(self._font.getlength(char)), self._cell[1])
            self._cache[char] = size
        return size

    def baseline_offset(self) -> tuple[int, int]:
        return self._offset
