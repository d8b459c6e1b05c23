"""Render 3a art to SVG.

Every frame becomes a `<g class="frame">` group carrying its index and
duration as data attributes. The groups are siblings; showing one at a
time is left to whatever displays the document.
"""

from art3a.core.art import Art
from art3a.core.color import Color
from art3a.core.frame import Frame
from art3a.render.colormap import ColorMapper, CssColorMap
from art3a.render.font import FontMetrics, MonospaceFont

SVG_NS = "http://www.w3.org/2000/svg"


class SvgRenderer:
    """
    Render an Art to an SVG document.

    Colored art gets a background rectangle per cell with a background
    color and one `<tspan>` per cell filled with its foreground color.
    Uncolored art gets one `<tspan>` per row.
    """

    def __init__(
        self,
        color_map: ColorMapper | None = None,
        font: FontMetrics | None = None,
    ):
        self.color_map = color_map or CssColorMap()
        self.font = font or MonospaceFont()

    def render(self, art: Art) -> str:
        """Render all frames into one document."""
        colors = art.has_color()
        groups: list[str] = []
        for index, frame in enumerate(art.frames):
            groups.append(
                f'<g class="frame" data-frame="{index}" data-duration="{frame.duration}">\n'
                + self._render_body(art, frame, colors)
                + '</g>\n'
            )
        return self._document(art.width, art.height, colors, ''.join(groups))

    def render_frame(self, art: Art, index: int) -> str:
        """Render a single frame as a standalone document."""
        frame = art.frame(index)
        colors = art.has_color()
        return self._document(frame.width, frame.height, colors, self._render_body(art, frame, colors))

    def _document(self, columns: int, rows: int, colors: bool, body: str) -> str:
        cell_w, cell_h = self.font.cell_size()
        width = columns * cell_w
        height = rows * cell_h
        parts = [
            '<?xml version="1.0" encoding="utf-8"?>\n',
            f'<svg xmlns="{SVG_NS}" width="{width}" height="{height}" '
            f'viewBox="0 0 {width} {height}" role="img">\n',
            self._style(),
        ]
        if colors:
            parts.append(
                f'<rect x="0" y="0" width="{width}" height="{height}" '
                f'fill="{self.color_map(Color.NONE, False)}"/>\n'
            )
        parts.append(body)
        parts.append('</svg>\n')
        return ''.join(parts)

    def _style(self) -> str:
        family = self._escape(self.font.family)
        return (
            '<style>\n'
            f'text {{ font-family: "{family}", monospace; font-size: {self.font.size}px; }}\n'
            '</style>\n'
        )

    def _render_body(self, art: Art, frame: Frame, colors: bool) -> str:
        if colors:
            return self._backgrounds(art, frame) + self._colored_text(art, frame)
        return self._plain_text(frame)

    def _backgrounds(self, art: Art, frame: Frame) -> str:
        cell_w, cell_h = self.font.cell_size()
        rects: list[str] = []
        for x, y, cell in frame.cells():
            pair = art.resolve(cell)
            if pair is None or pair.bg.is_default:
                continue
            rects.append(
                f'<rect x="{x * cell_w}" y="{y * cell_h}" width="{cell_w}" height="{cell_h}" '
                f'fill="{self.color_map(pair.bg, False)}"/>\n'
            )
        return ''.join(rects)

    def _colored_text(self, art: Art, frame: Frame) -> str:
        cell_w, cell_h = self.font.cell_size()
        off_x, off_y = self.font.baseline_offset()
        spans = ['<text x="0" y="0" xml:space="preserve" dominant-baseline="hanging">\n']
        for x, y, cell in frame.cells():
            pair = art.resolve(cell)
            fill = self.color_map(pair.fg if pair else Color.NONE, True)
            fit = ''
            if self.font.glyph_size(cell.char)[0] != cell_w:
                fit = f' textLength="{cell_w}" lengthAdjust="spacingAndGlyphs"'
            spans.append(
                f'<tspan x="{x * cell_w + off_x}" y="{y * cell_h + off_y}" fill="{fill}"{fit}>'
                f'{self._escape(cell.char)}</tspan>\n'
            )
        spans.append('</text>\n')
        return ''.join(spans)

    def _plain_text(self, frame: Frame) -> str:
        cell_w, cell_h = self.font.cell_size()
        off_x, off_y = self.font.baseline_offset()
        spans = ['<text x="0" y="0" xml:space="preserve" dominant-baseline="hanging">\n']
        for y, row in enumerate(frame.rows()):
            text = ''.join(cell.char for cell in row)
            fit = ''
            expected = cell_w * len(row)
            if sum(self.font.glyph_size(c)[0] for c in text) != expected:
                fit = f' textLength="{expected}" lengthAdjust="spacingAndGlyphs"'
            spans.append(
                f'<tspan x="{off_x}" y="{y * cell_h + off_y}"{fit}>{self._escape(text)}</tspan>\n'
            )
        spans.append('</text>\n')
        return ''.join(spans)

    @staticmethod
    def _escape(text: str) -> str:
        """Escape special XML characters."""
        return (text
            .replace('&', '&amp;')
            .replace('<', '&lt;')
            .replace('>', '&gt;')
            .replace('"', '&quot;')
        )
