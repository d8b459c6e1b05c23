"""Render 3a art to terminal-compatible escape sequences."""

from art3a.core.art import Art
from art3a.core.color import ColorPair
from art3a.core.constants import RESET_COLORS
from art3a.core.frame import Frame

_DEFAULT_PAIR = ColorPair()


class AnsiRenderer:
    """
    Render frames to ANSI escape sequences for terminal display.

    Within a row, SGR codes are only emitted when the colors change.
    Every colored row ends by resetting both channels so colors never
    bleed into the next line.
    """

    def __init__(self, coalesce: bool = True):
        self.coalesce = coalesce

    def render(self, art: Art) -> list[str]:
        """Render every frame; one string per frame."""
        colors = art.has_color()
        return [self._render_frame(art, frame, colors) for frame in art.frames]

    def render_frame(self, art: Art, index: int) -> str:
        """Render one frame."""
        return self._render_frame(art, art.frame(index), art.has_color())

    def render_string(self, art: Art) -> str:
        """All frames joined by newlines, ending with a color reset."""
        return '\n'.join(self.render(art)) + RESET_COLORS

    def _render_frame(self, art: Art, frame: Frame, colors: bool) -> str:
        lines: list[str] = []

        for row in frame.rows():
            if not colors:
                lines.append(''.join(cell.char for cell in row))
                continue

            line_parts: list[str] = []
            last: ColorPair | None = None
            for cell in row:
                pair = art.resolve(cell) or _DEFAULT_PAIR
                if pair != last or not self.coalesce:
                    line_parts.append(pair.to_ansi())
                    last = pair
                line_parts.append(cell.char)

            # Reset at end of each line to prevent color bleeding
            line_parts.append(RESET_COLORS)
            lines.append(''.join(line_parts))

        return '\n'.join(lines)
