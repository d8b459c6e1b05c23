"""Render 3a art to plain text (strip colors)."""

from art3a.core.art import Art
from art3a.core.frame import Frame


class TextRenderer:
    """
    Render frames to plain text without any styling.

    By default trailing spaces on each row and trailing blank rows are
    dropped; `preserve_whitespace=True` keeps every frame a full
    rectangle.
    """

    def __init__(self, preserve_whitespace: bool = False):
        self.preserve_whitespace = preserve_whitespace

    def render(self, art: Art) -> list[str]:
        """Render every frame; one string per frame."""
        return [self.render_frame(frame) for frame in art.frames]

    def render_frame(self, frame: Frame) -> str:
        """Render one frame to plain text."""
        rows = frame.text()
        if self.preserve_whitespace:
            return '\n'.join(rows)
        return '\n'.join(row.rstrip() for row in rows).rstrip('\n')
