"""Render 3a art to a structured JSON document.

Example output:
{
  "meta": {"frames": 2, "width": 3, "height": 1, "duration": 0.1, "colors": true},
  "header": {"title": "Blink", "authors": ["ann"], ...},
  "palette": [{"fg": "red", "bg": ""}],
  "attached": null,
  "extra_blocks": [],
  "frames": [
    {"duration": 50, "text": ["abc"], "colors": [[0, null, 0]]}
  ]
}

Colors are given in their 3a text form ("red", "bright-blue", "196",
"ff8000"); an empty string is the terminal default. Cell colors are
palette indices, or null for no color.
"""

import json
from typing import Any

from art3a.core.art import Art
from art3a.core.header import Header


class JsonRenderer:
    """Render an Art to JSON."""

    def __init__(self, indent: int | None = 2):
        """
        Args:
            indent: JSON indentation (None for compact)
        """
        self.indent = indent

    def render(self, art: Art) -> str:
        """Render art to JSON string."""
        data = self.to_dict(art)
        return json.dumps(data, indent=self.indent, ensure_ascii=False)

    def to_dict(self, art: Art) -> dict[str, Any]:
        """Convert art to dictionary."""
        colors = art.has_color()
        return {
            "meta": {
                "frames": len(art.frames),
                "width": art.width,
                "height": art.height,
                "duration": art.duration(),
                "colors": colors,
            },
            "header": self._header(art.header),
            "palette": [{"fg": str(pair.fg), "bg": str(pair.bg)} for pair in art.palette],
            "attached": art.attached,
            "extra_blocks": [{"name": name, "lines": lines} for name, lines in art.extra_blocks],
            "frames": [
                {
                    "duration": frame.duration,
                    "text": frame.text(),
                    "colors": frame.colors() if colors else None,
                }
                for frame in art.frames
            ],
        }

    @staticmethod
    def _header(header: Header) -> dict[str, Any]:
        return {
            "title": header.title,
            "authors": header.authors,
            "orig_authors": header.orig_authors,
            "src": header.src,
            "editor": header.editor,
            "license": header.license,
            "loop": header.loop,
            "preview": header.preview,
            "tags": header.tags,
            "extra_keys": [[key, value] for key, value in header.extra_keys],
        }
