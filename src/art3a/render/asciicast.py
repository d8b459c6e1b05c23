"""Render 3a art as an asciicast v2 terminal recording.

The recording is newline-delimited JSON: a header object followed by
`[time, "o", data]` output events. Each frame is drawn at the time the
previous frames have finished, then the cursor returns to the top-left
corner of the art so the next frame overwrites it.
"""

import json
from typing import Any

from art3a.core.art import Art
from art3a.core.constants import CSI, HIDE_CURSOR, SHOW_CURSOR
from art3a.render.ansi import AnsiRenderer


class AsciicastRenderer:
    """Render an Art to an asciicast v2 document."""

    def __init__(self, hide_cursor: bool = True):
        self.hide_cursor = hide_cursor
        self._ansi = AnsiRenderer()

    def header(self, art: Art) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": 2,
            "width": art.width,
            "height": art.height,
            "duration": art.duration(),
        }
        if art.title:
            data["title"] = art.title_line()
        return data

    def events(self, art: Art) -> list[list[Any]]:
        """Output events as [seconds, "o", data] triples."""
        height = art.height
        rewind = f"\r{CSI}{height - 1}A" if height > 1 else "\r"

        events: list[list[Any]] = []
        if self.hide_cursor:
            events.append([0.0, "o", HIDE_CURSOR])

        elapsed_ms = 0
        for frame, text in zip(art.frames, self._ansi.render(art)):
            events.append([elapsed_ms / 1000, "o", text.replace('\n', '\r\n') + rewind])
            elapsed_ms += frame.duration

        end = elapsed_ms / 1000
        events.append([end, "o", "\n" * height])
        if self.hide_cursor:
            events.append([end, "o", SHOW_CURSOR])
        return events

    def render(self, art: Art) -> str:
        """Render the whole recording."""
        lines = [json.dumps(self.header(art), ensure_ascii=False)]
        lines.extend(json.dumps(event, ensure_ascii=False) for event in self.events(art))
        return '\n'.join(lines) + '\n'
