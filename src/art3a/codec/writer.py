"""Encode an Art as a current-format ("@3a") document."""

import logging
from typing import Iterator

from art3a.codec.delay import Delay
from art3a.core.art import Art
from art3a.core.chars import check_char
from art3a.core.constants import DEFAULT_DELAY_MS, FORMAT_MAGIC, NO_COLOR_CHAR, PALETTE_NAME_ALPHABET
from art3a.core.frame import Frame
from art3a.errors import FrameSizeMismatch, InvalidColorIndex, MalformedBody, MalformedHeader

logger = logging.getLogger(__name__)


def palette_names() -> Iterator[str]:
    """Yield the characters used to name palette entries, in order."""
    yield from PALETTE_NAME_ALPHABET
    cp = 0xA1
    while cp <= 0x10FFFF:
        char = chr(cp)
        if check_char(char) == char and char not in PALETTE_NAME_ALPHABET:
            yield char
        cp += 1


class CurrentFormatWriter:
    """Serialize an Art, validating it first."""

    def __init__(self, art: Art):
        self.art = art
        self.colors = art.has_color()
        self.names: list[str] = []
        if self.colors:
            names = palette_names()
            self.names = [next(names) for _ in range(len(art.palette))]

    def validate(self) -> None:
        """
        Check that the art can be expressed in the format.

        Raises:
            FrameSizeMismatch: If frames differ in size.
            MalformedBody: If a frame has no rows or no columns, a glyph
                cannot be stored, or colors are used while the header
                turns them off.
            MalformedHeader: If a frame duration is negative.
            InvalidColorIndex: If a cell refers to a missing palette entry.
        """
        frames = self.art.frames
        if not frames:
            return
        for i, frame in enumerate(frames):
            if frame.duration < 0:
                raise MalformedHeader(f"frame {i} has a negative duration ({frame.duration} ms)")
        width, height = frames[0].size
        for i, frame in enumerate(frames):
            if frame.size != (width, height):
                raise FrameSizeMismatch(
                    f"frame {i} is {frame.width}x{frame.height}, expected {width}x{height}"
                )
        if width == 0 or height == 0:
            raise MalformedBody(f"cannot encode empty {width}x{height} frames")
        for i, frame in enumerate(frames):
            for x, y, cell in frame.cells():
                if len(cell.char) != 1 or check_char(cell.char) != cell.char:
                    raise MalformedBody(
                        f"frame {i} cell ({x}, {y}) holds an unstorable glyph {cell.char!r}"
                    )
        if not self.colors:
            if len(self.art.palette) or any(f.has_color() for f in frames):
                raise MalformedBody(
                    "the header turns colors off but the art has a palette or colored cells"
                )
            return
        palette_size = len(self.art.palette)
        for i, frame in enumerate(frames):
            for index in frame.color_indices():
                if not 0 <= index < palette_size:
                    raise InvalidColorIndex(
                        f"frame {i} refers to palette index {index} ({palette_size} entries)",
                        name=index,
                    )

    def header_lines(self) -> list[str]:
        header = self.art.header
        lines = [FORMAT_MAGIC]
        lines.extend(f";; {comment}" if comment else ";;" for comment in header.comments)
        if header.title is not None:
            lines.append(f"title {header.title}")
        lines.extend(f"orig-author {a}" for a in header.orig_authors)
        lines.extend(f"author {a}" for a in header.authors)
        for key in ("src", "editor", "license"):
            value = getattr(header, key)
            if value is not None:
                lines.append(f"{key} {value}")

        delay = Delay.from_durations([d or DEFAULT_DELAY_MS for d in self.art.durations()])
        if not delay.is_default:
            lines.append(f"delay {delay}")
        if header.loop is not None:
            lines.append(f"loop {'yes' if header.loop else 'no'}")
        if header.preview is not None:
            lines.append(f"preview {header.preview}")
        if header.colors is not None:
            lines.append(f"colors {'yes' if header.colors else 'no'}")
        for name, pair in zip(self.names, self.art.palette):
            lines.append(f"col {name} {pair}".rstrip())
        lines.extend(f"{key} {value}" for key, value in header.extra_keys)
        if header.tags:
            lines.append(" ".join(f"#{tag}" for tag in header.tags))
        lines.append("")
        return lines

    def _frame_lines(self, frame: Frame, text: bool, colors: bool) -> list[str]:
        lines = []
        for row in frame.rows():
            line = ''.join(cell.char for cell in row) if text else ''
            if colors:
                line += ''.join(
                    NO_COLOR_CHAR if cell.color is None else self.names[cell.color]
                    for cell in row
                )
            lines.append(line)
        lines.append("")
        return lines

    def body_lines(self) -> list[str]:
        frames = self.art.frames
        lines: list[str] = []
        text_pinned, colors_pinned = self.art.pinned() if self.colors else (False, False)
        if colors_pinned:
            lines.append("@color-pin")
            lines.extend(self._frame_lines(frames[0], text=False, colors=True))
            body_text, body_colors = True, False
        elif text_pinned:
            lines.append("@text-pin")
            lines.extend(self._frame_lines(frames[0], text=True, colors=False))
            body_text, body_colors = False, True
        else:
            body_text, body_colors = True, self.colors
        lines.append("@body")
        for frame in frames:
            lines.extend(self._frame_lines(frame, body_text, body_colors))
        return lines

    def write(self) -> str:
        self.validate()
        lines = self.header_lines()
        if self.art.attached:
            lines.extend(["@attach", self.art.attached, ""])
        for name, block in self.art.extra_blocks:
            lines.append(f"@{name}")
            lines.extend(line for line in block if line)
            lines.append("")
        lines.extend(self.body_lines())
        return "\n".join(lines) + "\n"


def dumps(art: Art) -> bytes:
    """Encode an Art as a UTF-8 current-format document."""
    text = CurrentFormatWriter(art).write()
    logger.debug("Encoded %d frames into %d characters", len(art.frames), len(text))
    return text.encode('utf-8')
