"""Best-effort reader for legacy (pre-"@3a") documents.

Legacy documents have no format marker. The header declares the frame
size and which color channels the body carries:

    title Blink
    width 4
    height 1
    colors fg
    delay 200

    ab  1111
    ba  4444

The body is read as a stream of characters; blank lines and anything
after a tab are ignored. Each row is `width` glyphs, followed by
`width` foreground codes when the mode includes fg, then `width`
background codes when it includes bg. `height` rows make a frame.

Fields that cannot be represented are dropped or replaced by defaults,
and a LegacyFieldDropped warning is recorded for each.
"""

import logging
from enum import Enum
from typing import Iterator

from art3a.codec.current import decode_text, split_lines
from art3a.codec.delay import Delay
from art3a.codec.options import ReadOptions
from art3a.core.art import Art
from art3a.core.cell import Cell
from art3a.core.chars import normalize_text
from art3a.core.color import Color, ColorPair
from art3a.core.constants import BUILTIN_COLOR_CHARS, LEGACY_COLOR_TRANSLATION, NO_COLOR_CHAR
from art3a.core.frame import Frame
from art3a.core.header import Header
from art3a.errors import LegacyFieldDropped, MalformedHeader

logger = logging.getLogger(__name__)


class LegacyColorMode(Enum):
    """Color channels carried by a legacy body."""
    NONE = "none"
    FG = "fg"
    BG = "bg"
    FULL = "full"

    @property
    def has_fg(self) -> bool:
        return self in (LegacyColorMode.FG, LegacyColorMode.FULL)

    @property
    def has_bg(self) -> bool:
        return self in (LegacyColorMode.BG, LegacyColorMode.FULL)


def translate_color(code: str) -> Color | None:
    """
    Map a legacy color code to a Color.

    Returns Color.NONE for the no-color markers, and None for codes that
    mean nothing.
    """
    if code in (NO_COLOR_CHAR, ' '):
        return Color.NONE
    code = code.lower()
    if len(code) != 1 or code not in BUILTIN_COLOR_CHARS:
        return None
    return Color.from_builtin(code.translate(LEGACY_COLOR_TRANSLATION))


class LegacyFormatReader:
    """Decode a legacy document, collecting warnings for dropped fields."""

    def __init__(self, text: str, options: ReadOptions | None = None):
        self.lines, _ = split_lines(text)
        self.pos = 0
        self.options = options or ReadOptions()
        self.warnings: list[LegacyFieldDropped] = []

        self.header = Header()
        self.delay: Delay | None = None
        self.mode = LegacyColorMode.NONE
        self.width: int | None = None
        self.height: int | None = None

    @classmethod
    def from_bytes(cls, data: bytes, options: ReadOptions | None = None) -> "LegacyFormatReader":
        return cls(decode_text(data), options)

    def _warn(self, field: str, message: str) -> None:
        warning = LegacyFieldDropped(field, message)
        logger.debug("Legacy field dropped: %s", warning)
        self.warnings.append(warning)

    # Header

    def read_header(self) -> tuple[int, int]:
        """Read header lines up to the first blank line; returns (width, height)."""
        while self.pos < len(self.lines):
            line = self.lines[self.pos]
            self.pos += 1

            before, tab, after = line.partition('\t')
            if tab and not before:
                self.header.comments.append(normalize_text(after).strip())
                continue
            line = normalize_text(before).strip()
            if not line:
                break
            if line.startswith('@'):
                self.header.comments.append(line[1:].strip())
                continue
            if line.startswith('#'):
                for tag in line.split():
                    if tag.startswith('#'):
                        self.header.add_tag(tag[1:])
                continue

            key, _, value = line.partition(' ')
            value = value.strip()
            if key == "utf8":
                continue
            if not value:
                self._warn(key, f"key {key!r} has no value")
                continue
            self._apply_key(key, value)

        if not self.width or not self.height:
            raise MalformedHeader("legacy document must declare a non-zero width and height")
        return self.width, self.height

    def _apply_key(self, key: str, value: str) -> None:
        header = self.header
        if key == "title":
            if header.title is None:
                header.title = value
            else:
                self._warn(key, "duplicate title ignored")
        elif key == "author":
            if value not in header.authors:
                header.authors.append(value)
        elif key == "loop":
            lowered = value.lower()
            if lowered in ("yes", "true"):
                header.loop = True
            elif lowered in ("no", "false"):
                header.loop = False
            else:
                self._warn(key, f"unrecognised loop value {value!r}")
        elif key == "preview":
            if value.isdigit():
                header.preview = int(value)
            else:
                self._warn(key, f"unrecognised preview value {value!r}")
        elif key == "delay":
            try:
                self.delay = Delay.parse(value)
            except ValueError as e:
                self._warn(key, f"unrecognised delay {value!r}: {e}")
        elif key == "colors":
            try:
                self.mode = LegacyColorMode(value.lower())
            except ValueError:
                self._warn(key, f"unrecognised color mode {value!r}, reading without colors")
        elif key in ("width", "height"):
            if value.isdigit():
                setattr(self, key, int(value))
            else:
                raise MalformedHeader(f"{key}: expected a number, got {value!r}")
        else:
            header.extra_keys.append((key, value))

    # Body

    def _stream(self) -> Iterator[str]:
        """Yield body characters, skipping blank lines and tab comments."""
        for line in self.lines[self.pos:]:
            line = normalize_text(line.partition('\t')[0])
            yield from line

    def read(self) -> Art:
        """Read the whole document."""
        width, height = self.read_header()
        art = Art(header=self.header)

        channels = 1 + self.mode.has_fg + self.mode.has_bg
        row_length = width * channels
        rows: list[list[Cell]] = []
        pending: list[str] = []
        bad_codes = 0

        for char in self._stream():
            pending.append(char)
            if len(pending) < row_length:
                continue

            text = pending[:width]
            offset = width
            fg_codes = bg_codes = None
            if self.mode.has_fg:
                fg_codes = pending[offset:offset + width]
                offset += width
            if self.mode.has_bg:
                bg_codes = pending[offset:offset + width]
            pending = []

            row = []
            for x, glyph in enumerate(text):
                fg = translate_color(fg_codes[x]) if fg_codes else Color.NONE
                bg = translate_color(bg_codes[x]) if bg_codes else Color.NONE
                if fg is None or bg is None:
                    bad_codes += 1
                pair = ColorPair(fg or Color.NONE, bg or Color.NONE)
                color = None if pair.is_default else art.palette.search_or_create(pair)
                row.append(Cell(glyph, color))
            rows.append(row)

            if len(rows) == height:
                art.frames.append(Frame.from_rows(rows))
                rows = []

        if bad_codes:
            self._warn("colors", f"{bad_codes} cells had unknown color codes and were left uncolored")
        if rows or pending:
            self._warn("body", "trailing data does not complete a frame and was dropped")

        if self.delay is None:
            self._warn(
                "delay",
                f"no frame timing, using {self.options.legacy_default_delay} ms per frame",
            )
            durations = [self.options.legacy_default_delay] * len(art.frames)
        else:
            durations = self.delay.to_durations(len(art.frames))
        for frame, duration in zip(art.frames, durations):
            frame.duration = duration

        logger.debug(
            "Read legacy document: %d frames (%dx%d), %d warnings",
            len(art.frames), width, height, len(self.warnings),
        )
        return art


def read_legacy(data: bytes, options: ReadOptions | None = None) -> tuple[Art, list[LegacyFieldDropped]]:
    """Decode a legacy document, returning the art and any warnings."""
    reader = LegacyFormatReader.from_bytes(data, options)
    art = reader.read()
    return art, reader.warnings
