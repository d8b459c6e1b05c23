"""Reader for the current ("@3a") generation of the format.

A document is a header of `key value` lines ended by a blank line,
followed by blocks introduced by `@name` lines:

    @3a
    title Spinner
    col r fg:red
    col g fg:green bg:black

    @body
    |/rg
    -\\gr

Each body row holds the glyph channel followed by the color channel.
Frames are separated by a blank line.
"""

import logging
from dataclasses import dataclass, field

from art3a.codec.delay import Delay
from art3a.core.art import Art
from art3a.core.cell import Cell
from art3a.core.chars import check_char, normalize_text
from art3a.core.color import ColorPair
from art3a.core.constants import BUILTIN_COLOR_CHARS, FORMAT_MAGIC, NO_COLOR_CHAR
from art3a.core.frame import Frame
from art3a.core.header import Header
from art3a.core.palette import Palette
from art3a.errors import (
    FrameSizeMismatch,
    InvalidColorIndex,
    MalformedBody,
    MalformedHeader,
    TruncatedData,
)

logger = logging.getLogger(__name__)

_SINGLE_KEYS = ("title", "src", "editor", "license")


def decode_text(data: bytes) -> str:
    """
    Decode UTF-8 input, dropping a leading byte order mark.

    Raises:
        TruncatedData: If the input ends inside a multi-byte sequence.
        MalformedHeader: If the input is not UTF-8 at all.
    """
    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError as e:
        if e.end == len(data) and e.reason == "unexpected end of data":
            raise TruncatedData("input ends inside a UTF-8 sequence") from e
        raise MalformedHeader(f"input is not valid UTF-8 at byte {e.start}") from e
    return text.removeprefix('\ufeff')


def split_lines(text: str) -> tuple[list[str], bool]:
    """Split text into lines; the flag tells if the last line was complete."""
    lines = text.split('\n')
    complete = lines[-1] == ''
    if complete:
        lines.pop()
    return [line.removesuffix('\r') for line in lines], complete


def parse_flag(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("yes", "true"):
        return True
    if lowered in ("no", "false"):
        return False
    raise MalformedHeader(f"{key}: expected yes or no, got {value!r}")


@dataclass
class _RawFrame:
    rows: list[str]
    terminated: bool


@dataclass
class _HeaderState:
    header: Header = field(default_factory=Header)
    delay: Delay | None = None
    names: dict[str, int] = field(default_factory=dict)
    palette: Palette = field(default_factory=Palette)


class CurrentFormatReader:
    """
    Decode a current-format document into an Art.

    The reader is strict: any structural problem aborts the read with a
    CodecError subclass and no partial result.
    """

    def __init__(self, text: str):
        self.lines, self.complete = split_lines(text)
        self.pos = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "CurrentFormatReader":
        return cls(decode_text(data))

    # Line cursor

    def _at_end(self) -> bool:
        return self.pos >= len(self.lines)

    def _next_line(self) -> str:
        line = self.lines[self.pos]
        self.pos += 1
        return line

    # Header

    def read_header(self) -> _HeaderState:
        if self._at_end() or self._next_line().strip() != FORMAT_MAGIC:
            raise MalformedHeader(f"document must start with {FORMAT_MAGIC}")

        state = _HeaderState()
        header = state.header
        while not self._at_end():
            line = normalize_text(self._next_line()).strip()
            if not line:
                return state
            if self._at_end():
                # The header needs a blank line after it, so a final
                # header line means the input was cut short
                raise TruncatedData("input ends inside the header")
            if line.startswith(';;'):
                header.comments.append(line[2:].strip())
                continue
            if line.startswith('#'):
                for tag in line.split():
                    if tag.startswith('#'):
                        header.add_tag(tag[1:])
                continue

            key, _, value = line.partition(' ')
            value = value.strip()
            if not value:
                raise MalformedHeader(f"header key without value: {line!r}")
            self._apply_key(state, key, value)

        raise TruncatedData("input ends before the end of the header")

    def _apply_key(self, state: _HeaderState, key: str, value: str) -> None:
        header = state.header
        if key in _SINGLE_KEYS:
            if getattr(header, key) is not None:
                raise MalformedHeader(f"duplicate header key: {key}")
            setattr(header, key, value)
        elif key == "author":
            if value not in header.authors:
                header.authors.append(value)
        elif key == "orig-author":
            if value not in header.orig_authors:
                header.orig_authors.append(value)
        elif key == "delay":
            if state.delay is not None:
                raise MalformedHeader("duplicate header key: delay")
            try:
                state.delay = Delay.parse(value)
            except ValueError as e:
                raise MalformedHeader(f"delay: {e}") from e
        elif key == "loop":
            if header.loop is not None:
                raise MalformedHeader("duplicate header key: loop")
            header.loop = parse_flag(key, value)
        elif key == "preview":
            if header.preview is not None:
                raise MalformedHeader("duplicate header key: preview")
            if not value.isdigit():
                raise MalformedHeader(f"preview: expected a frame number, got {value!r}")
            header.preview = int(value)
        elif key == "colors":
            if header.colors is not None:
                raise MalformedHeader("duplicate header key: colors")
            header.colors = parse_flag(key, value)
        elif key == "col":
            self._apply_color(state, value)
        else:
            header.extra_keys.append((key, value))

    def _apply_color(self, state: _HeaderState, value: str) -> None:
        name, _, pair_text = value.partition(' ')
        if len(name) != 1 or check_char(name) != name or name in (NO_COLOR_CHAR, ' '):
            raise MalformedHeader(f"invalid color name: {name!r}")
        if name in state.names:
            raise MalformedHeader(f"duplicate color name: {name!r}")
        try:
            pair = ColorPair.parse(pair_text)
        except ValueError as e:
            raise MalformedHeader(f"col {name}: {e}") from e
        state.names[name] = state.palette.search_or_create(pair)

    # Blocks

    def _next_block(self) -> str | None:
        while not self._at_end():
            line = normalize_text(self._next_line())
            if not line.strip():
                continue
            if not line.startswith('@'):
                raise MalformedBody(f"expected a block title, got {line!r}")
            return line[1:].strip()
        return None

    def _read_rows(self) -> _RawFrame:
        rows: list[str] = []
        while not self._at_end():
            line = normalize_text(self._next_line())
            if not line:
                return _RawFrame(rows, terminated=True)
            rows.append(line)
        return _RawFrame(rows, terminated=False)

    def read(self) -> Art:
        """Read the whole document."""
        state = self.read_header()
        header = state.header
        art = Art(palette=state.palette, header=header)

        colors = header.colors if header.colors is not None else bool(state.names)
        text_pin: _RawFrame | None = None
        color_pin: _RawFrame | None = None
        bodies: list[_RawFrame] = []
        body_mode = None

        while (block := self._next_block()) is not None:
            if block == "attach":
                if not self._at_end():
                    art.attached = normalize_text(self._next_line())
            elif block in ("text-pin", "color-pin"):
                if body_mode is not None:
                    raise MalformedBody(f"@{block} must come before @body")
                if (text_pin if block == "text-pin" else color_pin) is not None:
                    raise MalformedBody(f"duplicate block: @{block}")
                pin = self._read_rows()
                if block == "text-pin":
                    text_pin = pin
                else:
                    color_pin = pin
            elif block == "body":
                if not colors or color_pin is not None:
                    body_mode = "text"
                elif text_pin is not None:
                    body_mode = "color"
                else:
                    body_mode = "both"
                while True:
                    raw = self._read_rows()
                    if not raw.rows:
                        break
                    bodies.append(raw)
                    if not raw.terminated:
                        break
            else:
                lines = self._read_rows().rows
                art.extra_blocks.append((block, lines))

        frames = self._build_frames(state, bodies, body_mode or "text", text_pin, color_pin)
        delay = state.delay or Delay()
        for i, frame in enumerate(frames):
            frame.duration = delay.frame_delay(i)
        art.frames = frames
        logger.debug("Read %d frames (%dx%d)", len(frames), art.width, art.height)
        return art

    # Frames

    def _split(self, raw: _RawFrame, mode: str) -> tuple[list[str], list[str]]:
        """Split raw rows into (text rows, color rows) for the body mode."""
        if mode == "text":
            return raw.rows, []
        if mode == "color":
            return [], raw.rows
        texts, colors = [], []
        for row in raw.rows:
            if len(row) % 2:
                if not raw.terminated and row is raw.rows[-1]:
                    raise TruncatedData("input ends inside a frame row")
                raise FrameSizeMismatch(f"row text and color channels differ in length: {row!r}")
            half = len(row) // 2
            texts.append(row[:half])
            colors.append(row[half:])
        return texts, colors

    @staticmethod
    def _check_size(raw: _RawFrame, width: int | None, height: int | None) -> tuple[int, int]:
        """Validate a raw frame against the size seen so far."""
        widths = [len(r) for r in raw.rows]
        frame_width = width if width is not None else widths[0]
        truncated = not raw.terminated
        for i, w in enumerate(widths):
            if w != frame_width:
                if truncated and i == len(widths) - 1 and w < frame_width:
                    raise TruncatedData("input ends inside a frame row")
                raise FrameSizeMismatch(f"row {i} is {w} wide, expected {frame_width}")
        if height is not None and len(raw.rows) != height:
            if truncated and len(raw.rows) < height:
                raise TruncatedData("input ends inside a frame")
            raise FrameSizeMismatch(f"frame has {len(raw.rows)} rows, expected {height}")
        return frame_width, len(raw.rows)

    def _resolve_color(self, state: _HeaderState, char: str, where: str) -> int | None:
        if char in (NO_COLOR_CHAR, ' '):
            return None
        index = state.names.get(char)
        if index is not None:
            return index
        if char in BUILTIN_COLOR_CHARS:
            return state.palette.search_or_create(ColorPair.from_builtin(char))
        raise InvalidColorIndex(f"unknown color {char!r} at {where}", name=char)

    def _build_frames(
        self,
        state: _HeaderState,
        bodies: list[_RawFrame],
        mode: str,
        text_pin: _RawFrame | None,
        color_pin: _RawFrame | None,
    ) -> list[Frame]:
        width: int | None = None
        height: int | None = None
        channels: list[tuple[list[str], list[str]]] = []

        for raw in bodies:
            if mode == "both":
                texts, colors = self._split(raw, mode)
                w, h = self._check_size(_RawFrame(texts, raw.terminated), width, height)
            else:
                w, h = self._check_size(raw, width, height)
                texts, colors = self._split(raw, mode)
            width, height = w, h
            channels.append((texts, colors))

        pin_text = self._pin_rows(text_pin, width, height)
        pin_colors = self._pin_rows(color_pin, width, height)

        frames: list[Frame] = []
        for number, (texts, colors) in enumerate(channels):
            if pin_text is not None:
                texts = pin_text
            if pin_colors is not None:
                colors = pin_colors
            rows: list[list[Cell]] = []
            for y, text in enumerate(texts):
                row = []
                for x, char in enumerate(text):
                    color = None
                    if colors:
                        color = self._resolve_color(
                            state, colors[y][x], f"frame {number}, row {y}, column {x}"
                        )
                    row.append(Cell(char, color))
                rows.append(row)
            frames.append(Frame.from_rows(rows))
        return frames

    @staticmethod
    def _pin_rows(pin: _RawFrame | None, width: int | None, height: int | None) -> list[str] | None:
        if pin is None or not pin.rows:
            return None
        if width is None:
            return pin.rows
        if len(pin.rows) != height or any(len(r) != width for r in pin.rows):
            raise FrameSizeMismatch("pinned frame does not match the body frames")
        return pin.rows


def read_current(data: bytes) -> Art:
    """Decode a current-format document."""
    return CurrentFormatReader.from_bytes(data).read()
