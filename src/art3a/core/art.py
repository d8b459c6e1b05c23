"""Art - high-level representation of an animated 3a artwork."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from art3a.core.cell import KEEP, Cell, ColorEdit, SetColor
from art3a.core.color import ColorPair
from art3a.core.constants import DEFAULT_DELAY_MS
from art3a.core.frame import Frame
from art3a.core.header import Header
from art3a.core.palette import Palette
from art3a.errors import FrameOutOfRange, FrameSizeMismatch, IndexOutOfRange


@dataclass
class Art:
    """
    A complete animated artwork: frames, a shared palette and metadata.

    Every cell color is an index into `palette`; the editing methods
    keep that true by validating indices before touching any cell.

    Besides the frames, an artwork can carry an attached line of text
    (`attached`) and named free-form blocks (`extra_blocks`) that are
    written back unchanged.
    """
    frames: list[Frame] = field(default_factory=list)
    palette: Palette = field(default_factory=Palette)
    header: Header = field(default_factory=Header)
    attached: str | None = None
    extra_blocks: list[tuple[str, list[str]]] = field(default_factory=list)

    @classmethod
    def new(cls, frames: int = 1, width: int = 0, height: int = 0, fill: Cell = Cell()) -> "Art":
        """Create an artwork of `frames` identical frames filled with `fill`."""
        if fill.color is not None:
            raise IndexOutOfRange(
                f"palette index {fill.color} out of range (0 entries)", fill.color, 0
            )
        art = cls()
        for _ in range(frames):
            frame = Frame(width, height)
            frame.fill(fill)
            art.frames.append(frame)
        return art

    @classmethod
    def load(cls, path: str | Path) -> "Art":
        """Load a 3a file from disk."""
        from art3a.io.reader import load
        return load(path)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Art":
        """Decode a 3a document held in memory."""
        from art3a.io.reader import load_bytes
        return load_bytes(data)

    def save(self, path: str | Path) -> None:
        """Save this artwork to disk in the current format."""
        from art3a.io.writer import save
        save(self, path)

    def to_bytes(self) -> bytes:
        from art3a.codec.writer import dumps
        return dumps(self)

    def copy(self) -> "Art":
        """Create an independent copy of this artwork."""
        return Art(
            frames=[f.copy() for f in self.frames],
            palette=self.palette.copy(),
            header=self.header.copy(),
            attached=self.attached,
            extra_blocks=[(name, list(lines)) for name, lines in self.extra_blocks],
        )

    # Dimensions

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def width(self) -> int:
        """Width of the first frame (0 when empty)."""
        return self.frames[0].width if self.frames else 0

    @property
    def height(self) -> int:
        """Height of the first frame (0 when empty)."""
        return self.frames[0].height if self.frames else 0

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    def has_color(self) -> bool:
        """True if the artwork declares or uses any color."""
        if self.header.colors is not None:
            return self.header.colors
        return len(self.palette) > 0 or any(f.has_color() for f in self.frames)

    # Validation helpers

    def _check_frame(self, index: int) -> None:
        if not 0 <= index < len(self.frames):
            raise FrameOutOfRange(index, len(self.frames))

    def _check_color(self, color: int | None) -> None:
        if color is not None:
            self.palette.get(color)

    def _check_edit(self, edit: ColorEdit) -> None:
        if isinstance(edit, SetColor):
            self._check_color(edit.index)

    # Palette

    def color(self, index: int) -> ColorPair:
        """Return the palette entry at index."""
        return self.palette.get(index)

    def search_or_create_color(self, pair: ColorPair) -> int:
        """Intern a color pair, returning its palette index."""
        return self.palette.search_or_create(pair)

    def resolve(self, cell: Cell) -> ColorPair | None:
        """Colors of a cell, or None for the terminal default."""
        return None if cell.color is None else self.palette.get(cell.color)

    # Cell editing

    def frame(self, index: int) -> Frame:
        """
        Return the frame at index.

        Raises:
            FrameOutOfRange: If there is no such frame.
        """
        self._check_frame(index)
        return self.frames[index]

    def get_cell(self, frame: int, x: int, y: int) -> Cell:
        return self.frame(frame).get(x, y)

    def set_cell(self, frame: int, x: int, y: int, cell: Cell) -> None:
        """Set one cell after checking the frame, coordinates and color."""
        target = self.frame(frame)
        self._check_color(cell.color)
        target.set(x, y, cell)

    def print(self, frame: int, x: int, y: int, text: str, color: ColorEdit = KEEP) -> None:
        """
        Write text into a frame starting at column x, row y.

        Cells outside the frame are skipped silently. `color` chooses
        whether existing colors are kept, cleared or replaced.

        Raises:
            FrameOutOfRange: If the frame does not exist.
            IndexOutOfRange: If `color` names a missing palette entry.
        """
        target = self.frame(frame)
        self._check_edit(color)
        target.print(x, y, text, color)

    def print_ansi(self, frame: int, x: int, y: int, line: str) -> None:
        """
        Write a line containing SGR color sequences into a frame.

        Colors found in the line are added to the palette as needed.
        """
        from art3a.codec.ansi_parser import parse_ansi_line

        target = self.frame(frame)
        for i, (char, pair) in enumerate(parse_ansi_line(line)):
            if not target.in_bounds(x + i, y):
                continue
            color = None if pair is None else self.palette.search_or_create(pair)
            target.set(x + i, y, Cell(char, color))

    def fill_frame(self, frame: int, cell: Cell) -> None:
        target = self.frame(frame)
        self._check_color(cell.color)
        target.fill(cell)

    def fill(self, cell: Cell) -> None:
        """Fill every frame with a cell."""
        self._check_color(cell.color)
        for f in self.frames:
            f.fill(cell)

    def fill_area(self, frame: int, x: int, y: int, w: int, h: int, cell: Cell) -> None:
        target = self.frame(frame)
        self._check_color(cell.color)
        target.fill_rect(x, y, w, h, cell)

    def shift(self, dx: int, dy: int, fill: Cell = Cell(), frame: int | None = None) -> None:
        """Scroll one frame, or every frame when `frame` is None."""
        self._check_color(fill.color)
        targets = self.frames if frame is None else [self.frame(frame)]
        for f in targets:
            f.shift(dx, dy, fill)

    # Frame list editing

    def add_frame(self, frame: Frame | None = None) -> Frame:
        """Append a frame; defaults to a copy of the last frame."""
        if frame is None:
            frame = self.frames[-1].copy() if self.frames else Frame(0, 0)
        self._check_frame_colors(frame)
        self.frames.append(frame)
        return frame

    def insert_frame(self, index: int, frame: Frame) -> None:
        if not 0 <= index <= len(self.frames):
            raise FrameOutOfRange(index, len(self.frames))
        self._check_frame_colors(frame)
        self.frames.insert(index, frame)

    def dup_frame(self, index: int) -> Frame:
        """Insert a copy of a frame right after it."""
        copy = self.frame(index).copy()
        self.frames.insert(index + 1, copy)
        return copy

    def remove_frame(self, index: int) -> Frame:
        self._check_frame(index)
        return self.frames.pop(index)

    def swap_frames(self, a: int, b: int) -> None:
        self._check_frame(a)
        self._check_frame(b)
        self.frames[a], self.frames[b] = self.frames[b], self.frames[a]

    def reverse_frames(self) -> None:
        self.frames.reverse()

    def rotate_frames(self, k: int) -> None:
        """Move the first k frames to the end (negative k rotates back)."""
        if self.frames:
            k %= len(self.frames)
            self.frames[:] = self.frames[k:] + self.frames[:k]

    def slice_frames(self, start: int, stop: int) -> None:
        """Keep only frames start..stop (inclusive)."""
        self._check_frame(start)
        self._check_frame(stop)
        self.frames[:] = self.frames[start:stop + 1]

    def dedup_frames(self) -> None:
        """Collapse runs of identical consecutive frames into one."""
        deduped: list[Frame] = []
        for f in self.frames:
            if not deduped or deduped[-1] != f:
                deduped.append(f)
        self.frames[:] = deduped

    def _check_frame_colors(self, frame: Frame) -> None:
        for index in frame.color_indices():
            self._check_color(index)

    def _pin(self, index: int, text: bool) -> None:
        source = self.frame(index)
        for f in self.frames:
            if f.size != source.size:
                raise FrameSizeMismatch(
                    f"cannot pin {source.width}x{source.height} frame onto {f.width}x{f.height} frame"
                )
        for f in self.frames:
            if f is source:
                continue
            for x, y, cell in source.cells():
                current = f.get(x, y)
                f.set(x, y, current.with_char(cell.char) if text else current.with_color(cell.color))

    def pin_text(self, index: int) -> None:
        """Copy the glyphs of one frame into every frame."""
        self._pin(index, text=True)

    def pin_color(self, index: int) -> None:
        """Copy the colors of one frame into every frame."""
        self._pin(index, text=False)

    def pinned(self) -> tuple[bool, bool]:
        """Whether glyphs and colors are identical across all frames (2+ needed)."""
        if len(self.frames) < 2:
            return False, False
        first = self.frames[0]
        if any(f.size != first.size for f in self.frames):
            return False, False
        text = all(f.text() == first.text() for f in self.frames)
        colors = all(f.colors() == first.colors() for f in self.frames)
        return text, colors

    # Timing

    def durations(self) -> list[int]:
        """Per-frame durations in milliseconds."""
        return [f.duration for f in self.frames]

    def set_duration(self, index: int, ms: int) -> None:
        """Set one frame's duration; 0 selects the default delay."""
        if ms < 0:
            raise ValueError(f"Frame duration must not be negative, got {ms}")
        self.frame(index).duration = ms or DEFAULT_DELAY_MS

    def set_all_durations(self, ms: int) -> None:
        if ms < 0:
            raise ValueError(f"Frame duration must not be negative, got {ms}")
        for f in self.frames:
            f.duration = ms or DEFAULT_DELAY_MS

    def duration(self) -> float:
        """Total running time in seconds."""
        return sum(self.durations()) / 1000

    # Metadata

    @property
    def title(self) -> str | None:
        return self.header.title

    def title_line(self) -> str:
        return self.header.title_line()

    # Rendering

    def render(self) -> str:
        """Render all frames to terminal-compatible ANSI, one after another."""
        from art3a.render.ansi import AnsiRenderer
        return AnsiRenderer().render_string(self)

    def render_to_svg(self, **kwargs) -> str:
        from art3a.render.svg import SvgRenderer
        return SvgRenderer(**kwargs).render(self)

    def render_to_asciicast(self, **kwargs) -> str:
        from art3a.render.asciicast import AsciicastRenderer
        return AsciicastRenderer(**kwargs).render(self)

    def render_to_json(self, **kwargs) -> str:
        from art3a.render.json_format import JsonRenderer
        return JsonRenderer(**kwargs).render(self)

    def render_to_text(self) -> str:
        """Render to plain text (no colors)."""
        from art3a.render.text import TextRenderer
        return "\n\n".join(TextRenderer().render(self))
