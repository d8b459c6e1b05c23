"""Frame - fixed-size 2D grid of cells with a display duration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from art3a.core.cell import KEEP, Cell, ColorEdit
from art3a.core.chars import check_glyph, normalize_text
from art3a.core.constants import DEFAULT_DELAY_MS
from art3a.errors import IndexOutOfRange


@dataclass
class Frame:
    """
    A width x height grid of Cells shown for `duration` milliseconds.

    The size is fixed at construction. Direct cell access is bounds
    checked; drawing operations (print, fill_rect) clip to the grid.
    """
    width: int
    height: int
    duration: int = DEFAULT_DELAY_MS
    _buffer: list[list[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the buffer."""
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid frame size {self.width}x{self.height}")
        if self.duration < 0:
            raise ValueError(f"Frame duration must not be negative, got {self.duration}")
        self.duration = self.duration or DEFAULT_DELAY_MS
        if not self._buffer:
            self._buffer = [[Cell()] * self.width for _ in range(self.height)]
        elif len(self._buffer) != self.height or any(len(r) != self.width for r in self._buffer):
            raise ValueError("Buffer does not match frame size")

    @classmethod
    def from_rows(cls, rows: list[list[Cell]], duration: int = DEFAULT_DELAY_MS) -> "Frame":
        """Build a frame from equally long rows of cells."""
        width = len(rows[0]) if rows else 0
        return cls(width, len(rows), duration, [list(r) for r in rows])

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not 0 <= x < self.width:
            raise IndexOutOfRange(f"x={x} out of bounds (width={self.width})", x, self.width)
        if not 0 <= y < self.height:
            raise IndexOutOfRange(f"y={y} out of bounds (height={self.height})", y, self.height)

    def get(self, x: int, y: int) -> Cell:
        """Get the cell at position (x, y)."""
        self._check(x, y)
        return self._buffer[y][x]

    def set(self, x: int, y: int, cell: Cell) -> None:
        """Set the cell at position (x, y)."""
        self._check(x, y)
        check_glyph(cell.char)
        self._buffer[y][x] = cell

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        """Get cell using indexing: frame[x, y]."""
        x, y = pos
        return self.get(x, y)

    def __setitem__(self, pos: tuple[int, int], cell: Cell) -> None:
        """Set cell using indexing: frame[x, y] = cell."""
        x, y = pos
        self.set(x, y, cell)

    def print(self, x: int, y: int, text: str, edit: ColorEdit = KEEP) -> None:
        """
        Write text left to right starting at (x, y).

        Characters landing outside the frame are skipped. Colors of the
        touched cells are handled by `edit`. The text is normalized
        first, so disallowed characters are dropped.
        """
        if not 0 <= y < self.height:
            return
        row = self._buffer[y]
        for i, char in enumerate(normalize_text(text)):
            col = x + i
            if col >= self.width:
                break
            if col < 0:
                continue
            row[col] = edit.apply(row[col].with_char(char))

    def fill(self, cell: Cell) -> None:
        """Set every cell to `cell`."""
        check_glyph(cell.char)
        for row in self._buffer:
            row[:] = [cell] * self.width

    def fill_rect(self, x: int, y: int, w: int, h: int, cell: Cell) -> None:
        """Fill a rectangle with a cell, clipped to the frame."""
        check_glyph(cell.char)
        for row in range(max(y, 0), min(y + h, self.height)):
            for col in range(max(x, 0), min(x + w, self.width)):
                self._buffer[row][col] = cell

    def fill_text(self, char: str) -> None:
        """Replace every glyph, keeping colors."""
        check_glyph(char)
        for row in self._buffer:
            row[:] = [c.with_char(char) for c in row]

    def fill_color(self, color: int | None) -> None:
        """Replace every color, keeping glyphs."""
        for row in self._buffer:
            row[:] = [c.with_color(color) for c in row]

    def shift(self, dx: int, dy: int, fill: Cell = Cell()) -> None:
        """Scroll contents by (dx, dy); vacated cells take `fill`."""
        check_glyph(fill.char)
        old = self._buffer
        self._buffer = [
            [
                old[y - dy][x - dx] if self.in_bounds(x - dx, y - dy) else fill
                for x in range(self.width)
            ]
            for y in range(self.height)
        ]

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def rows(self) -> Iterator[list[Cell]]:
        """Iterate over rows."""
        yield from self._buffer

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Iterate over all cells as (x, y, cell) tuples."""
        for y, row in enumerate(self._buffer):
            for x, cell in enumerate(row):
                yield x, y, cell

    def row_text(self, y: int) -> str:
        if not 0 <= y < self.height:
            raise IndexOutOfRange(f"y={y} out of bounds (height={self.height})", y, self.height)
        return ''.join(cell.char for cell in self._buffer[y])

    def text(self) -> list[str]:
        """Glyph channel as one string per row."""
        return [''.join(cell.char for cell in row) for row in self._buffer]

    def colors(self) -> list[list[int | None]]:
        """Color channel as one list of palette indices per row."""
        return [[cell.color for cell in row] for row in self._buffer]

    def color_indices(self) -> set[int]:
        """Distinct palette indices used by this frame."""
        return {cell.color for row in self._buffer for cell in row if cell.color is not None}

    def has_color(self) -> bool:
        return any(cell.color is not None for row in self._buffer for cell in row)

    def copy(self) -> "Frame":
        """Create an independent copy of this frame."""
        return Frame(self.width, self.height, self.duration, [list(r) for r in self._buffer])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return (
            self.size == other.size
            and self.duration == other.duration
            and self._buffer == other._buffer
        )
