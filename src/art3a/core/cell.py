"""Cell - atomic unit of a frame, and the edits that can be applied to it."""

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Cell:
    """
    A single character cell.

    `color` is an index into the owning art's palette, or None for the
    terminal default.
    """
    char: str = ' '
    color: int | None = None

    def with_char(self, char: str) -> "Cell":
        return replace(self, char=char)

    def with_color(self, color: int | None) -> "Cell":
        return replace(self, color=color)

    def is_default(self) -> bool:
        """Check if this cell has default values (empty space, no color)."""
        return self.char == ' ' and self.color is None


class ColorEdit:
    """
    How a write treats the colors of the cells it touches.

    One of KEEP, CLEAR, or SetColor(index).
    """

    def apply(self, cell: Cell) -> Cell:
        raise NotImplementedError


@dataclass(frozen=True)
class Keep(ColorEdit):
    """Leave existing cell colors untouched."""

    def apply(self, cell: Cell) -> Cell:
        return cell


@dataclass(frozen=True)
class Clear(ColorEdit):
    """Reset cell colors to the terminal default."""

    def apply(self, cell: Cell) -> Cell:
        return cell.with_color(None)


@dataclass(frozen=True)
class SetColor(ColorEdit):
    """Set cell colors to a palette index."""
    index: int

    def apply(self, cell: Cell) -> Cell:
        return cell.with_color(self.index)


KEEP = Keep()
CLEAR = Clear()
